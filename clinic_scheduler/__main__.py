"""
Run the clinic scheduler.

Usage:
    python -m clinic_scheduler          # text menu
    python -m clinic_scheduler serve    # HTTP API
"""
from __future__ import annotations

import argparse
import logging

from .config import get_settings
from .console import run_menu
from .service import SchedulingService, seed_demo_data

logger = logging.getLogger(__name__)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="clinic-scheduler", description="Doctor appointment scheduling")
    parser.add_argument("command", nargs="?", choices=["menu", "serve"], default="menu")
    parser.add_argument("--seed", action="store_true", help="load the demo doctors and patients")
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format=settings.log_format)

    service = SchedulingService()
    if args.seed or settings.seed_demo_data:
        seed_demo_data(service)

    if args.command == "serve":
        import uvicorn

        from .api import create_app

        logger.info("Starting API on %s:%s", settings.host, settings.port)
        uvicorn.run(
            create_app(service, settings),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    else:
        run_menu(service)


if __name__ == "__main__":
    main()
