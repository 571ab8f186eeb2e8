"""Environment driven settings. A local ``.env`` file is honoured."""
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# levels understood by both logging and uvicorn
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    seed_demo_data: bool = False
    log_level: str = "INFO"
    log_format: str = DEFAULT_LOG_FORMAT
    host: str = "0.0.0.0"
    port: int = 8000


def get_settings() -> Settings:
    """Read settings from the current environment."""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Unknown LOG_LEVEL '{log_level}', expected one of {', '.join(LOG_LEVELS)}")
    return Settings(
        api_key=os.getenv("SCHEDULER_API_KEY", ""),
        seed_demo_data=os.getenv("SEED_DEMO_DATA", "0") == "1",
        log_level=log_level,
        log_format=os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
