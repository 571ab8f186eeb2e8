"""Error taxonomy raised by the scheduling service.

Every error is recoverable: the service leaves its collections untouched and
the caller decides how to present the message.
"""
from __future__ import annotations

from typing import Sequence


class SchedulingError(Exception):
    """Base class for all rejected scheduling operations."""


class ValidationError(SchedulingError):
    """A required text field is empty or a numeric field is not an integer."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class ReferenceNotFoundError(SchedulingError):
    """A doctor or patient id does not match any existing record."""

    def __init__(self, kind: str, entity_id: int):
        self.kind = kind
        self.entity_id = entity_id
        self.message = f"{kind.capitalize()} with ID {entity_id} not found."
        super().__init__(self.message)


class DateFormatError(SchedulingError):
    """Date/time text matches none of the accepted patterns."""

    def __init__(self, value: str, formats: Sequence[str]):
        self.value = value
        self.formats = tuple(formats)
        shown = " or ".join(f"'{_display_pattern(f)}'" for f in self.formats)
        self.message = f"Invalid date/time format '{value}'. Please use {shown}."
        super().__init__(self.message)


_PATTERN_NAMES = {"%Y": "yyyy", "%m": "MM", "%d": "dd", "%H": "HH", "%M": "mm"}


def _display_pattern(fmt: str) -> str:
    for directive, name in _PATTERN_NAMES.items():
        fmt = fmt.replace(directive, name)
    return fmt
