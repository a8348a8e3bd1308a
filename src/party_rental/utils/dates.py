"""Calendar-date helpers shared by mappers and services."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from dateutil import parser


def to_iso_date(value: object) -> str:
    """Normalize a date, datetime or ISO string to ``YYYY-MM-DD``.

    Empty values become an empty string so records missing a date keep
    round-tripping the way the document store hands them over.
    """
    if value is None or value == "":
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return parser.isoparse(str(value)).date().isoformat()


def parse_date(value: str | date | None) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parser.isoparse(value).date()


def month_index(value: date) -> int:
    return value.year * 12 + value.month - 1


def try_parse_date(value: str | date | None) -> Optional[date]:
    """Like :func:`parse_date`, but unreadable values become ``None``."""
    try:
        return parse_date(value)
    except (ValueError, OverflowError):
        return None
