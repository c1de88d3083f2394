"""Coercion of raw header values into typed post fields."""

from __future__ import annotations

import logging
import re
from datetime import datetime

from postmeta.post.types import MIN_DATETIME

logger = logging.getLogger(__name__)

DATE_FORMATS: tuple[str, ...] = (
    "dd/MM/yyyy HH:mm",
    "d/MM/yyyy HH:mm",
    "dd/M/yyyy HH:mm",
    "d/M/yyyy HH:mm",
)

_DAY2 = r"(?P<day>[0-9]{2})"
_DAY1 = r"(?P<day>[0-9]{1,2})"
_MONTH2 = r"(?P<month>[0-9]{2})"
_MONTH1 = r"(?P<month>[0-9]{1,2})"
_YEAR_TIME = r"(?P<year>[0-9]{4}) (?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})"

# Same order as DATE_FORMATS.
_DATE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"{_DAY2}/{_MONTH2}/{_YEAR_TIME}"),
    re.compile(rf"{_DAY1}/{_MONTH2}/{_YEAR_TIME}"),
    re.compile(rf"{_DAY2}/{_MONTH1}/{_YEAR_TIME}"),
    re.compile(rf"{_DAY1}/{_MONTH1}/{_YEAR_TIME}"),
)


def parse_date(raw: str | None) -> datetime:
    """Parse a day-first ``d/M/yyyy HH:mm`` style date.

    Formats are tried in order and the first full match wins. Anything that
    does not match, or names a day that does not exist, gives ``MIN_DATETIME``.
    """
    if raw is None:
        return MIN_DATETIME
    text = raw.strip()
    for pattern in _DATE_PATTERNS:
        match = pattern.fullmatch(text)
        if match is None:
            continue
        try:
            return datetime(
                int(match.group("year")),
                int(match.group("month")),
                int(match.group("day")),
                int(match.group("hour")),
                int(match.group("minute")),
            )
        except ValueError:
            continue
    logger.debug("Unparseable date %r; using minimum date", raw)
    return MIN_DATETIME


def parse_bool(raw: str | None) -> bool:
    if raw is None:
        return False
    return raw.strip().lower() == "true"


def split_list(raw: str | None, delimiter: str = ",", *, trim: bool = False) -> list[str]:
    if raw is None:
        return []
    items = raw.split(delimiter)
    if trim:
        return [item.strip() for item in items]
    return items


def coerce_text(raw: str | None) -> str:
    return "" if raw is None else raw
