"""Date normalization for gig records.

Posted dates arrive as human-formatted strings such as
``"23rd September 2025, 07:15"``; deadlines as ISO calendar dates
(``"2025-10-07"``).  Both are converted to structured values once, at
ingestion, by the helpers in this module.

Fallback policy
---------------
lenient (default)
    An unparseable string is logged and returned as ``None``.  ``None``
    behaves like an invalid date downstream: every range check against it
    is false, so the gig falls through to the posting-age rules.
strict
    An unparseable string raises :class:`DateParseError`.

An empty deadline string is never an error; it means "no deadline".
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta
from typing import Optional

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)

# "1st", "22nd", "23rd", "4th" -> "1", "22", "23", "4"
_ORDINAL_RE = re.compile(r"\b(\d{1,2})(st|nd|rd|th)\b", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")

# Tried in order after ordinal stripping.
_POSTED_FORMATS: tuple[str, ...] = (
    "%d %B %Y, %H:%M",
    "%d %B %Y %H:%M",
    "%d %B %Y",
    "%d %b %Y, %H:%M",
    "%d %b %Y %H:%M",
    "%d %b %Y",
    "%B %d, %Y, %H:%M",
    "%B %d %Y, %H:%M",
    "%B %d, %Y",
    "%B %d %Y",
)


class DateParseError(ValueError):
    """Raised in strict mode when a date string cannot be parsed."""


def strip_ordinal_suffix(value: str) -> str:
    """Remove English ordinal suffixes that directly follow a day number.

    >>> strip_ordinal_suffix("23rd September 2025, 07:15")
    '23 September 2025, 07:15'
    """
    return _ORDINAL_RE.sub(r"\1", value)


def parse_posted_date(value: str, *, strict: bool = False) -> Optional[datetime]:
    """Parse a posted-date string into a naive :class:`datetime`.

    Accepts the dashboard format (``"23rd September 2025, 07:15"``), the
    same without a time, month-first variants and ISO 8601 strings.
    """
    cleaned = _WHITESPACE_RE.sub(" ", strip_ordinal_suffix(value)).strip()
    if not cleaned:
        return _fail("posted date", value, strict)

    for fmt in _POSTED_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt)
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(cleaned)
    except ValueError:
        logger.debug("parse_posted_date: no format matched %r", cleaned)

    return _fail("posted date", value, strict)


def parse_deadline(value: str, *, strict: bool = False) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` deadline.  Empty input yields ``None``.

    A full ISO timestamp is accepted and truncated to its calendar date.
    """
    cleaned = value.strip()
    if not cleaned:
        return None

    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(cleaned).date()
    except ValueError:
        return _fail("deadline", value, strict)


def days_between(start: datetime, end: datetime) -> int:
    """Return ``floor((end - start) / 1 day)``.

    Negative spans floor towards minus infinity, so 1 hour in the past
    counts as ``-1`` days.  When exactly one side is timezone-aware the
    naive side is interpreted in the aware side's timezone.
    """
    if start.tzinfo is None and end.tzinfo is not None:
        start = start.replace(tzinfo=end.tzinfo)
    elif end.tzinfo is None and start.tzinfo is not None:
        end = end.replace(tzinfo=start.tzinfo)
    return (end - start) // _ONE_DAY


def deadline_instant(deadline: date) -> datetime:
    """Return the instant a deadline date starts (midnight)."""
    return datetime(deadline.year, deadline.month, deadline.day)


def _fail(what: str, value: str, strict: bool) -> None:
    if strict:
        raise DateParseError(f"unparseable {what}: {value!r}")
    logger.warning("Ignoring unparseable %s %r", what, value)
    return None
