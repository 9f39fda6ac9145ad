"""Status classification for gigs.

The classifier performs an ordered scan of five rules; the first rule that
matches wins:

1. deadline already passed                         -> CLOSED
2. deadline within ``closing_soon_days`` (incl. 0) -> CLOSING SOON
3. label "urgent" and deadline further out         -> URGENT
4. posted within ``new_window_days``               -> NEW
5. anything else                                   -> OPEN

Day counts are floored, so a gig posted 23.9 hours ago is 0 days old and a
deadline 0.1 days away is 0 days out (closing soon, not yet closed).

A missing or unparseable date yields a ``None`` day count.  ``None`` fails
every range check, so such gigs fall through to the later rules.  A gig
without a deadline is treated as having an unbounded one and stays active.

The current instant is always passed in; nothing here reads the clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Optional, Union

from gig_engine.dates import (
    days_between,
    deadline_instant,
    parse_deadline,
    parse_posted_date,
)
from gig_engine.models import Gig, GigStatus, StatusPriority
from gig_engine.styling import status_color

if TYPE_CHECKING:
    from gig_engine.config import Settings

_URGENT_LABEL = "urgent"


# ---------------------------------------------------------------------------
# Rule thresholds
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StatusRules:
    """Thresholds used by the classifier.

    Parameters
    ----------
    closing_soon_days:
        A deadline this many days out (or fewer, down to 0) is CLOSING SOON.
    new_window_days:
        A gig posted this many days ago (or fewer) is NEW.
    """

    closing_soon_days: int = 3
    new_window_days: int = 2

    @classmethod
    def from_settings(cls, settings: "Settings") -> "StatusRules":
        return cls(
            closing_soon_days=settings.closing_soon_days,
            new_window_days=settings.new_window_days,
        )


DEFAULT_RULES = StatusRules()


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StatusInfo:
    """Classification of one gig at one instant.

    Built fresh on every call and never stored on the gig.

    Parameters
    ----------
    status:
        The computed :class:`~gig_engine.models.GigStatus`.
    days_since_posted:
        Whole days since posting, or ``None`` when the posted date is unknown.
    days_until_deadline:
        Whole days until the deadline (negative once passed), or ``None``
        when there is no usable deadline.
    is_active:
        False only once the deadline has passed.
    """

    status: GigStatus
    days_since_posted: Optional[int]
    days_until_deadline: Optional[int]
    is_active: bool

    @property
    def priority(self) -> StatusPriority:
        return self.status.priority

    @property
    def status_color(self) -> str:
        return status_color(self.status)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def classify_status(
    posted_date: Union[str, datetime, None],
    deadline: Union[str, date, None],
    original_status: str,
    now: datetime,
    *,
    rules: Optional[StatusRules] = None,
    strict: bool = False,
) -> StatusInfo:
    """Classify a gig from its raw fields.

    Parameters
    ----------
    posted_date:
        Posting timestamp, either raw (``"23rd September 2025, 07:15"``)
        or already parsed.
    deadline:
        ``"YYYY-MM-DD"`` string, a :class:`date`, or empty/``None`` for
        no deadline.
    original_status:
        Author-supplied label; only ``"urgent"`` (any case) affects the result.
    now:
        The instant to classify at.
    rules:
        Thresholds; :data:`DEFAULT_RULES` when omitted.
    strict:
        Raise :class:`~gig_engine.dates.DateParseError` on unparseable
        strings instead of treating them as missing.
    """
    if isinstance(posted_date, str):
        posted_date = parse_posted_date(posted_date, strict=strict)
    if isinstance(deadline, str):
        deadline = parse_deadline(deadline, strict=strict)

    rules = rules or DEFAULT_RULES

    days_since_posted = (
        days_between(posted_date, now) if posted_date is not None else None
    )
    days_until_deadline = (
        days_between(now, _as_instant(deadline)) if deadline is not None else None
    )

    status = _apply_rules(
        days_since_posted,
        days_until_deadline,
        (original_status or "").strip().lower() == _URGENT_LABEL,
        rules,
    )

    return StatusInfo(
        status=status,
        days_since_posted=days_since_posted,
        days_until_deadline=days_until_deadline,
        is_active=days_until_deadline is None or days_until_deadline >= 0,
    )


def classify_gig(
    gig: Gig,
    now: datetime,
    *,
    rules: Optional[StatusRules] = None,
) -> StatusInfo:
    """Classify an already-ingested :class:`~gig_engine.models.Gig`."""
    return classify_status(
        gig.posted_date,
        gig.deadline,
        gig.status,
        now,
        rules=rules,
    )


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _apply_rules(
    days_since_posted: Optional[int],
    days_until_deadline: Optional[int],
    flagged_urgent: bool,
    rules: StatusRules,
) -> GigStatus:
    if days_until_deadline is not None:
        if days_until_deadline < 0:
            return GigStatus.CLOSED
        if days_until_deadline <= rules.closing_soon_days:
            return GigStatus.CLOSING_SOON
        if flagged_urgent:
            return GigStatus.URGENT

    if days_since_posted is not None and days_since_posted <= rules.new_window_days:
        return GigStatus.NEW

    return GigStatus.OPEN


def _as_instant(deadline: date) -> datetime:
    if isinstance(deadline, datetime):
        return deadline
    return deadline_instant(deadline)
