"""Ordering of gig collections.

:func:`sort_by_status_priority` is the default ordering: highest computed
priority first, most recently posted first within a priority tier.  Gigs
whose posted date is unknown sit at the bottom of their tier.  Python's
sort is stable, so gigs that tie on both keys keep their input order.

The status of each gig is computed only to order the collection; the
returned list holds the very same :class:`~gig_engine.models.Gig` objects
that came in.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from enum import Enum
from typing import Iterable, Optional

from gig_engine.filtering import parse_pay
from gig_engine.models import Gig
from gig_engine.status import StatusRules, classify_gig


class SortOrder(str, Enum):
    """Secondary orderings offered by the gig list."""

    PRIORITY = "priority"
    NEWEST = "newest"
    OLDEST = "oldest"
    PAY_HIGH = "pay-high"
    PAY_LOW = "pay-low"
    TITLE = "title"


def sort_by_status_priority(
    gigs: Iterable[Gig],
    now: datetime,
    *,
    rules: Optional[StatusRules] = None,
) -> list[Gig]:
    """Return a new list of *gigs* ordered by computed status priority.

    The input is never mutated.
    """
    keyed = [
        (
            classify_gig(gig, now, rules=rules).priority,
            _posted_key(gig, now.tzinfo),
            gig,
        )
        for gig in gigs
    ]
    # Two passes keep the sort stable with mixed-direction keys.
    keyed.sort(key=lambda item: item[1], reverse=True)
    keyed.sort(key=lambda item: item[0], reverse=True)
    return [gig for _, _, gig in keyed]


def sort_gigs(
    gigs: Iterable[Gig],
    now: datetime,
    order: SortOrder = SortOrder.PRIORITY,
    *,
    rules: Optional[StatusRules] = None,
) -> list[Gig]:
    """Sort by status priority, then re-sort stably by *order*.

    Gigs with an unknown posted date or unparseable pay always go last.
    """
    ranked = sort_by_status_priority(gigs, now, rules=rules)
    order = SortOrder(order)

    if order is SortOrder.NEWEST:
        ranked.sort(key=lambda g: _posted_key(g, now.tzinfo), reverse=True)
    elif order is SortOrder.OLDEST:
        ranked.sort(key=lambda g: _oldest_key(g, now.tzinfo))
    elif order is SortOrder.PAY_HIGH:
        ranked.sort(key=lambda g: _pay_key(g, descending=True))
    elif order is SortOrder.PAY_LOW:
        ranked.sort(key=lambda g: _pay_key(g, descending=False))
    elif order is SortOrder.TITLE:
        ranked.sort(key=lambda g: g.title.casefold())

    return ranked


# ---------------------------------------------------------------------------
# Sort keys
# ---------------------------------------------------------------------------


def _posted_key(gig: Gig, tz: Optional[tzinfo]) -> tuple[bool, float]:
    # (has date, timestamp): with reverse=True, missing dates sort last.
    if gig.posted_date is None:
        return (False, 0.0)
    return (True, _timestamp(gig.posted_date, tz))


def _oldest_key(gig: Gig, tz: Optional[tzinfo]) -> tuple[bool, float]:
    has_date, stamp = _posted_key(gig, tz)
    return (not has_date, stamp)


def _pay_key(gig: Gig, *, descending: bool) -> tuple[bool, float]:
    pay = parse_pay(gig.pay)
    if pay is None:
        return (True, 0.0)
    return (False, -pay if descending else pay)


def _timestamp(value: datetime, tz: Optional[tzinfo]) -> float:
    # Naive values are read in the timezone of `now`, as in days_between.
    if value.tzinfo is None and tz is not None:
        value = value.replace(tzinfo=tz)
    if value.tzinfo is None:
        return (value - datetime(1970, 1, 1)).total_seconds()
    return value.timestamp()
