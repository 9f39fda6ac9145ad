"""Filtering and aggregation over gig collections.

Filtering rules (all must pass; an unset criterion always passes):
1. ``search``        case-insensitive substring of title, description or author.
2. ``type``          exact match on the gig type.
3. ``status``        exact match on the *computed* status at ``now``.
4. ``location``      exact match on the location string.
5. ``pay_range``     numeric pay parsed from the display string.
6. ``posted_within`` whole days since posting.

Gigs whose pay or posted date cannot be read fail the corresponding
numeric criterion.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from gig_engine.dates import days_between
from gig_engine.models import Gig, GigStatus
from gig_engine.status import StatusRules, classify_gig

_NON_NUMERIC_RE = re.compile(r"[^0-9.]")
_LEADING_NUMBER_RE = re.compile(r"^\d*\.?\d+")


class PayRange(str, Enum):
    """Pay buckets offered by the gig list filter."""

    UNDER_50 = "under-50"
    FROM_50_TO_100 = "50-100"
    FROM_100_TO_200 = "100-200"
    OVER_200 = "over-200"

    def contains(self, pay: float) -> bool:
        if self is PayRange.UNDER_50:
            return pay < 50
        if self is PayRange.FROM_50_TO_100:
            return 50 <= pay <= 100
        if self is PayRange.FROM_100_TO_200:
            return 100 <= pay <= 200
        return pay > 200


class PostedWithin(str, Enum):
    """Posting-age windows offered by the gig list filter."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"

    @property
    def max_days(self) -> int:
        return {"today": 0, "week": 7, "month": 30}[self.value]


@dataclass(frozen=True)
class FilterOptions:
    """Distinct values present in a collection, in first-seen order."""

    types: tuple[str, ...]
    statuses: tuple[GigStatus, ...]
    locations: tuple[str, ...]


def parse_pay(pay: str) -> Optional[float]:
    """Return the numeric value of a pay display string.

    Every character other than digits and ``.`` is dropped first, so
    ``"R1,500"`` reads as ``1500``.  Returns ``None`` when no number remains.
    """
    match = _LEADING_NUMBER_RE.match(_NON_NUMERIC_RE.sub("", pay or ""))
    return float(match.group()) if match else None


@dataclass(frozen=True)
class GigFilter:
    """Immutable value object describing which gigs to keep.

    Parameters
    ----------
    search:
        Case-insensitive substring matched against title, description and
        ``posted_by``.  Empty means "no search".
    type:
        Gig type to keep, or ``None`` for any.
    status:
        Computed status to keep, or ``None`` for any.
    location:
        Exact location to keep, or ``None`` for any.
    pay_range:
        :class:`PayRange` bucket, or ``None`` for any.
    posted_within:
        :class:`PostedWithin` window, or ``None`` for any.
    rules:
        Thresholds used when computing ``status``.
    """

    search: str = ""
    type: Optional[str] = None
    status: Optional[GigStatus] = None
    location: Optional[str] = None
    pay_range: Optional[PayRange] = None
    posted_within: Optional[PostedWithin] = None
    rules: Optional[StatusRules] = None

    def matches(self, gig: Gig, now: datetime) -> bool:
        """Return *True* if *gig* passes every configured criterion."""
        if self.search:
            needle = self.search.lower()
            haystacks = (gig.title, gig.description, gig.posted_by)
            if not any(needle in h.lower() for h in haystacks):
                return False

        if self.type and gig.type != self.type:
            return False

        if self.status is not None:
            if classify_gig(gig, now, rules=self.rules).status is not GigStatus(self.status):
                return False

        if self.location and gig.location != self.location:
            return False

        if self.pay_range is not None:
            pay = parse_pay(gig.pay)
            if pay is None or not PayRange(self.pay_range).contains(pay):
                return False

        if self.posted_within is not None:
            if gig.posted_date is None:
                return False
            age = days_between(gig.posted_date, now)
            if age > PostedWithin(self.posted_within).max_days:
                return False

        return True


def apply_gig_filter(
    gigs: Iterable[Gig],
    gig_filter: GigFilter,
    now: datetime,
) -> list[Gig]:
    """Return the subset of *gigs* that pass *gig_filter*, order preserved."""
    return [g for g in gigs if gig_filter.matches(g, now)]


def status_counts(
    gigs: Iterable[Gig],
    now: datetime,
    *,
    rules: Optional[StatusRules] = None,
) -> dict[GigStatus, int]:
    """Count gigs per computed status.  Every status has a key."""
    counts = {status: 0 for status in GigStatus}
    for gig in gigs:
        counts[classify_gig(gig, now, rules=rules).status] += 1
    return counts


def filter_options(
    gigs: Iterable[Gig],
    now: datetime,
    *,
    rules: Optional[StatusRules] = None,
) -> FilterOptions:
    """Collect the distinct types, computed statuses and locations."""
    types: dict[str, None] = {}
    statuses: dict[GigStatus, None] = {}
    locations: dict[str, None] = {}
    for gig in gigs:
        types.setdefault(gig.type)
        statuses.setdefault(classify_gig(gig, now, rules=rules).status)
        locations.setdefault(gig.location)
    return FilterOptions(tuple(types), tuple(statuses), tuple(locations))


def notification_candidates(
    gigs: Iterable[Gig],
    now: datetime,
    *,
    rules: Optional[StatusRules] = None,
    limit: Optional[int] = 3,
) -> list[Gig]:
    """Return the gigs that currently warrant a "new/urgent" notification.

    At most *limit* gigs are returned, first matches first.  Pass
    ``limit=None`` for every match.
    """
    wanted = {GigStatus.NEW, GigStatus.URGENT}
    matches = [g for g in gigs if classify_gig(g, now, rules=rules).status in wanted]
    return matches if limit is None else matches[:limit]
