"""Unit tests for gig_engine.sorting."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from gig_engine.models import Gig
from gig_engine.sorting import SortOrder, sort_by_status_priority, sort_gigs

NOW = datetime(2025, 9, 25, 12, 0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _deadline_in(days: int) -> str:
    return (NOW.date() + timedelta(days=days + 1)).isoformat()


def _gig(gig_id, posted: str = "20th September 2025, 09:00", **kwargs) -> Gig:
    return Gig.model_validate({"id": gig_id, "postedDate": posted, **kwargs})


def _ids(gigs) -> list:
    return [g.id for g in gigs]


# ---------------------------------------------------------------------------
# Priority ordering
# ---------------------------------------------------------------------------


class TestPriorityOrder:
    def test_priority_then_recency(self):
        a = _gig("A", "5th September 2025", status="Urgent", deadline=_deadline_in(10))
        b = _gig("B", "1st September 2025", deadline=_deadline_in(2))
        c = _gig("C", "7th September 2025", status="Urgent", deadline=_deadline_in(10))
        assert _ids(sort_by_status_priority([a, b, c], NOW)) == ["B", "C", "A"]

    def test_full_status_ladder(self):
        gigs = [
            _gig("open", "1st September 2025"),
            _gig("new", "24th September 2025, 10:00"),
            _gig("urgent", status="urgent", deadline=_deadline_in(10)),
            _gig("closing", deadline=_deadline_in(1)),
            _gig("closed", deadline=_deadline_in(-2)),
        ]
        assert _ids(sort_by_status_priority(gigs, NOW)) == [
            "closed",
            "closing",
            "urgent",
            "new",
            "open",
        ]

    def test_recency_compares_parsed_dates_not_strings(self):
        # As strings "9th" > "10th"; as dates the 10th is more recent.
        older = _gig("older", "9th September 2025")
        newer = _gig("newer", "10th September 2025")
        assert _ids(sort_by_status_priority([older, newer], NOW)) == ["newer", "older"]

    def test_ties_keep_input_order(self):
        gigs = [_gig(i, "1st September 2025") for i in range(5)]
        assert _ids(sort_by_status_priority(gigs, NOW)) == [0, 1, 2, 3, 4]

    def test_unknown_posted_date_last_within_tier(self):
        undated = _gig("undated", "whenever")
        dated = _gig("dated", "1st September 2025")
        assert _ids(sort_by_status_priority([undated, dated], NOW)) == [
            "dated",
            "undated",
        ]

    def test_naive_dates_read_in_timezone_of_now(self):
        # 11:00 at +02:00 is 09:00Z, an hour before the aware gig.
        now = datetime(2025, 9, 25, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        naive = _gig("naive", "2025-09-10T11:00")
        aware = _gig("aware", "2025-09-10T10:00+00:00")
        assert _ids(sort_by_status_priority([naive, aware], now)) == ["aware", "naive"]

    def test_naive_dates_read_in_timezone_of_now_for_newest(self):
        now = datetime(2025, 9, 25, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        naive = _gig("naive", "2025-09-10T11:00")
        aware = _gig("aware", "2025-09-10T10:00+00:00")
        assert _ids(sort_gigs([naive, aware], now, SortOrder.NEWEST)) == ["aware", "naive"]
        assert _ids(sort_gigs([naive, aware], now, SortOrder.OLDEST)) == ["naive", "aware"]

    def test_empty_input(self):
        assert sort_by_status_priority([], NOW) == []

    def test_accepts_any_iterable(self):
        gigs = (_gig(i) for i in range(3))
        assert len(sort_by_status_priority(gigs, NOW)) == 3


# ---------------------------------------------------------------------------
# Non-mutation
# ---------------------------------------------------------------------------


class TestNonMutation:
    def test_input_list_unchanged(self):
        gigs = [
            _gig("old", "1st September 2025"),
            _gig("closing", deadline=_deadline_in(1)),
        ]
        snapshot = list(gigs)
        result = sort_by_status_priority(gigs, NOW)
        assert gigs == snapshot
        assert result is not gigs

    def test_returns_same_objects_unannotated(self):
        gigs = [_gig("x", deadline=_deadline_in(1)), _gig("y")]
        dumps = {g.id: g.model_dump() for g in gigs}
        for gig in sort_by_status_priority(gigs, NOW):
            assert any(gig is original for original in gigs)
            assert gig.model_dump() == dumps[gig.id]
            assert not hasattr(gig, "dynamic_status")


# ---------------------------------------------------------------------------
# Secondary orderings
# ---------------------------------------------------------------------------


class TestSortGigs:
    @pytest.fixture()
    def gigs(self) -> list[Gig]:
        return [
            _gig("mid", "10th September 2025", title="Paint fence", pay="R120"),
            _gig("new", "24th September 2025", title="assemble desk", pay="R80"),
            _gig("old", "1st September 2025", title="Wash car", pay="Negotiable"),
            _gig("closing", "5th September 2025", title="Move boxes", pay="R300",
                 deadline=_deadline_in(1)),
        ]

    def test_default_is_priority(self, gigs):
        assert _ids(sort_gigs(gigs, NOW)) == _ids(sort_by_status_priority(gigs, NOW))

    def test_newest(self, gigs):
        assert _ids(sort_gigs(gigs, NOW, SortOrder.NEWEST)) == [
            "new", "mid", "closing", "old",
        ]

    def test_oldest(self, gigs):
        assert _ids(sort_gigs(gigs, NOW, SortOrder.OLDEST)) == [
            "old", "closing", "mid", "new",
        ]

    def test_pay_high_unparseable_last(self, gigs):
        assert _ids(sort_gigs(gigs, NOW, SortOrder.PAY_HIGH)) == [
            "closing", "mid", "new", "old",
        ]

    def test_pay_low_unparseable_last(self, gigs):
        assert _ids(sort_gigs(gigs, NOW, SortOrder.PAY_LOW)) == [
            "new", "mid", "closing", "old",
        ]

    def test_title_case_insensitive(self, gigs):
        assert _ids(sort_gigs(gigs, NOW, SortOrder.TITLE)) == [
            "new", "closing", "mid", "old",
        ]

    def test_order_accepts_string_value(self, gigs):
        assert _ids(sort_gigs(gigs, NOW, "pay-high"))[0] == "closing"

    def test_unknown_order_rejected(self, gigs):
        with pytest.raises(ValueError):
            sort_gigs(gigs, NOW, "random")

    def test_undated_last_for_oldest(self):
        gigs = [_gig("undated", "whenever"), _gig("dated", "1st September 2025")]
        assert _ids(sort_gigs(gigs, NOW, SortOrder.OLDEST)) == ["dated", "undated"]
