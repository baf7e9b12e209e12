"""Tests for range expansion and the day-capacity rule."""

from datetime import date, datetime, timedelta

import pytest

from tests.conftest import make_visits
from visitctl.domain.calendar import can_add_visit_to_date, expand_date_range, plan_visits
from visitctl.domain.errors import DayAtCapacity, InvalidRange, MissingSelection
from visitctl.domain.ids import sequential_ids


class TestExpandDateRange:
    def test_single_day(self) -> None:
        assert expand_date_range(date(2024, 4, 1), date(2024, 4, 1)) == [date(2024, 4, 1)]

    def test_inclusive_bounds(self) -> None:
        days = expand_date_range(date(2024, 4, 1), date(2024, 4, 3))
        assert days == [date(2024, 4, 1), date(2024, 4, 2), date(2024, 4, 3)]

    @pytest.mark.parametrize(
        "start,end",
        [
            (date(2024, 2, 27), date(2024, 3, 2)),  # leap February
            (date(2023, 12, 30), date(2024, 1, 2)),  # year boundary
            (date(2024, 1, 1), date(2024, 12, 31)),  # whole leap year
        ],
    )
    def test_length_order_and_bounds(self, start: date, end: date) -> None:
        days = expand_date_range(start, end)
        assert len(days) == (end - start).days + 1
        assert days == sorted(set(days))
        assert days[0] == start
        assert days[-1] == end

    def test_leap_day_included(self) -> None:
        days = expand_date_range(date(2024, 2, 28), date(2024, 3, 1))
        assert date(2024, 2, 29) in days
        assert len(days) == 3

    def test_time_of_day_ignored(self) -> None:
        days = expand_date_range(datetime(2024, 4, 1, 18, 0), datetime(2024, 4, 2, 6, 0))
        assert days == [date(2024, 4, 1), date(2024, 4, 2)]
        assert all(type(d) is date for d in days)

    def test_restartable(self) -> None:
        start, end = date(2024, 4, 1), date(2024, 4, 10)
        assert expand_date_range(start, end) == expand_date_range(start, end)

    def test_end_before_start_rejected(self) -> None:
        with pytest.raises(InvalidRange) as exc_info:
            expand_date_range(date(2024, 4, 2), date(2024, 4, 1))
        assert exc_info.value.code == "INVALID_RANGE"
        assert exc_info.value.detail == {"start": "2024-04-02", "end": "2024-04-01"}


class TestCanAddVisitToDate:
    def test_empty_ledger(self) -> None:
        assert can_add_visit_to_date(date(2024, 4, 1), [])

    def test_one_existing(self) -> None:
        ledger = make_visits(("JP", "2024-04-01"))
        assert can_add_visit_to_date(date(2024, 4, 1), ledger)

    def test_two_existing(self) -> None:
        ledger = make_visits(("JP", "2024-04-01"), ("KR", "2024-04-01"))
        assert not can_add_visit_to_date(date(2024, 4, 1), ledger)

    def test_over_capacity_ledger_still_full(self) -> None:
        ledger = make_visits(("JP", "2024-04-01"), ("KR", "2024-04-01"), ("CN", "2024-04-01"))
        assert not can_add_visit_to_date(date(2024, 4, 1), ledger)

    def test_same_country_twice_counts(self) -> None:
        """The limit is on count, not on distinct countries."""
        ledger = make_visits(("JP", "2024-04-01"), ("JP", "2024-04-01"))
        assert not can_add_visit_to_date(date(2024, 4, 1), ledger)

    def test_other_days_ignored(self) -> None:
        ledger = make_visits(("JP", "2024-03-31"), ("KR", "2024-04-02"), ("CN", "2023-04-01"))
        assert can_add_visit_to_date(date(2024, 4, 1), ledger)

    def test_datetime_query(self) -> None:
        ledger = make_visits(("JP", "2024-04-01"), ("KR", "2024-04-01"))
        assert not can_add_visit_to_date(datetime(2024, 4, 1, 15, 30), ledger)


class TestPlanVisits:
    def test_one_record_per_day(self) -> None:
        planned = plan_visits(
            "JP", date(2024, 4, 1), date(2024, 4, 3), [], id_factory=sequential_ids()
        )
        assert [v.id for v in planned] == ["vst_0001", "vst_0002", "vst_0003"]
        assert {v.country_code for v in planned} == {"JP"}
        assert [v.date for v in planned] == expand_date_range(date(2024, 4, 1), date(2024, 4, 3))

    def test_missing_end_is_single_day(self) -> None:
        planned = plan_visits("JP", date(2024, 4, 1), None, [], id_factory=sequential_ids())
        assert len(planned) == 1
        assert planned[0].date == date(2024, 4, 1)

    def test_default_ids_are_unique(self) -> None:
        planned = plan_visits("JP", date(2024, 4, 1), date(2024, 4, 30), [])
        assert len({v.id for v in planned}) == 30

    def test_day_with_one_visit_accepts(self) -> None:
        ledger = make_visits(("KR", "2024-04-02"))
        planned = plan_visits("JP", date(2024, 4, 1), date(2024, 4, 3), ledger)
        assert len(planned) == 3

    def test_day_at_capacity_rejects_whole_range(self) -> None:
        ledger = make_visits(("KR", "2024-04-02"), ("CN", "2024-04-02"))
        ids = sequential_ids()
        with pytest.raises(DayAtCapacity) as exc_info:
            plan_visits("JP", date(2024, 4, 1), date(2024, 4, 3), ledger, id_factory=ids)
        assert exc_info.value.day == date(2024, 4, 2)
        assert exc_info.value.code == "DAY_AT_CAPACITY"
        assert "2024-04-02" in exc_info.value.message
        # Nothing was built, so no id was consumed.
        assert ids() == "vst_0001"

    def test_first_full_day_reported(self) -> None:
        ledger = make_visits(
            ("KR", "2024-04-05"),
            ("CN", "2024-04-05"),
            ("KR", "2024-04-03"),
            ("CN", "2024-04-03"),
        )
        with pytest.raises(DayAtCapacity) as exc_info:
            plan_visits("JP", date(2024, 4, 1), date(2024, 4, 6), ledger)
        assert exc_info.value.detail == {"date": "2024-04-03", "capacity": 2}

    def test_batch_days_do_not_count_against_each_other(self) -> None:
        """Each day of the request is checked against committed visits only."""
        ledger = make_visits(("KR", "2024-04-01"), ("KR", "2024-04-02"))
        planned = plan_visits("JP", date(2024, 4, 1), date(2024, 4, 2), ledger)
        assert len(planned) == 2

    def test_ledger_not_mutated(self) -> None:
        ledger = make_visits(("KR", "2024-04-02"))
        plan_visits("JP", date(2024, 4, 1), date(2024, 4, 3), ledger)
        assert len(ledger) == 1

    def test_country_code_stripped(self) -> None:
        planned = plan_visits(" JP ", date(2024, 4, 1), None, [])
        assert planned[0].country_code == "JP"

    @pytest.mark.parametrize("code", [None, "", "  "])
    def test_missing_country(self, code: str | None) -> None:
        with pytest.raises(MissingSelection) as exc_info:
            plan_visits(code, date(2024, 4, 1), None, [])
        assert exc_info.value.detail == {"field": "country"}
        assert exc_info.value.code == "MISSING_SELECTION"

    def test_missing_date(self) -> None:
        with pytest.raises(MissingSelection) as exc_info:
            plan_visits("JP", None, date(2024, 4, 1), [])
        assert exc_info.value.detail == {"field": "date"}

    def test_missing_selection_checked_before_range(self) -> None:
        with pytest.raises(MissingSelection):
            plan_visits("", date(2024, 4, 2), date(2024, 4, 1), [])

    def test_inverted_range(self) -> None:
        with pytest.raises(InvalidRange):
            plan_visits("JP", date(2024, 4, 2), date(2024, 4, 1), [])

    def test_long_range(self) -> None:
        start = date(2024, 1, 1)
        planned = plan_visits("JP", start, start + timedelta(days=365), [])
        assert len(planned) == 366
