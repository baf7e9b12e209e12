"""Tests for VisitService — the validated-add workflow and listings."""

from __future__ import annotations

from datetime import date

import pytest

from visitctl.domain.ids import sequential_ids
from visitctl.infrastructure.journal import Journal
from visitctl.services.visits import VisitService


@pytest.fixture
def svc(journal: Journal) -> VisitService:
    return VisitService(journal, id_factory=sequential_ids())


class TestAddVisits:
    def test_records_one_visit_per_day(self, svc: VisitService, journal: Journal) -> None:
        result = svc.add_visits("JP", "2024-04-01", "2024-04-03")
        assert result.ok, result.error
        assert result.op == "add_visits"
        assert result.data["count"] == 3
        assert result.data["start"] == "2024-04-01"
        assert result.data["end"] == "2024-04-03"
        assert [i["id"] for i in result.data["items"]] == ["vst_0001", "vst_0002", "vst_0003"]
        assert [v.date for v in journal.snapshot()] == [
            date(2024, 4, 1),
            date(2024, 4, 2),
            date(2024, 4, 3),
        ]

    def test_single_day_when_end_missing(self, svc: VisitService) -> None:
        result = svc.add_visits("FR", date(2024, 5, 8))
        assert result.ok
        assert result.data["count"] == 1
        assert result.data["start"] == result.data["end"] == "2024-05-08"

    def test_appends_after_existing(self, svc: VisitService, journal: Journal) -> None:
        svc.add_visits("US", "2024-01-15")
        svc.add_visits("FR", "2024-02-10")
        assert [v.country_code for v in journal.snapshot()] == ["US", "FR"]

    def test_second_country_same_day_allowed(self, svc: VisitService) -> None:
        assert svc.add_visits("JP", "2024-04-01").ok
        assert svc.add_visits("KR", "2024-04-01").ok

    def test_day_at_capacity_rejects_all(self, svc: VisitService, journal: Journal) -> None:
        svc.add_visits("KR", "2024-04-02")
        svc.add_visits("CN", "2024-04-02")

        result = svc.add_visits("JP", "2024-04-01", "2024-04-03")

        assert not result.ok
        assert result.error is not None
        assert result.error.code == "DAY_AT_CAPACITY"
        assert result.error.detail["date"] == "2024-04-02"
        assert [v.country_code for v in journal.snapshot()] == ["KR", "CN"]

    def test_inverted_range(self, svc: VisitService, journal: Journal) -> None:
        result = svc.add_visits("JP", "2024-04-03", "2024-04-01")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_RANGE"
        assert journal.snapshot() == ()

    @pytest.mark.parametrize(
        "country,start",
        [(None, "2024-04-01"), ("", "2024-04-01"), ("JP", None), ("JP", "")],
    )
    def test_missing_selection(
        self, svc: VisitService, country: str | None, start: str | None
    ) -> None:
        result = svc.add_visits(country, start)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "MISSING_SELECTION"

    def test_invalid_date(self, svc: VisitService) -> None:
        result = svc.add_visits("JP", "2024-02-30")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_DATE"
        assert "YYYY-MM-DD" in result.error.message

    def test_reused_id_rejected(self, journal: Journal) -> None:
        VisitService(journal, id_factory=sequential_ids()).add_visits("JP", "2024-04-01")
        result = VisitService(journal, id_factory=sequential_ids()).add_visits("KR", "2024-04-05")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "DUPLICATE_ID"
        assert len(journal.snapshot()) == 1

    def test_default_ids(self, journal: Journal) -> None:
        result = VisitService(journal).add_visits("JP", "2024-04-01")
        assert result.data["items"][0]["id"].startswith("vst_")


class TestRemoveVisit:
    def test_removes(self, svc: VisitService, journal: Journal) -> None:
        svc.add_visits("JP", "2024-04-01", "2024-04-02")
        result = svc.remove_visit("vst_0001")
        assert result.ok
        assert result.data == {"id": "vst_0001"}
        assert [v.id for v in journal.snapshot()] == ["vst_0002"]

    def test_frees_capacity(self, svc: VisitService) -> None:
        svc.add_visits("KR", "2024-04-01")
        svc.add_visits("CN", "2024-04-01")
        assert not svc.add_visits("JP", "2024-04-01").ok
        svc.remove_visit("vst_0001")
        assert svc.add_visits("JP", "2024-04-01").ok

    def test_unknown_id(self, svc: VisitService) -> None:
        result = svc.remove_visit("missing")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"


class TestListVisits:
    def test_empty(self, svc: VisitService) -> None:
        result = svc.list_visits()
        assert result.ok
        assert result.data == {"count": 0, "items": []}

    def test_filters(self, svc: VisitService) -> None:
        svc.add_visits("JP", "2023-12-31", "2024-01-01")
        svc.add_visits("KR", "2024-01-01")

        assert svc.list_visits().data["count"] == 3
        assert svc.list_visits(year=2024).data["count"] == 2
        on_day = svc.list_visits(on="2024-01-01").data["items"]
        assert [i["country_code"] for i in on_day] == ["JP", "KR"]
        assert svc.list_visits(year=2023, on="2024-01-01").data["count"] == 0

    def test_invalid_on_date(self, svc: VisitService) -> None:
        result = svc.list_visits(on="yesterday")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_DATE"
