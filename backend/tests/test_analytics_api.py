"""
Analytics HTTP surface tests.

Tests:
  - GET /api/analytics/report      → AnalyticsResult structure and values
  - GET /api/analytics/daily-table → flat rows
  - GET /api/analytics/export.csv  → CSV body and headers
  - validation: bad dates, inverted range, oversized range
  - default range ends on today in the configured timezone
"""

from __future__ import annotations

import time
from datetime import date, datetime, timedelta

import pytest
from httpx import AsyncClient

from factories import FakeRecordSource
from workforce_analytics.core.config import settings


class TestReport:
    async def test_report_structure(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/api/analytics/report",
            params={"date_from": "2024-01-10", "date_to": "2024-01-10"},
        )
        assert resp.status_code == 200, resp.text
        data = resp.json()

        for field in (
            "date_range",
            "employee_type_distribution",
            "daily_attendance",
            "ot_by_day",
            "leave_type_distribution",
            "late_events",
            "summary",
            "skipped",
        ):
            assert field in data, f"Missing field {field}"

    async def test_report_values(self, client: AsyncClient) -> None:
        """
        Sample day: D1 on time, D2 late, M1 late, M2 on time among 10 employees.
        OT 2h + 1h, one sick and one vacation leave.
        """
        resp = await client.get(
            "/api/analytics/report",
            params={"date_from": "2024-01-10", "date_to": "2024-01-10"},
        )
        assert resp.status_code == 200, resp.text
        data = resp.json()

        day = data["daily_attendance"][0]
        assert (day["date"], day["present"], day["late"], day["absent"]) == ("2024-01-10", 2, 2, 6)
        assert data["ot_by_day"] == [{"date": "2024-01-10", "label": "พ.", "hours": 3.0}]
        assert {d["leave_type"]: d["count"] for d in data["leave_type_distribution"]} == {
            "sick": 1,
            "vacation": 1,
        }
        assert data["summary"] == {
            "total_employees": 10,
            "avg_attendance": 4,
            "total_late": 2,
            "total_leaves": 2,
        }
        assert [e["key"] for e in data["late_events"]] == ["a2", "a3"]

    async def test_report_type_filter(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/api/analytics/report",
            params={"date_from": "2024-01-10", "date_to": "2024-01-10", "employee_type": "daily-wage"},
        )
        assert resp.status_code == 200, resp.text
        data = resp.json()
        assert data["summary"]["total_employees"] == 3
        assert data["employee_type_distribution"] == [{"name": "daily-wage", "value": 3}]
        assert [e["employee_id"] for e in data["late_events"]] == ["D2"]

    @pytest.mark.parametrize("process_tz", ["Etc/GMT+12", "Etc/GMT-14"])
    async def test_default_range_is_last_week(
        self, client: AsyncClient, fake_source: FakeRecordSource, monkeypatch, process_tz: str
    ) -> None:
        """The default range ends on today in the configured zone, whatever the server zone."""
        monkeypatch.setenv("TZ", process_tz)
        time.tzset()
        try:
            resp = await client.get("/api/analytics/report")
        finally:
            monkeypatch.undo()
            time.tzset()
        assert resp.status_code == 200, resp.text
        data = resp.json()
        assert len(data["daily_attendance"]) == settings.DEFAULT_RANGE_DAYS
        assert data["daily_attendance"][-1]["date"] == datetime.now(settings.tz).date().isoformat()
        assert len(fake_source.requested) == 1

    async def test_identical_requests_identical_reports(self, client: AsyncClient) -> None:
        params = {"date_from": "2024-01-08", "date_to": "2024-01-14"}
        first = await client.get("/api/analytics/report", params=params)
        second = await client.get("/api/analytics/report", params=params)
        assert first.json() == second.json()


class TestValidation:
    async def test_inverted_range(self, client: AsyncClient, fake_source: FakeRecordSource) -> None:
        resp = await client.get(
            "/api/analytics/report",
            params={"date_from": "2024-01-11", "date_to": "2024-01-10"},
        )
        assert resp.status_code == 422, resp.text
        # Nothing fetched for a rejected range
        assert fake_source.requested == []

    async def test_bad_iso_date(self, client: AsyncClient) -> None:
        resp = await client.get("/api/analytics/report", params={"date_from": "10/01/2024"})
        assert resp.status_code == 422, resp.text

    async def test_rejection_uses_current_status_code(self, client: AsyncClient, recwarn) -> None:
        resp = await client.get(
            "/api/analytics/report",
            params={"date_from": "2024-01-11", "date_to": "2024-01-10"},
        )
        assert resp.status_code == 422, resp.text
        assert not [w for w in recwarn if "UNPROCESSABLE" in str(w.message)]

    async def test_range_too_long(self, client: AsyncClient) -> None:
        start = date(2020, 1, 1)
        end = start + timedelta(days=settings.MAX_RANGE_DAYS)
        resp = await client.get(
            "/api/analytics/report",
            params={"date_from": start.isoformat(), "date_to": end.isoformat()},
        )
        assert resp.status_code == 422, resp.text


class TestExport:
    async def test_daily_table(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/api/analytics/daily-table",
            params={"date_from": "2024-01-10", "date_to": "2024-01-11"},
        )
        assert resp.status_code == 200, resp.text
        assert resp.json() == [
            {"date": "2024-01-10", "present": 2, "late": 2, "absent": 6},
            {"date": "2024-01-11", "present": 0, "late": 0, "absent": 10},
        ]

    async def test_csv(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/api/analytics/export.csv",
            params={"date_from": "2024-01-10", "date_to": "2024-01-11"},
        )
        assert resp.status_code == 200, resp.text
        assert resp.headers["content-type"].startswith("text/csv")
        assert "attendance_2024-01-10_2024-01-11.csv" in resp.headers["content-disposition"]
        assert resp.text.splitlines() == [
            "Date,Present,Late,Absent",
            "2024-01-10,2,2,6",
            "2024-01-11,0,0,10",
        ]


async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
