"""
Record source mapping tests.

ORM rows are built in memory (no session) and mapped to engine records;
the work-time config row maps to the lateness policy with settings fallback,
and the seed helper creates that row only once.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone

import pytest

from workforce_analytics.core.config import settings
from workforce_analytics.db.models import (
    Attendance,
    Employee,
    LeaveRequest,
    OvertimeRequest,
    WorkTimeConfig,
)
from workforce_analytics.db.records import (
    _query_window,
    attendance_to_record,
    config_to_policy,
    employee_to_record,
    leave_to_record,
    overtime_to_record,
)
from workforce_analytics.db.seed import create_work_time_config
from workforce_analytics.schemas.analytics import DateRange

UTC = timezone.utc


class TestRowMapping:
    def test_employee(self) -> None:
        row = Employee(id="e1", name="Somchai", employment_type="daily-wage", department="Floor", status="active")
        rec = employee_to_record(row)
        assert (rec.id, rec.name, rec.employment_type, rec.department, rec.status) == (
            "e1", "Somchai", "daily-wage", "Floor", "active",
        )

    def test_attendance_keeps_missing_check_in(self) -> None:
        row = Attendance(
            id="a1",
            employee_id="e1",
            date=datetime(2024, 1, 10, tzinfo=UTC),
            check_in=None,
            status="late",
        )
        rec = attendance_to_record(row)
        assert rec.check_in is None
        assert rec.status == "late"

    def test_overtime_status_becomes_approval_state(self) -> None:
        row = OvertimeRequest(
            id="o1",
            employee_id="e1",
            date=datetime(2024, 1, 10, tzinfo=UTC),
            start_time=datetime(2024, 1, 10, 11, tzinfo=UTC),
            end_time=datetime(2024, 1, 10, 13, tzinfo=UTC),
            status="approved",
        )
        assert overtime_to_record(row).approval_state == "approved"

    def test_leave(self) -> None:
        row = LeaveRequest(
            id="l1",
            employee_id="e1",
            leave_type="sick",
            start_date=datetime(2024, 1, 10, tzinfo=UTC),
            end_date=None,
            status="pending",
        )
        rec = leave_to_record(row)
        assert (rec.leave_type, rec.approval_state, rec.end_date) == ("sick", "pending", None)


class TestPolicy:
    def test_from_config_row(self) -> None:
        row = WorkTimeConfig(check_in_hour=8, check_in_minute=30, late_grace_period=5)
        policy = config_to_policy(row)
        assert (policy.scheduled_check_in_hour, policy.scheduled_check_in_minute, policy.grace_minutes) == (8, 30, 5)

    def test_settings_fallback(self) -> None:
        policy = config_to_policy(None)
        assert policy.scheduled_check_in_hour == settings.CHECK_IN_HOUR
        assert policy.scheduled_check_in_minute == settings.CHECK_IN_MINUTE
        assert policy.grace_minutes == settings.LATE_GRACE_MINUTES

    @pytest.mark.parametrize(
        "hour, grace",
        [(25, 15), (9, -5)],
    )
    def test_out_of_range_row_falls_back_to_settings(self, hour: int, grace: int, caplog) -> None:
        row = WorkTimeConfig(check_in_hour=hour, check_in_minute=0, late_grace_period=grace)
        with caplog.at_level(logging.WARNING, logger="workforce_analytics.db.records"):
            policy = config_to_policy(row)
        assert policy == config_to_policy(None)
        assert "invalid work-time config" in caplog.text


class TestQueryWindow:
    def test_window_widened_by_a_day(self) -> None:
        dt_from, dt_to = _query_window(DateRange(start=date(2024, 1, 10), end=date(2024, 1, 12)))
        assert dt_from.date() == date(2024, 1, 9)
        assert dt_to.date() == date(2024, 1, 13)
        assert dt_from.tzinfo is not None
        assert dt_to.tzinfo is not None


class _Result:
    def __init__(self, row) -> None:
        self._row = row

    def scalar_one_or_none(self):
        return self._row


class _SeedSession:
    """Just enough of AsyncSession for the seed helper."""

    def __init__(self, existing=None) -> None:
        self.existing = existing
        self.added: list = []

    async def execute(self, stmt):
        return _Result(self.existing)

    def add(self, obj) -> None:
        self.added.append(obj)

    async def flush(self) -> None:
        pass


class TestSeed:
    async def test_creates_config_from_settings(self) -> None:
        session = _SeedSession()
        config = await create_work_time_config(session)
        assert session.added == [config]
        assert config.check_in_hour == settings.CHECK_IN_HOUR
        assert config.late_grace_period == settings.LATE_GRACE_MINUTES

    async def test_keeps_existing_config(self) -> None:
        existing = WorkTimeConfig(check_in_hour=7, check_in_minute=45, late_grace_period=10)
        session = _SeedSession(existing)
        assert await create_work_time_config(session) is existing
        assert session.added == []
