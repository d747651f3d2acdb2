"""
SQL-backed record source for the analytics engine.

Each fetch opens its own session so the four collections can be read
concurrently. Range queries are widened by one day on each side; the engine
re-filters on exact local days.
"""

import logging
from datetime import datetime, time, timedelta

from pydantic import ValidationError
from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from workforce_analytics.core.config import settings
from workforce_analytics.db.models import (
    Attendance,
    Employee,
    LeaveRequest,
    OvertimeRequest,
    WorkTimeConfig,
)
from workforce_analytics.schemas.analytics import DateRange, LatenessPolicy
from workforce_analytics.schemas.records import (
    AttendanceRecord,
    EmployeeRecord,
    LeaveRecord,
    OTRecord,
)

logger = logging.getLogger(__name__)

_SLOP = timedelta(days=1)


def _query_window(date_range: DateRange) -> tuple[datetime, datetime]:
    tz = settings.tz
    start = date_range.start if date_range.start.tzinfo else date_range.start.replace(tzinfo=tz)
    end = date_range.end if date_range.end.tzinfo else date_range.end.replace(tzinfo=tz)
    start = datetime.combine(start.date(), time.min, tzinfo=start.tzinfo)
    end = datetime.combine(end.date(), time.max, tzinfo=end.tzinfo)
    return start - _SLOP, end + _SLOP


def employee_to_record(row: Employee) -> EmployeeRecord:
    return EmployeeRecord(
        id=row.id,
        name=row.name,
        employment_type=row.employment_type,
        department=row.department,
        status=row.status,
    )


def attendance_to_record(row: Attendance) -> AttendanceRecord:
    return AttendanceRecord(
        id=row.id,
        employee_id=row.employee_id,
        employee_name=row.employee_name,
        date=row.date,
        check_in=row.check_in,
        check_out=row.check_out,
        status=row.status,
    )


def overtime_to_record(row: OvertimeRequest) -> OTRecord:
    return OTRecord(
        id=row.id,
        employee_id=row.employee_id,
        date=row.date,
        start_time=row.start_time,
        end_time=row.end_time,
        approval_state=row.status,
    )


def leave_to_record(row: LeaveRequest) -> LeaveRecord:
    return LeaveRecord(
        id=row.id,
        employee_id=row.employee_id,
        leave_type=row.leave_type,
        approval_state=row.status,
        start_date=row.start_date,
        end_date=row.end_date,
    )


def _default_policy() -> LatenessPolicy:
    return LatenessPolicy(
        scheduled_check_in_hour=settings.CHECK_IN_HOUR,
        scheduled_check_in_minute=settings.CHECK_IN_MINUTE,
        grace_minutes=settings.LATE_GRACE_MINUTES,
    )


def config_to_policy(row: WorkTimeConfig | None) -> LatenessPolicy:
    """Policy from the stored config row; settings defaults when it is missing or out of range."""
    if row is None:
        return _default_policy()
    try:
        return LatenessPolicy(
            scheduled_check_in_hour=row.check_in_hour,
            scheduled_check_in_minute=row.check_in_minute,
            grace_minutes=row.late_grace_period,
        )
    except ValidationError as exc:
        logger.warning(
            "Ignoring invalid work-time config %r, using defaults: %s", row, exc.errors()
        )
        return _default_policy()


class SqlRecordSource:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def fetch_employees(self) -> list[EmployeeRecord]:
        async with self._session_factory() as session:
            result = await session.execute(select(Employee).order_by(Employee.created_at, Employee.id))
            return [employee_to_record(row) for row in result.scalars().all()]

    async def fetch_attendance(self, date_range: DateRange) -> list[AttendanceRecord]:
        dt_from, dt_to = _query_window(date_range)
        stmt = (
            select(Attendance)
            .where(Attendance.date.between(dt_from, dt_to))
            .order_by(Attendance.date, Attendance.id)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [attendance_to_record(row) for row in result.scalars().all()]

    async def fetch_overtime(self, date_range: DateRange) -> list[OTRecord]:
        dt_from, dt_to = _query_window(date_range)
        stmt = (
            select(OvertimeRequest)
            .where(OvertimeRequest.date.between(dt_from, dt_to))
            .order_by(OvertimeRequest.date, OvertimeRequest.id)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [overtime_to_record(row) for row in result.scalars().all()]

    async def fetch_leave(self, date_range: DateRange) -> list[LeaveRecord]:
        dt_from, dt_to = _query_window(date_range)
        # Overlap test; rows without any date are kept so the engine can report them
        stmt = (
            select(LeaveRequest)
            .where(
                or_(
                    and_(
                        LeaveRequest.start_date <= dt_to,
                        or_(LeaveRequest.end_date.is_(None), LeaveRequest.end_date >= dt_from),
                    ),
                    and_(LeaveRequest.start_date.is_(None), LeaveRequest.end_date.between(dt_from, dt_to)),
                    and_(LeaveRequest.start_date.is_(None), LeaveRequest.end_date.is_(None)),
                )
            )
            .order_by(LeaveRequest.created_at, LeaveRequest.id)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [leave_to_record(row) for row in result.scalars().all()]

    async def fetch_policy(self) -> LatenessPolicy:
        async with self._session_factory() as session:
            result = await session.execute(
                select(WorkTimeConfig).order_by(WorkTimeConfig.id.desc()).limit(1)
            )
            row = result.scalar_one_or_none()
        if row is None:
            logger.info("No work_time_config row; using lateness defaults from settings")
        return config_to_policy(row)
