"""
Analytics engine: turns raw record collections into one AnalyticsResult.

``AnalyticsEngine.run`` is synchronous and pure. Fetching belongs to the
caller; ``fetch_raw_records`` gathers the four collections concurrently from
a RecordSource before the engine runs.
"""

import asyncio
import logging
from datetime import tzinfo
from typing import Protocol

from workforce_analytics.core.config import settings
from workforce_analytics.schemas.analytics import AnalyticsResult, DateRange, LatenessPolicy
from workforce_analytics.schemas.records import (
    AttendanceRecord,
    EmployeeRecord,
    LeaveRecord,
    OTRecord,
    RawRecords,
)
from workforce_analytics.services.anomalies import RecordIssues
from workforce_analytics.services.attendance_stats import aggregate_attendance
from workforce_analytics.services.calendar import expand, local_day, normalize_range
from workforce_analytics.services.cohort import employee_type_distribution, resolve_cohort
from workforce_analytics.services.late_roster import build_late_roster
from workforce_analytics.services.leave_stats import aggregate_leave
from workforce_analytics.services.overtime_stats import aggregate_overtime
from workforce_analytics.services.summary import summarize

logger = logging.getLogger(__name__)


class RecordSource(Protocol):
    async def fetch_employees(self) -> list[EmployeeRecord]: ...

    async def fetch_attendance(self, date_range: DateRange) -> list[AttendanceRecord]: ...

    async def fetch_overtime(self, date_range: DateRange) -> list[OTRecord]: ...

    async def fetch_leave(self, date_range: DateRange) -> list[LeaveRecord]: ...

    async def fetch_policy(self) -> LatenessPolicy: ...


async def _gather_or_cancel(*coros) -> list:
    """Await all; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(c) for c in coros]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def fetch_raw_records(source: RecordSource, date_range: DateRange) -> RawRecords:
    """
    Fetch employees, attendance, OT and leave concurrently.

    If any fetch fails the remaining ones are cancelled and the error
    propagates; nothing partial is returned.
    """
    employees, attendance, overtime, leave = await _gather_or_cancel(
        source.fetch_employees(),
        source.fetch_attendance(date_range),
        source.fetch_overtime(date_range),
        source.fetch_leave(date_range),
    )

    logger.debug(
        "Fetched %d employees, %d attendance, %d OT, %d leave records",
        len(employees), len(attendance), len(overtime), len(leave),
    )
    return RawRecords(
        employees=employees, attendance=attendance, overtime=overtime, leave=leave
    )


async def fetch_report_inputs(
    source: RecordSource, date_range: DateRange
) -> tuple[RawRecords, LatenessPolicy]:
    """Raw collections plus the current lateness policy, fetched together."""
    raw, policy = await _gather_or_cancel(
        fetch_raw_records(source, date_range),
        source.fetch_policy(),
    )
    return raw, policy


class AnalyticsEngine:
    def __init__(
        self,
        policy: LatenessPolicy,
        tz: tzinfo | None = None,
        label_locale: str | None = None,
    ) -> None:
        self.policy = policy
        self.tz = tz or settings.tz
        self.label_locale = label_locale or settings.DAY_LABEL_LOCALE

    def run(self, date_range: DateRange, type_filter: str, raw: RawRecords) -> AnalyticsResult:
        """
        Build the full report for ``date_range`` and ``type_filter``.

        Raises InvalidRangeError before any aggregation when the range is
        inverted.
        """
        normalized = normalize_range(date_range, self.tz)
        buckets = expand(normalized, self.tz, self.label_locale)
        cohort = resolve_cohort(raw.employees, type_filter)
        issues = RecordIssues()

        days = {b.date for b in buckets}
        attendance = [r for r in raw.attendance if local_day(r.date, self.tz) in days]
        employees_by_id = {emp.id: emp for emp in raw.employees}

        daily = aggregate_attendance(buckets, attendance, cohort, self.policy, self.tz, issues)
        ot_by_day = aggregate_overtime(buckets, raw.overtime, cohort, self.tz, issues)
        leave_counts = aggregate_leave(raw.leave, cohort, normalized, self.tz, issues)
        late_events = build_late_roster(
            attendance, cohort, self.policy, employees_by_id, self.tz
        )

        result = AnalyticsResult(
            date_range=normalized,
            employee_type_distribution=employee_type_distribution(raw.employees, cohort),
            daily_attendance=daily,
            ot_by_day=ot_by_day,
            leave_type_distribution=leave_counts,
            late_events=late_events,
            summary=summarize(daily, late_events, leave_counts, len(cohort)),
            skipped=issues.summary(),
        )
        logger.info(
            "Analytics report %s..%s type=%s: %d days, cohort=%d, late=%d, skipped=%s",
            buckets[0].date, buckets[-1].date, type_filter,
            len(buckets), len(cohort), len(late_events), result.skipped.model_dump(),
        )
        return result
