from collections.abc import Sequence
from datetime import tzinfo

from workforce_analytics.schemas.analytics import DateRange, LeaveTypeCount
from workforce_analytics.schemas.records import LeaveRecord
from workforce_analytics.services.anomalies import RecordIssues
from workforce_analytics.services.calendar import local_day, normalize_range


def aggregate_leave(
    records: Sequence[LeaveRecord],
    cohort: set[str],
    date_range: DateRange,
    tz: tzinfo,
    issues: RecordIssues | None = None,
) -> list[LeaveTypeCount]:
    """
    Approved leave requests per leave type.

    A request counts once when any of its days overlaps the report range.
    Types without requests are left out, so an empty list means no leave.
    """
    normalized = normalize_range(date_range, tz)
    first_day = normalized.start.date()
    last_day = normalized.end.date()

    counts: dict[str, int] = {}
    for index, rec in enumerate(records):
        if rec.approval_state != "approved" or rec.employee_id not in cohort:
            continue
        start = rec.start_date or rec.end_date
        if start is None:
            if issues is not None:
                issues.skip("leave", rec.id or f"{rec.employee_id}:-:{index}", "no leave date")
            continue
        start_day = local_day(start, tz)
        end_day = local_day(rec.end_date, tz) if rec.end_date is not None else start_day
        if end_day < start_day:
            start_day, end_day = end_day, start_day
        if end_day < first_day or start_day > last_day:
            continue
        counts[rec.leave_type] = counts.get(rec.leave_type, 0) + 1

    return [LeaveTypeCount(leave_type=t, count=c) for t, c in counts.items()]
