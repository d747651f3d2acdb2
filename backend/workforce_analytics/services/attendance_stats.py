"""
Per-day present / late / absent counts.

Only ``checked_in`` and ``late`` records speak to arrival; a record in one of
those states without a check-in timestamp is indeterminate and is neither
present nor absent. An employee is counted at most once per day, by the
earliest check-in among their qualifying records.
"""

from collections.abc import Sequence
from datetime import date, tzinfo

from workforce_analytics.schemas.analytics import DailyStat, DayBucket, LatenessPolicy
from workforce_analytics.schemas.records import AttendanceRecord
from workforce_analytics.services.anomalies import RecordIssues, surrogate_key
from workforce_analytics.services.calendar import local_day, to_local
from workforce_analytics.services.lateness import is_late

ARRIVAL_STATUSES = frozenset({"checked_in", "late"})


def first_check_ins(
    records: Sequence[AttendanceRecord],
    cohort: set[str],
    tz: tzinfo,
    issues: RecordIssues | None = None,
) -> dict[tuple[date, str], tuple[int, AttendanceRecord]]:
    """
    Earliest qualifying check-in per (local day, employee).

    Values carry the record's position in ``records`` so callers can keep
    source order.
    """
    chosen: dict[tuple[date, str], tuple[int, AttendanceRecord]] = {}
    for index, rec in enumerate(records):
        if rec.employee_id not in cohort or rec.status not in ARRIVAL_STATUSES:
            continue
        day = local_day(rec.date, tz)
        if rec.check_in is None:
            if issues is not None:
                issues.skip(
                    "attendance",
                    rec.id or surrogate_key(rec.employee_id, day, index),
                    f"status {rec.status!r} without check-in time",
                )
            continue
        key = (day, rec.employee_id)
        current = chosen.get(key)
        if current is None or to_local(rec.check_in, tz) < to_local(current[1].check_in, tz):
            chosen[key] = (index, rec)
    return chosen


def aggregate_attendance(
    buckets: Sequence[DayBucket],
    records: Sequence[AttendanceRecord],
    cohort: set[str],
    policy: LatenessPolicy,
    tz: tzinfo,
    issues: RecordIssues | None = None,
) -> list[DailyStat]:
    """Daily stats in bucket order; absent is headcount minus arrivals, floored at 0."""
    days = {b.date for b in buckets}
    in_range = [r for r in records if local_day(r.date, tz) in days]

    present: dict[date, int] = {}
    late: dict[date, int] = {}
    for (day, _employee_id), (_index, rec) in first_check_ins(
        in_range, cohort, tz, issues
    ).items():
        target = late if is_late(rec.check_in, policy, tz) else present
        target[day] = target.get(day, 0) + 1

    stats: list[DailyStat] = []
    for bucket in buckets:
        p = present.get(bucket.date, 0)
        lt = late.get(bucket.date, 0)
        stats.append(
            DailyStat(
                date=bucket.date,
                label=bucket.display_label,
                present=p,
                late=lt,
                absent=max(0, len(cohort) - (p + lt)),
            )
        )
    return stats
