from collections.abc import Mapping, Sequence
from datetime import tzinfo

from workforce_analytics.schemas.analytics import LateEvent, LatenessPolicy
from workforce_analytics.schemas.records import AttendanceRecord, EmployeeRecord
from workforce_analytics.services.anomalies import surrogate_key
from workforce_analytics.services.attendance_stats import first_check_ins
from workforce_analytics.services.lateness import is_late, late_minutes


def build_late_roster(
    records: Sequence[AttendanceRecord],
    cohort: set[str],
    policy: LatenessPolicy,
    employees_by_id: Mapping[str, EmployeeRecord],
    tz: tzinfo,
) -> list[LateEvent]:
    """
    Individual late arrivals, most recent day first.

    Same-day events keep the order of their records in ``records``.
    """
    picked = sorted(first_check_ins(records, cohort, tz).items(), key=lambda kv: kv[1][0])

    events: list[LateEvent] = []
    for (day, employee_id), (index, rec) in picked:
        if not is_late(rec.check_in, policy, tz):
            continue
        employee = employees_by_id.get(employee_id)
        events.append(
            LateEvent(
                key=rec.id or surrogate_key(employee_id, day, index),
                employee_id=employee_id,
                employee_name=(employee.name if employee else rec.employee_name) or employee_id,
                date=day,
                check_in_time=rec.check_in,
                late_minutes=late_minutes(rec.check_in, policy, tz),
                department=employee.department if employee else None,
            )
        )

    # sorted() is stable, reverse included
    return sorted(events, key=lambda e: e.date, reverse=True)
