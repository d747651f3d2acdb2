from collections.abc import Sequence
from datetime import date, timedelta, tzinfo
from decimal import ROUND_HALF_UP, Decimal

from workforce_analytics.schemas.analytics import DayBucket, OvertimeDay
from workforce_analytics.schemas.records import OTRecord
from workforce_analytics.services.anomalies import RecordIssues, surrogate_key
from workforce_analytics.services.calendar import local_day, to_local

_HUNDREDTH = Decimal("0.01")


def _hours(duration: timedelta) -> float:
    micros = Decimal(duration // timedelta(microseconds=1))
    return float((micros / Decimal(3_600_000_000)).quantize(_HUNDREDTH, rounding=ROUND_HALF_UP))


def aggregate_overtime(
    buckets: Sequence[DayBucket],
    records: Sequence[OTRecord],
    cohort: set[str],
    tz: tzinfo,
    issues: RecordIssues | None = None,
) -> list[OvertimeDay]:
    """
    Approved OT hours per bucket day, rounded half-up to two decimals.

    A record whose end is not after its start adds nothing; one missing
    either timestamp is skipped.
    """
    days = {b.date for b in buckets}
    totals: dict[date, timedelta] = {}

    for index, rec in enumerate(records):
        if rec.approval_state != "approved" or rec.employee_id not in cohort:
            continue
        day = local_day(rec.date, tz)
        if day not in days:
            continue
        key = rec.id or surrogate_key(rec.employee_id, day, index)
        if rec.start_time is None or rec.end_time is None:
            if issues is not None:
                issues.skip("overtime", key, "missing start or end time")
            continue
        if rec.start_time.tzinfo is not None and rec.end_time.tzinfo is not None:
            # Elapsed time, not wall-clock difference, across DST changes
            duration = rec.end_time - rec.start_time
        else:
            duration = to_local(rec.end_time, tz) - to_local(rec.start_time, tz)
        if duration <= timedelta(0):
            if issues is not None:
                issues.skip("overtime", key, "end time is not after start time")
            continue
        totals[day] = totals.get(day, timedelta(0)) + duration

    return [
        OvertimeDay(
            date=b.date,
            label=b.display_label,
            hours=_hours(totals.get(b.date, timedelta(0))),
        )
        for b in buckets
    ]
