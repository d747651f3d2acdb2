from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from workforce_analytics.schemas.analytics import (
    DailyStat,
    LateEvent,
    LeaveTypeCount,
    SummaryStats,
)


def summarize(
    daily_stats: Sequence[DailyStat],
    late_events: Sequence[LateEvent],
    leave_counts: Sequence[LeaveTypeCount],
    cohort_size: int,
) -> SummaryStats:
    days = len(daily_stats)
    if days == 0:
        avg_attendance = 0
    else:
        arrivals = sum(d.present + d.late for d in daily_stats)
        avg_attendance = int(
            (Decimal(arrivals) / Decimal(days)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        )

    return SummaryStats(
        total_employees=cohort_size,
        avg_attendance=avg_attendance,
        total_late=len(late_events),
        total_leaves=sum(c.count for c in leave_counts),
    )
