import math
from datetime import datetime, timedelta, tzinfo

from workforce_analytics.schemas.analytics import LatenessPolicy
from workforce_analytics.services.calendar import to_local


def _threshold(policy: LatenessPolicy) -> timedelta:
    return timedelta(
        hours=policy.scheduled_check_in_hour,
        minutes=policy.scheduled_check_in_minute + policy.grace_minutes,
    )


def _since_midnight(check_in: datetime, tz: tzinfo) -> timedelta:
    local = to_local(check_in, tz)
    return local - local.replace(hour=0, minute=0, second=0, microsecond=0)


def is_late(check_in: datetime, policy: LatenessPolicy, tz: tzinfo) -> bool:
    """True when the local time of day is past scheduled check-in plus grace."""
    return _since_midnight(check_in, tz) > _threshold(policy)


def late_minutes(check_in: datetime, policy: LatenessPolicy, tz: tzinfo) -> int:
    """Whole minutes past the grace-adjusted check-in, rounded up; 0 if on time."""
    overshoot = _since_midnight(check_in, tz) - _threshold(policy)
    if overshoot <= timedelta(0):
        return 0
    return math.ceil(overshoot.total_seconds() / 60)
