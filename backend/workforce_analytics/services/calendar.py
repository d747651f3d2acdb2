"""
Day bucketing for report ranges.

Every comparison happens on local calendar days: naive datetimes are taken
as already local, aware ones are converted to the report timezone first.
"""

from datetime import date, datetime, time, timedelta, tzinfo

from workforce_analytics.core.exceptions import InvalidRangeError
from workforce_analytics.schemas.analytics import DateRange, DayBucket

_WEEKDAY_LABELS: dict[str, tuple[str, ...]] = {
    "th": ("จ.", "อ.", "พ.", "พฤ.", "ศ.", "ส.", "อา."),
    "en": ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
}

_END_OF_DAY = time(23, 59, 59, 999000)


def to_local(value: datetime, tz: tzinfo) -> datetime:
    """Naive local wall-clock time for ``value``."""
    if value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)


def local_day(value: datetime, tz: tzinfo) -> date:
    return to_local(value, tz).date()


def day_label(d: date, locale: str = "th") -> str:
    labels = _WEEKDAY_LABELS.get(locale, _WEEKDAY_LABELS["en"])
    return labels[d.weekday()]


def normalize_range(date_range: DateRange, tz: tzinfo) -> DateRange:
    """
    Snap both bounds to local day boundaries.

    Raises InvalidRangeError when start is after end.
    """
    start = to_local(date_range.start, tz)
    end = to_local(date_range.end, tz)
    if start > end:
        raise InvalidRangeError(date_range.start, date_range.end)
    return DateRange(
        start=datetime.combine(start.date(), time.min),
        end=datetime.combine(end.date(), _END_OF_DAY),
    )


def expand(date_range: DateRange, tz: tzinfo, locale: str = "th") -> list[DayBucket]:
    """One bucket per local calendar day, start through end inclusive."""
    normalized = normalize_range(date_range, tz)
    buckets: list[DayBucket] = []
    cur = normalized.start.date()
    end = normalized.end.date()
    while cur <= end:
        buckets.append(DayBucket(date=cur, display_label=day_label(cur, locale)))
        cur += timedelta(days=1)
    return buckets
