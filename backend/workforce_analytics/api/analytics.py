"""
Analytics API routes.

Every request re-fetches the raw collections for the requested range and
recomputes the report; nothing is cached between requests.
"""

from datetime import date, datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from workforce_analytics.core.config import settings
from workforce_analytics.core.exceptions import InvalidRangeError
from workforce_analytics.db.records import SqlRecordSource
from workforce_analytics.db.session import AsyncSessionLocal
from workforce_analytics.schemas.analytics import AnalyticsResult, DailyTableRow, DateRange
from workforce_analytics.services.cohort import ALL_TYPES
from workforce_analytics.services.calendar import normalize_range
from workforce_analytics.services.engine import AnalyticsEngine, RecordSource, fetch_report_inputs
from workforce_analytics.services.export import daily_rows, to_csv

router = APIRouter()


def get_record_source() -> RecordSource:
    return SqlRecordSource(AsyncSessionLocal)


def _parse_date(val: str | None, default: date) -> date:
    if val is None:
        return default
    try:
        return date.fromisoformat(val)
    except ValueError:
        raise HTTPException(
            status_code=422,
            detail=f"Invalid ISO date: {val!r}",
        )


def _requested_range(date_from: str | None, date_to: str | None) -> DateRange:
    today = datetime.now(settings.tz).date()
    df = _parse_date(date_from, today - timedelta(days=settings.DEFAULT_RANGE_DAYS - 1))
    dt = _parse_date(date_to, today)
    if (dt - df).days + 1 > settings.MAX_RANGE_DAYS:
        raise HTTPException(
            status_code=422,
            detail=f"Range longer than {settings.MAX_RANGE_DAYS} days",
        )
    return DateRange(start=df, end=dt)


async def _build_report(
    source: RecordSource, date_from: str | None, date_to: str | None, employee_type: str
) -> AnalyticsResult:
    date_range = _requested_range(date_from, date_to)
    try:
        normalize_range(date_range, settings.tz)
    except InvalidRangeError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    raw, policy = await fetch_report_inputs(source, date_range)
    return AnalyticsEngine(policy).run(date_range, employee_type, raw)


@router.get(
    "/report",
    response_model=AnalyticsResult,
    summary="Attendance, OT and leave analytics for a date range",
)
async def get_report(
    date_from: str | None = Query(default=None, description="ISO date YYYY-MM-DD"),
    date_to: str | None = Query(default=None, description="ISO date YYYY-MM-DD"),
    employee_type: str = Query(default=ALL_TYPES, description='Employment type or "all"'),
    source: RecordSource = Depends(get_record_source),
) -> AnalyticsResult:
    return await _build_report(source, date_from, date_to, employee_type)


@router.get(
    "/daily-table",
    response_model=list[DailyTableRow],
    summary="Flat per-day present/late/absent table",
)
async def get_daily_table(
    date_from: str | None = Query(default=None, description="ISO date YYYY-MM-DD"),
    date_to: str | None = Query(default=None, description="ISO date YYYY-MM-DD"),
    employee_type: str = Query(default=ALL_TYPES),
    source: RecordSource = Depends(get_record_source),
) -> list[DailyTableRow]:
    result = await _build_report(source, date_from, date_to, employee_type)
    return daily_rows(result)


@router.get(
    "/export.csv",
    response_class=PlainTextResponse,
    summary="Per-day table as CSV (Date, Present, Late, Absent)",
)
async def export_csv(
    date_from: str | None = Query(default=None, description="ISO date YYYY-MM-DD"),
    date_to: str | None = Query(default=None, description="ISO date YYYY-MM-DD"),
    employee_type: str = Query(default=ALL_TYPES),
    source: RecordSource = Depends(get_record_source),
) -> PlainTextResponse:
    result = await _build_report(source, date_from, date_to, employee_type)
    first = result.daily_attendance[0].date
    last = result.daily_attendance[-1].date
    return PlainTextResponse(
        content=to_csv(result),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="attendance_{first}_{last}.csv"'
        },
    )
