"""Flat daily table and CSV export of an AnalyticsResult."""

import pandas as pd

from workforce_analytics.schemas.analytics import AnalyticsResult, DailyTableRow

TABLE_COLUMNS: list[str] = ["Date", "Present", "Late", "Absent"]


def daily_rows(result: AnalyticsResult) -> list[DailyTableRow]:
    return [
        DailyTableRow(date=d.date, present=d.present, late=d.late, absent=d.absent)
        for d in result.daily_attendance
    ]


def daily_table(result: AnalyticsResult) -> pd.DataFrame:
    """One row per day in report order, columns Date, Present, Late, Absent."""
    return pd.DataFrame(
        [
            [row.date.isoformat(), row.present, row.late, row.absent]
            for row in daily_rows(result)
        ],
        columns=TABLE_COLUMNS,
    )


def to_csv(result: AnalyticsResult) -> str:
    return daily_table(result).to_csv(index=False, lineterminator="\n")
