from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DateRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @field_validator("start", "end", mode="before")
    @classmethod
    def date_to_datetime(cls, v):
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime.combine(v, time.min)
        return v


class LatenessPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    scheduled_check_in_hour: int = Field(default=9, ge=0, le=23)
    scheduled_check_in_minute: int = Field(default=0, ge=0, le=59)
    grace_minutes: int = Field(default=0, ge=0)


class DayBucket(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    display_label: str


class DailyStat(BaseModel):
    date: date
    label: str
    present: int
    late: int
    absent: int


class OvertimeDay(BaseModel):
    date: date
    label: str
    hours: float


class TypeCount(BaseModel):
    name: str
    value: int


class LeaveTypeCount(BaseModel):
    leave_type: str
    count: int


class LateEvent(BaseModel):
    key: str
    employee_id: str
    employee_name: str
    date: date
    check_in_time: datetime
    late_minutes: int
    department: str | None = None


class SummaryStats(BaseModel):
    total_employees: int
    avg_attendance: int
    total_late: int
    total_leaves: int


class SkippedRecords(BaseModel):
    attendance: int = 0
    overtime: int = 0
    leave: int = 0


class AnalyticsResult(BaseModel):
    date_range: DateRange
    employee_type_distribution: list[TypeCount]
    daily_attendance: list[DailyStat]
    ot_by_day: list[OvertimeDay]
    leave_type_distribution: list[LeaveTypeCount]
    late_events: list[LateEvent]
    summary: SummaryStats
    skipped: SkippedRecords


class DailyTableRow(BaseModel):
    date: date
    present: int
    late: int
    absent: int
