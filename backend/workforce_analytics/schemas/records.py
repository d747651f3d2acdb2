"""
Raw record snapshots handed to the analytics engine.

Field names mirror the storage documents; optional fields stay optional so
that every missing timestamp is an explicit branch in the aggregators.
"""

from datetime import date, datetime, time
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

AttendanceStatus = Literal["checked_in", "checked_out", "on_leave", "late", "mid_day"]
ApprovalState = Literal["pending", "approved", "rejected"]
EmployeeStatus = Literal["active", "resigned", "terminated"]


def _as_datetime(v):
    # A bare date means local midnight of that day
    if isinstance(v, date) and not isinstance(v, datetime):
        return datetime.combine(v, time.min)
    return v


class EmployeeRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    employment_type: str
    department: str | None = None
    status: EmployeeStatus = "active"


class AttendanceRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str | None = None
    employee_id: str
    employee_name: str | None = None
    date: datetime
    check_in: datetime | None = None
    check_out: datetime | None = None
    status: AttendanceStatus

    @field_validator("date", mode="before")
    @classmethod
    def date_to_datetime(cls, v):
        return _as_datetime(v)


class OTRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str | None = None
    employee_id: str
    date: datetime
    start_time: datetime | None = None
    end_time: datetime | None = None
    approval_state: ApprovalState

    @field_validator("date", mode="before")
    @classmethod
    def date_to_datetime(cls, v):
        return _as_datetime(v)


class LeaveRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str | None = None
    employee_id: str
    leave_type: str
    approval_state: ApprovalState
    start_date: datetime | None = None
    end_date: datetime | None = None  # None: single-day leave

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def date_to_datetime(cls, v):
        return _as_datetime(v)


class RawRecords(BaseModel):
    model_config = ConfigDict(frozen=True)

    employees: list[EmployeeRecord] = []
    attendance: list[AttendanceRecord] = []
    overtime: list[OTRecord] = []
    leave: list[LeaveRecord] = []
