import uuid
from datetime import datetime

from sqlalchemy import (
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

_APPROVAL_STATES = ("pending", "approved", "rejected")


def _new_id() -> str:
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    pass


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    employee_code: Mapped[str | None] = mapped_column(String(32), unique=True, nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    employment_type: Mapped[str] = mapped_column(String(50), nullable=False)
    position: Mapped[str | None] = mapped_column(String(100), nullable=True)
    department: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(
        Enum("active", "resigned", "terminated", name="employee_status"),
        nullable=False,
        default="active",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    attendance: Mapped[list["Attendance"]] = relationship(
        "Attendance", back_populates="employee", lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<Employee id={self.id} name={self.name} type={self.employment_type}>"


class Attendance(Base):
    __tablename__ = "attendance"

    __table_args__ = (
        Index("ix_attendance_employee_date", "employee_id", "date"),
        Index("ix_attendance_date", "date"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    employee_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False
    )
    employee_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    check_in: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    check_out: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(
        Enum(
            "checked_in", "checked_out", "on_leave", "late", "mid_day",
            name="attendance_status",
        ),
        nullable=False,
    )
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    employee: Mapped["Employee"] = relationship("Employee", back_populates="attendance")

    def __repr__(self) -> str:
        return (
            f"<Attendance id={self.id} employee_id={self.employee_id} "
            f"date={self.date} status={self.status}>"
        )


class OvertimeRequest(Base):
    __tablename__ = "ot_requests"

    __table_args__ = (Index("ix_ot_requests_date", "date"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    employee_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False
    )
    employee_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    start_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(
        Enum(*_APPROVAL_STATES, name="approval_state"), nullable=False, default="pending"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<OvertimeRequest id={self.id} employee_id={self.employee_id} status={self.status}>"


class LeaveRequest(Base):
    __tablename__ = "leave_requests"

    __table_args__ = (Index("ix_leave_requests_start_date", "start_date"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    employee_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False
    )
    employee_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    leave_type: Mapped[str] = mapped_column(String(50), nullable=False)
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(
        Enum(*_APPROVAL_STATES, name="approval_state", create_type=False),
        nullable=False,
        default="pending",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<LeaveRequest id={self.id} employee_id={self.employee_id} type={self.leave_type}>"


class WorkTimeConfig(Base):
    __tablename__ = "work_time_config"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    check_in_hour: Mapped[int] = mapped_column(Integer, nullable=False, default=9)
    check_in_minute: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    check_out_hour: Mapped[int] = mapped_column(Integer, nullable=False, default=18)
    check_out_minute: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    late_grace_period: Mapped[int] = mapped_column(Integer, nullable=False, default=15)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<WorkTimeConfig check_in={self.check_in_hour:02d}:{self.check_in_minute:02d} "
            f"grace={self.late_grace_period}>"
        )
