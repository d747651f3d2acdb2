"""initial: employees, attendance, ot_requests, leave_requests, work_time_config

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_approval_state = postgresql.ENUM(
    "pending", "approved", "rejected", name="approval_state", create_type=False
)


def upgrade() -> None:
    # approval_state is shared by two tables, so it is created once up front
    postgresql.ENUM("pending", "approved", "rejected", name="approval_state").create(
        op.get_bind(), checkfirst=True
    )

    # --- employees ---
    op.create_table(
        "employees",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("employee_code", sa.String(32), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("employment_type", sa.String(50), nullable=False),
        sa.Column("position", sa.String(100), nullable=True),
        sa.Column("department", sa.String(100), nullable=True),
        sa.Column(
            "status",
            sa.Enum("active", "resigned", "terminated", name="employee_status"),
            nullable=False,
            server_default="active",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("employee_code"),
    )

    # --- attendance ---
    op.create_table(
        "attendance",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("employee_id", sa.String(64), nullable=False),
        sa.Column("employee_name", sa.String(255), nullable=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("check_in", sa.DateTime(timezone=True), nullable=True),
        sa.Column("check_out", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "status",
            sa.Enum(
                "checked_in", "checked_out", "on_leave", "late", "mid_day",
                name="attendance_status",
            ),
            nullable=False,
        ),
        sa.Column("location", sa.String(255), nullable=True),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_attendance_employee_date", "attendance", ["employee_id", "date"])
    op.create_index("ix_attendance_date", "attendance", ["date"])

    # --- ot_requests ---
    op.create_table(
        "ot_requests",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("employee_id", sa.String(64), nullable=False),
        sa.Column("employee_name", sa.String(255), nullable=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reason", sa.String(500), nullable=True),
        sa.Column("status", _approval_state, nullable=False, server_default="pending"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ot_requests_date", "ot_requests", ["date"])

    # --- leave_requests ---
    op.create_table(
        "leave_requests",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("employee_id", sa.String(64), nullable=False),
        sa.Column("employee_name", sa.String(255), nullable=True),
        sa.Column("leave_type", sa.String(50), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reason", sa.String(500), nullable=True),
        sa.Column("status", _approval_state, nullable=False, server_default="pending"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_leave_requests_start_date", "leave_requests", ["start_date"])

    # --- work_time_config ---
    op.create_table(
        "work_time_config",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("check_in_hour", sa.Integer(), nullable=False, server_default="9"),
        sa.Column("check_in_minute", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("check_out_hour", sa.Integer(), nullable=False, server_default="18"),
        sa.Column("check_out_minute", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("late_grace_period", sa.Integer(), nullable=False, server_default="15"),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("work_time_config")
    op.drop_index("ix_leave_requests_start_date", table_name="leave_requests")
    op.drop_table("leave_requests")
    op.drop_index("ix_ot_requests_date", table_name="ot_requests")
    op.drop_table("ot_requests")
    op.drop_index("ix_attendance_date", table_name="attendance")
    op.drop_index("ix_attendance_employee_date", table_name="attendance")
    op.drop_table("attendance")
    op.drop_table("employees")

    op.execute("DROP TYPE IF EXISTS approval_state")
    op.execute("DROP TYPE IF EXISTS attendance_status")
    op.execute("DROP TYPE IF EXISTS employee_status")
