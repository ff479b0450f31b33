"""initial_schema

Revision ID: 3f1c7a9e2b40
Revises:
Create Date: 2026-10-17 09:12:31.482113

"""
from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '3f1c7a9e2b40'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ENTRY_TYPES = ("WORK", "PAUSE_COFFEE", "PAUSE_LUNCH", "PAUSE_PERSONAL")
ABSENCE_TYPES = (
    "VACATION",
    "SICK_LEAVE",
    "PERSONAL_LEAVE",
    "MATERNITY",
    "PATERNITY",
    "UNPAID_LEAVE",
    "TRAINING",
    "OTHER",
)
ABSENCE_STATUSES = ("PENDING", "APPROVED", "REJECTED", "CANCELLED")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column(
            "allow_user_schedule_edit", sa.Boolean(), nullable=False, server_default="1"
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "company_locations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("country_code", sa.String(2), nullable=False, server_default="ES"),
        sa.Column("region_code", sa.String(10), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("company_id"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("salary", sa.Numeric(12, 2), nullable=True),
        sa.Column("hourly_cost", sa.Numeric(10, 2), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_company_id", "users", ["company_id"])

    op.create_table(
        "work_schedules",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("is_workable", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("start_time", sa.String(5), nullable=False),
        sa.Column("end_time", sa.String(5), nullable=False),
        sa.Column("break_start_time", sa.String(5), nullable=True),
        sa.Column("break_end_time", sa.String(5), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "company_id", "user_id", "day_of_week", name="uq_work_schedule_user_day"
        ),
    )
    # Company defaults have no user, so the constraint above does not cover them
    op.create_index(
        "uq_work_schedule_default_day",
        "work_schedules",
        ["company_id", "day_of_week"],
        unique=True,
        sqlite_where=sa.text("user_id IS NULL"),
        postgresql_where=sa.text("user_id IS NULL"),
    )

    op.create_table(
        "public_holidays",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("local_name", sa.String(255), nullable=True),
        sa.Column("country_code", sa.String(2), nullable=False),
        sa.Column("region_code", sa.String(10), nullable=True),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("is_fixed", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column(
            "source",
            sa.Enum("PROVIDER", "MANUAL", name="holidaysource"),
            nullable=False,
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "date", "country_code", "region_code", name="uq_public_holiday_date_region"
        ),
    )
    op.create_index(
        "idx_public_holiday_country_year", "public_holidays", ["country_code", "year"]
    )

    op.create_table(
        "company_holidays",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("is_recurring", sa.Boolean(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("company_id", "date", name="uq_company_holiday_date"),
    )

    op.create_table(
        "absences",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("type", sa.Enum(*ABSENCE_TYPES, name="absencetype"), nullable=False),
        sa.Column(
            "status", sa.Enum(*ABSENCE_STATUSES, name="absencestatus"), nullable=False
        ),
        sa.Column("workdays_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("reviewed_by_id", sa.Uuid(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reviewed_by_id"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index(
        "idx_absence_user_range", "absences", ["user_id", "start_date", "end_date"]
    )

    op.create_table(
        "time_entries",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=True),
        sa.Column("entry_type", sa.Enum(*ENTRY_TYPES, name="entrytype"), nullable=False),
        sa.Column("start_time", sa.DateTime(), nullable=False),
        sa.Column("end_time", sa.DateTime(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("is_in_office", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("ip_address", sa.String(45), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "idx_time_entry_user_start", "time_entries", ["user_id", "start_time"]
    )

    op.create_table(
        "active_timers",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=True),
        sa.Column("entry_type", sa.Enum(*ENTRY_TYPES, name="entrytype"), nullable=False),
        sa.Column("started_at", sa.DateTime(), nullable=False),
        sa.Column("is_in_office", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("ip_address", sa.String(45), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        # One running timer per user
        sa.UniqueConstraint("user_id"),
    )


def downgrade() -> None:
    op.drop_table("active_timers")
    op.drop_index("idx_time_entry_user_start", table_name="time_entries")
    op.drop_table("time_entries")
    op.drop_index("idx_absence_user_range", table_name="absences")
    op.drop_table("absences")
    op.drop_table("company_holidays")
    op.drop_index("idx_public_holiday_country_year", table_name="public_holidays")
    op.drop_table("public_holidays")
    op.drop_index("uq_work_schedule_default_day", table_name="work_schedules")
    op.drop_table("work_schedules")
    op.drop_index("ix_users_company_id", table_name="users")
    op.drop_table("users")
    op.drop_table("company_locations")
    op.drop_table("companies")
