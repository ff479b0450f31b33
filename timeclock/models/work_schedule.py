# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Weekly work schedule model."""

import uuid as uuid_lib

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from timeclock.models.base import Base, TimestampMixin


class WorkSchedule(Base, TimestampMixin):
    """One weekday of a weekly schedule.

    Rows with ``user_id`` unset are the company default; rows with a user
    are that user's per-day overrides. Times are wall-clock "HH:mm".
    """

    __tablename__ = "work_schedules"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    company_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
    )
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)  # 0=Monday
    is_workable: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    break_start_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    break_end_time: Mapped[str | None] = mapped_column(String(5), nullable=True)

    __table_args__ = (
        UniqueConstraint(
            "company_id", "user_id", "day_of_week", name="uq_work_schedule_user_day"
        ),
        # NULL user_id is not covered by the constraint above
        Index(
            "uq_work_schedule_default_day",
            "company_id",
            "day_of_week",
            unique=True,
            sqlite_where=text("user_id IS NULL"),
            postgresql_where=text("user_id IS NULL"),
        ),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<WorkSchedule(company_id={self.company_id}, user_id={self.user_id}, "
            f"day={self.day_of_week}, {self.start_time}-{self.end_time})>"
        )
