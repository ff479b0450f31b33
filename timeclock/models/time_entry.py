# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Time entry and active timer models."""

import uuid as uuid_lib
from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from timeclock.models.base import Base, TimestampMixin
from timeclock.models.enums import EntryType


class TimeEntry(Base, TimestampMixin):
    """A completed span of tracked time.

    Created directly or as the product of stopping/switching a timer.
    """

    __tablename__ = "time_entries"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    user_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    company_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    )
    project_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True), nullable=True
    )
    entry_type: Mapped[EntryType] = mapped_column(
        Enum(EntryType), default=EntryType.WORK, nullable=False
    )
    start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)

    # Location metadata
    is_in_office: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)

    __table_args__ = (
        Index("idx_time_entry_user_start", "user_id", "start_time"),
    )

    @property
    def work_date(self) -> date:
        """Calendar date the entry is attributed to."""
        return self.start_time.date()

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<TimeEntry(id={self.id}, start={self.start_time}, "
            f"type={self.entry_type}, minutes={self.duration_minutes})>"
        )


class ActiveTimer(Base, TimestampMixin):
    """The single running timer of a user.

    The unique key on ``user_id`` is what enforces one timer per user.
    """

    __tablename__ = "active_timers"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    user_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    company_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    )
    project_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True), nullable=True
    )
    entry_type: Mapped[EntryType] = mapped_column(
        Enum(EntryType), default=EntryType.WORK, nullable=False
    )
    started_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    is_in_office: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<ActiveTimer(user_id={self.user_id}, started_at={self.started_at}, "
            f"type={self.entry_type})>"
        )
