# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""User absence model."""

import uuid as uuid_lib
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from timeclock.models.base import Base, TimestampMixin
from timeclock.models.enums import AbsenceStatus, AbsenceType


class Absence(Base, TimestampMixin):
    """Absence request covering ``start_date``..``end_date`` inclusive.

    The table does not prevent overlaps; requests are checked by the
    absence service before they are stored.
    """

    __tablename__ = "absences"

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
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    type: Mapped[AbsenceType] = mapped_column(Enum(AbsenceType), nullable=False)
    status: Mapped[AbsenceStatus] = mapped_column(
        Enum(AbsenceStatus),
        default=AbsenceStatus.PENDING,
        nullable=False,
    )
    workdays_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewed_by_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    __table_args__ = (
        Index("idx_absence_user_range", "user_id", "start_date", "end_date"),
    )

    def covers(self, day: date) -> bool:
        """Check whether the absence includes a date."""
        return self.start_date <= day <= self.end_date

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<Absence(user_id={self.user_id}, {self.start_date}..{self.end_date}, "
            f"type={self.type}, status={self.status})>"
        )
