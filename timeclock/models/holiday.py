# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Public and company holiday models."""

import uuid as uuid_lib
from datetime import date

from sqlalchemy import (
    Boolean,
    Date,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from timeclock.models.base import Base, TimestampMixin
from timeclock.models.enums import HolidaySource


class PublicHoliday(Base, TimestampMixin):
    """National (no region) or regional public holiday."""

    __tablename__ = "public_holidays"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    date: Mapped[date] = mapped_column(Date, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    local_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country_code: Mapped[str] = mapped_column(String(2), nullable=False)
    # None for national holidays
    region_code: Mapped[str | None] = mapped_column(String(10), nullable=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    is_fixed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    source: Mapped[HolidaySource] = mapped_column(
        Enum(HolidaySource),
        default=HolidaySource.PROVIDER,
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint(
            "date", "country_code", "region_code", name="uq_public_holiday_date_region"
        ),
        Index("idx_public_holiday_country_year", "country_code", "year"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<PublicHoliday(date={self.date}, name={self.name!r}, "
            f"region={self.region_code})>"
        )


class CompanyHoliday(Base, TimestampMixin):
    """Company-defined holiday, optionally recurring every year."""

    __tablename__ = "company_holidays"

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
    date: Mapped[date] = mapped_column(Date, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_recurring: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    __table_args__ = (
        UniqueConstraint("company_id", "date", name="uq_company_holiday_date"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<CompanyHoliday(date={self.date}, name={self.name!r}, "
            f"recurring={self.is_recurring})>"
        )
