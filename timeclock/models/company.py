# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Company and company location models."""

from __future__ import annotations

import uuid as uuid_lib
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from timeclock.config import settings
from timeclock.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from timeclock.models.user import User


class Company(Base, TimestampMixin):
    """Tenant owning users, schedules and holidays."""

    __tablename__ = "companies"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    # Whether users may maintain their own schedule overrides
    allow_user_schedule_edit: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )

    # Relationships
    location: Mapped[CompanyLocation | None] = relationship(
        "CompanyLocation",
        back_populates="company",
        cascade="all, delete-orphan",
        uselist=False,
    )
    users: Mapped[list[User]] = relationship(
        "User",
        back_populates="company",
        cascade="all, delete-orphan",
    )


class CompanyLocation(Base, TimestampMixin):
    """Where a company operates; drives regional holiday resolution."""

    __tablename__ = "company_locations"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    company_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    country_code: Mapped[str] = mapped_column(
        String(2), default=lambda: settings.default_country_code, nullable=False
    )
    # ISO 3166-2 subdivision, e.g. "ES-MD"
    region_code: Mapped[str] = mapped_column(String(10), nullable=False)

    company: Mapped[Company] = relationship("Company", back_populates="location")
