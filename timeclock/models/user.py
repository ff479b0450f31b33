# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""User model."""

from __future__ import annotations

import uuid as uuid_lib
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from timeclock.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from timeclock.models.company import Company


class User(Base, TimestampMixin):
    """Company member whose time is tracked."""

    __tablename__ = "users"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    company_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Monthly gross salary; hourly_cost is derived from it and the schedule
    salary: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    hourly_cost: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2), nullable=True
    )

    company: Mapped[Company] = relationship("Company", back_populates="users")
