# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Holiday schemas."""

import uuid
from datetime import date, datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from timeclock.models.enums import HolidayScope


class Holiday(BaseModel):
    """A holiday resolved for a company and date range."""

    date: date
    name: str
    local_name: str | None = None
    scope: HolidayScope
    region_code: str | None = None
    is_recurring: bool = False


class CompanyHolidayCreate(BaseModel):
    """Schema for creating a company holiday."""

    date: date
    name: str = Field(..., min_length=1, max_length=255)
    is_recurring: bool = False


class CompanyHolidayResponse(BaseModel):
    """Schema for company holiday response."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    company_id: uuid.UUID
    date: date
    name: str
    is_recurring: bool
    created_at: datetime


class HolidaySyncRequest(BaseModel):
    """Years to pull public holidays for."""

    years: list[Annotated[int, Field(ge=2000, le=2100)]] = Field(
        ..., min_length=1, max_length=10
    )


class HolidaySyncResult(BaseModel):
    """Outcome of syncing one year."""

    year: int
    holidays_added: int
    holidays_updated: int
