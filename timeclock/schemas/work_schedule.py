# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Work schedule schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from timeclock.schemas.common import TIME_PATTERN


class WorkScheduleDayInput(BaseModel):
    """One weekday in a schedule update request."""

    day_of_week: int = Field(..., ge=0, le=6)
    is_workable: bool = True
    start_time: str | None = Field(None, pattern=TIME_PATTERN)
    end_time: str | None = Field(None, pattern=TIME_PATTERN)
    break_start_time: str | None = Field(None, pattern=TIME_PATTERN)
    break_end_time: str | None = Field(None, pattern=TIME_PATTERN)


class WorkScheduleUpdate(BaseModel):
    """Replacement set of schedule days."""

    days: list[WorkScheduleDayInput] = Field(..., max_length=7)


class WorkScheduleDayResponse(BaseModel):
    """Stored schedule row."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    company_id: uuid.UUID
    user_id: uuid.UUID | None
    day_of_week: int
    is_workable: bool
    start_time: str
    end_time: str
    break_start_time: str | None
    break_end_time: str | None
    updated_at: datetime


class EffectiveDay(BaseModel):
    """A resolved schedule day with its expected minutes."""

    day_of_week: int
    is_workable: bool
    start_time: str | None = None
    end_time: str | None = None
    break_start_time: str | None = None
    break_end_time: str | None = None
    expected_minutes: int = 0
    is_override: bool = False


class EffectiveScheduleResponse(BaseModel):
    """A user's merged weekly schedule."""

    days: list[EffectiveDay]
    weekly_minutes: int


class UserScheduleResponse(BaseModel):
    """A user's overrides together with the resulting schedule."""

    has_overrides: bool
    overrides: list[WorkScheduleDayResponse]
    effective: EffectiveScheduleResponse
