# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Active timer schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from timeclock.models.enums import EntryType


class TimerStart(BaseModel):
    """Request body for starting a timer."""

    entry_type: EntryType = EntryType.WORK
    project_id: uuid.UUID | None = None
    is_in_office: bool = True
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    ip_address: str | None = Field(None, max_length=45)


class TimerSwitch(BaseModel):
    """Request body for switching to a new timer.

    ``is_in_office`` left unset keeps the running timer's value.
    """

    entry_type: EntryType = EntryType.WORK
    project_id: uuid.UUID | None = None
    is_in_office: bool | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    ip_address: str | None = Field(None, max_length=45)


class ActiveTimerResponse(BaseModel):
    """Schema for a running timer."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    company_id: uuid.UUID
    project_id: uuid.UUID | None
    entry_type: EntryType
    started_at: datetime
    is_in_office: bool
    latitude: float | None
    longitude: float | None
    ip_address: str | None


class TimeEntryResponse(BaseModel):
    """Schema for a completed time entry."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    company_id: uuid.UUID
    project_id: uuid.UUID | None
    entry_type: EntryType
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    is_in_office: bool


class TimerSwitchResponse(BaseModel):
    """Entry closed by a switch and the timer that replaced it."""

    entry: TimeEntryResponse
    timer: ActiveTimerResponse
