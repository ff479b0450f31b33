# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Schemas for directly created and edited time entries."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from timeclock.models.enums import EntryType


class TimeEntryCreate(BaseModel):
    """Schema for recording a time entry without a timer."""

    start_time: datetime
    end_time: datetime
    entry_type: EntryType = EntryType.WORK
    project_id: uuid.UUID | None = None
    is_in_office: bool = True
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    ip_address: str | None = Field(None, max_length=45)


class TimeEntryUpdate(BaseModel):
    """Schema for editing a time entry. Unset fields keep their value."""

    start_time: datetime | None = None
    end_time: datetime | None = None
    entry_type: EntryType | None = None
    project_id: uuid.UUID | None = None
    is_in_office: bool | None = None
