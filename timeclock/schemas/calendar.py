# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Attendance calendar schemas."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from timeclock.models.enums import AbsenceType, DayStatus, EntryType


class TimeEntryBrief(BaseModel):
    """Entry as listed inside a calendar day."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    entry_type: EntryType
    project_id: uuid.UUID | None = None


class CalendarDay(BaseModel):
    """Classification of a single date."""

    date: date
    day_of_week: int
    status: DayStatus
    holiday_name: str | None = None
    absence_type: AbsenceType | None = None
    expected_minutes: int = 0
    logged_minutes: int = 0
    entries: list[TimeEntryBrief] = []
    is_overtime: bool | None = None
    is_outside_month: bool | None = None


class CalendarSummary(BaseModel):
    """Aggregate statistics over the in-scope days."""

    working_days: int = 0
    days_worked: int = 0
    days_missing: int = 0
    public_holidays: int = 0
    company_holidays: int = 0
    absence_days: int = 0
    total_expected_minutes: int = 0
    total_logged_minutes: int = 0
    compliance_percentage: int = 0


class CalendarResponse(BaseModel):
    """Calendar days plus summary."""

    days: list[CalendarDay]
    summary: CalendarSummary
