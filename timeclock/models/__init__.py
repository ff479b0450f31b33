# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Database models package."""

from timeclock.models.absence import Absence
from timeclock.models.base import Base, TimestampMixin
from timeclock.models.company import Company, CompanyLocation
from timeclock.models.enums import (
    AbsenceStatus,
    AbsenceType,
    DayStatus,
    EntryType,
    HolidayScope,
    HolidaySource,
)
from timeclock.models.holiday import CompanyHoliday, PublicHoliday
from timeclock.models.time_entry import ActiveTimer, TimeEntry
from timeclock.models.user import User
from timeclock.models.work_schedule import WorkSchedule

__all__ = [
    "Absence",
    "AbsenceStatus",
    "AbsenceType",
    "ActiveTimer",
    "Base",
    "Company",
    "CompanyHoliday",
    "CompanyLocation",
    "DayStatus",
    "EntryType",
    "HolidayScope",
    "HolidaySource",
    "PublicHoliday",
    "TimeEntry",
    "TimestampMixin",
    "User",
    "WorkSchedule",
]
