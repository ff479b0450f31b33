# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Enumeration types for database models."""

from enum import Enum


class EntryType(str, Enum):
    """Time entry / timer classification.

    Only WORK counts towards logged minutes; the pause types are kept for
    the raw entry listing.
    """

    WORK = "WORK"
    PAUSE_COFFEE = "PAUSE_COFFEE"
    PAUSE_LUNCH = "PAUSE_LUNCH"
    PAUSE_PERSONAL = "PAUSE_PERSONAL"


class AbsenceType(str, Enum):
    """Absence type enumeration."""

    VACATION = "VACATION"
    SICK_LEAVE = "SICK_LEAVE"
    PERSONAL_LEAVE = "PERSONAL_LEAVE"
    MATERNITY = "MATERNITY"
    PATERNITY = "PATERNITY"
    UNPAID_LEAVE = "UNPAID_LEAVE"
    TRAINING = "TRAINING"
    OTHER = "OTHER"


class AbsenceStatus(str, Enum):
    """Absence status enumeration.

    Status flow:
        PENDING → APPROVED
           ↓
        REJECTED / CANCELLED
    """

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class HolidaySource(str, Enum):
    """Where a public holiday row came from."""

    PROVIDER = "PROVIDER"
    MANUAL = "MANUAL"


class HolidayScope(str, Enum):
    """Scope of a resolved holiday."""

    NATIONAL = "national"
    REGIONAL = "regional"
    COMPANY = "company"


class DayStatus(str, Enum):
    """Computed status of a calendar day."""

    BEFORE_USER_CREATED = "BEFORE_USER_CREATED"
    FUTURE = "FUTURE"
    PUBLIC_HOLIDAY = "PUBLIC_HOLIDAY"
    COMPANY_HOLIDAY = "COMPANY_HOLIDAY"
    ABSENCE = "ABSENCE"
    NON_WORKING_DAY = "NON_WORKING_DAY"
    WORKED = "WORKED"
    PARTIALLY_WORKED = "PARTIALLY_WORKED"
    MISSING_LOGS = "MISSING_LOGS"
