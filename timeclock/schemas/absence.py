# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Absence schemas."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from timeclock.models.enums import AbsenceStatus, AbsenceType


class AbsenceCreate(BaseModel):
    """Schema for requesting an absence."""

    start_date: date
    end_date: date
    type: AbsenceType
    notes: str | None = Field(None, max_length=500)


class AbsenceReview(BaseModel):
    """Schema for approving or rejecting a pending absence."""

    reviewer_id: uuid.UUID
    status: AbsenceStatus
    notes: str | None = Field(None, max_length=500)


class AbsenceResponse(BaseModel):
    """Schema for absence response."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    company_id: uuid.UUID
    start_date: date
    end_date: date
    type: AbsenceType
    status: AbsenceStatus
    workdays_count: int
    notes: str | None
    reviewed_by_id: uuid.UUID | None = None
    reviewed_at: datetime | None = None
    created_at: datetime


class AbsenceStats(BaseModel):
    """Number of a company's absences per status."""

    pending: int = 0
    approved: int = 0
    rejected: int = 0
    cancelled: int = 0
