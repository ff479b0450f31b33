# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Time entry API endpoints."""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from timeclock.api.deps import get_company_user, get_db
from timeclock.models import User
from timeclock.schemas.time_entry import TimeEntryCreate, TimeEntryUpdate
from timeclock.schemas.timer import TimeEntryResponse
from timeclock.services.time_entry_service import TimeEntryService

router = APIRouter()


@router.get("/time-entries", response_model=list[TimeEntryResponse])
def list_time_entries(
    date_from: date | None = Query(None, alias="from"),
    date_to: date | None = Query(None, alias="to"),
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
) -> list[TimeEntryResponse]:
    """List the user's time entries, newest first."""
    rows = TimeEntryService(db).list_entries(user.id, date_from, date_to)
    return [TimeEntryResponse.model_validate(r) for r in rows]


@router.post("/time-entries", response_model=TimeEntryResponse, status_code=201)
def create_time_entry(
    data: TimeEntryCreate,
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
) -> TimeEntryResponse:
    """Record a time entry without a timer."""
    entry = TimeEntryService(db).create_entry(user.company_id, user.id, data)
    return TimeEntryResponse.model_validate(entry)


@router.get("/time-entries/{entry_id}", response_model=TimeEntryResponse)
def get_time_entry(
    entry_id: uuid.UUID,
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
) -> TimeEntryResponse:
    """Get a specific time entry."""
    return TimeEntryResponse.model_validate(TimeEntryService(db).get_entry(user.id, entry_id))


@router.put("/time-entries/{entry_id}", response_model=TimeEntryResponse)
def update_time_entry(
    entry_id: uuid.UUID,
    data: TimeEntryUpdate,
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
) -> TimeEntryResponse:
    """Edit a time entry."""
    entry = TimeEntryService(db).update_entry(user.id, entry_id, data)
    return TimeEntryResponse.model_validate(entry)


@router.delete("/time-entries/{entry_id}", status_code=204)
def delete_time_entry(
    entry_id: uuid.UUID,
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
) -> None:
    """Delete a time entry."""
    TimeEntryService(db).delete_entry(user.id, entry_id)
