# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Absence API endpoints."""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from timeclock.api.deps import get_clock, get_company, get_company_user, get_db
from timeclock.clock import Clock
from timeclock.exceptions import ValidationError
from timeclock.models import AbsenceStatus, Company, User
from timeclock.schemas.absence import (
    AbsenceCreate,
    AbsenceResponse,
    AbsenceReview,
    AbsenceStats,
)
from timeclock.services.absence_service import AbsenceService

router = APIRouter()


@router.get("/absences", response_model=list[AbsenceResponse])
def list_absences(
    status: AbsenceStatus | None = Query(None),
    user_id: uuid.UUID | None = Query(None),
    company: Company = Depends(get_company),
    db: Session = Depends(get_db),
) -> list[AbsenceResponse]:
    """List the company's absences, optionally filtered."""
    rows = AbsenceService(db).list_absences(company.id, status=status, user_id=user_id)
    return [AbsenceResponse.model_validate(r) for r in rows]


@router.get("/absences/stats", response_model=AbsenceStats)
def get_absence_stats(
    company: Company = Depends(get_company),
    db: Session = Depends(get_db),
) -> AbsenceStats:
    """Count the company's absences per status."""
    return AbsenceService(db).get_absence_stats(company.id)


@router.get("/absences/approved", response_model=list[AbsenceResponse])
def list_approved_absences(
    date_from: date = Query(..., alias="from"),
    date_to: date = Query(..., alias="to"),
    user_id: uuid.UUID | None = Query(None),
    company: Company = Depends(get_company),
    db: Session = Depends(get_db),
) -> list[AbsenceResponse]:
    """List approved absences intersecting a date range."""
    if date_from > date_to:
        raise ValidationError("'from' must not be after 'to'")
    rows = AbsenceService(db).resolve_for_company(
        company.id, date_from, date_to, user_id=user_id
    )
    return [AbsenceResponse.model_validate(r) for r in rows]


@router.get("/absences/{absence_id}", response_model=AbsenceResponse)
def get_absence(
    absence_id: uuid.UUID,
    company: Company = Depends(get_company),
    db: Session = Depends(get_db),
) -> AbsenceResponse:
    """Get a specific absence."""
    return AbsenceResponse.model_validate(AbsenceService(db).get_absence(company.id, absence_id))


@router.post("/absences/{absence_id}/review", response_model=AbsenceResponse)
def review_absence(
    absence_id: uuid.UUID,
    data: AbsenceReview,
    company: Company = Depends(get_company),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> AbsenceResponse:
    """Approve or reject a pending absence."""
    absence = AbsenceService(db, clock=clock).review_absence(company.id, absence_id, data)
    return AbsenceResponse.model_validate(absence)


@router.get("/users/{user_id}/absences", response_model=list[AbsenceResponse])
def list_user_absences(
    status: AbsenceStatus | None = Query(None),
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
) -> list[AbsenceResponse]:
    """List a user's own absences."""
    rows = AbsenceService(db).list_absences(user.company_id, status=status, user_id=user.id)
    return [AbsenceResponse.model_validate(r) for r in rows]


@router.post(
    "/users/{user_id}/absences", response_model=AbsenceResponse, status_code=201
)
def request_absence(
    data: AbsenceCreate,
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
) -> AbsenceResponse:
    """Request an absence."""
    absence = AbsenceService(db).request_absence(user.company_id, user.id, data)
    return AbsenceResponse.model_validate(absence)


@router.post(
    "/users/{user_id}/absences/{absence_id}/cancel", response_model=AbsenceResponse
)
def cancel_absence(
    absence_id: uuid.UUID,
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
) -> AbsenceResponse:
    """Cancel one of the user's absences."""
    absence = AbsenceService(db).cancel_absence(user.company_id, user.id, absence_id)
    return AbsenceResponse.model_validate(absence)
