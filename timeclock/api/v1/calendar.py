# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Attendance calendar API endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from timeclock.api.deps import get_clock, get_company_user, get_db
from timeclock.clock import Clock
from timeclock.models import User
from timeclock.schemas.calendar import CalendarResponse
from timeclock.services.calendar_service import CalendarService

router = APIRouter()


@router.get("/calendar", response_model=CalendarResponse)
def get_calendar(
    date_from: date = Query(..., alias="from"),
    date_to: date = Query(..., alias="to"),
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> CalendarResponse:
    """Get a user's calendar for a date range."""
    return CalendarService(db, clock).get_calendar(
        user.company_id, user.id, date_from, date_to
    )


@router.get("/calendar/month", response_model=CalendarResponse)
def get_calendar_month(
    year: int = Query(...),
    month: int = Query(..., description="0-indexed month (0 = January)"),
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> CalendarResponse:
    """Get a user's calendar for a month padded to whole weeks."""
    return CalendarService(db, clock).get_calendar_month(
        user.company_id, user.id, year, month
    )
