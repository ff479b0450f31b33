# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Active timer API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from timeclock.api.deps import get_clock, get_company_user, get_db
from timeclock.clock import Clock
from timeclock.models import User
from timeclock.schemas.timer import (
    ActiveTimerResponse,
    TimeEntryResponse,
    TimerStart,
    TimerSwitch,
    TimerSwitchResponse,
)
from timeclock.services.timer_service import TimerService

router = APIRouter()


@router.get("/timer", response_model=ActiveTimerResponse | None)
def get_active_timer(
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
) -> ActiveTimerResponse | None:
    """Get the running timer, or null when idle."""
    timer = TimerService(db).get_active(user.id)
    return ActiveTimerResponse.model_validate(timer) if timer else None


@router.post("/timer/start", response_model=ActiveTimerResponse, status_code=201)
def start_timer(
    data: TimerStart | None = None,
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> ActiveTimerResponse:
    """Start a timer."""
    timer = TimerService(db, clock).start(user.id, user.company_id, data or TimerStart())
    return ActiveTimerResponse.model_validate(timer)


@router.post("/timer/stop", response_model=TimeEntryResponse)
def stop_timer(
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> TimeEntryResponse:
    """Stop the running timer and record the time entry."""
    entry = TimerService(db, clock).stop(user.id)
    return TimeEntryResponse.model_validate(entry)


@router.post("/timer/switch", response_model=TimerSwitchResponse)
def switch_timer(
    data: TimerSwitch | None = None,
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> TimerSwitchResponse:
    """Record the running timer and start a new one at the same instant."""
    entry, timer = TimerService(db, clock).switch(user.id, data or TimerSwitch())
    return TimerSwitchResponse(
        entry=TimeEntryResponse.model_validate(entry),
        timer=ActiveTimerResponse.model_validate(timer),
    )


@router.post("/timer/cancel", response_model=ActiveTimerResponse)
def cancel_timer(
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
) -> ActiveTimerResponse:
    """Discard the running timer without recording time."""
    timer = TimerService(db).cancel(user.id)
    return ActiveTimerResponse.model_validate(timer)
