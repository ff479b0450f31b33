# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Work schedule API endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from timeclock.api.deps import get_company, get_company_user, get_db
from timeclock.models import Company, User
from timeclock.schemas.work_schedule import (
    EffectiveDay,
    EffectiveScheduleResponse,
    UserScheduleResponse,
    WorkScheduleDayResponse,
    WorkScheduleUpdate,
)
from timeclock.services.schedule_service import EffectiveSchedule, ScheduleService

router = APIRouter()


def _effective_to_response(schedule: EffectiveSchedule) -> EffectiveScheduleResponse:
    """Convert an EffectiveSchedule to a response schema."""
    return EffectiveScheduleResponse(
        days=[EffectiveDay(**asdict(day)) for day in schedule.days],
        weekly_minutes=schedule.weekly_minutes,
    )


def _user_schedule(service: ScheduleService, user: User) -> UserScheduleResponse:
    overrides = service.get_user_overrides(user.company_id, user.id)
    return UserScheduleResponse(
        has_overrides=service.has_overrides(user.company_id, user.id),
        overrides=[WorkScheduleDayResponse.model_validate(r) for r in overrides],
        effective=_effective_to_response(
            service.get_effective_schedule(user.company_id, user.id)
        ),
    )


@router.get(
    "/work-schedules/default", response_model=list[WorkScheduleDayResponse]
)
def get_default_schedule(
    company: Company = Depends(get_company),
    db: Session = Depends(get_db),
) -> list[WorkScheduleDayResponse]:
    """Get the company default schedule."""
    rows = ScheduleService(db).get_company_default(company.id)
    return [WorkScheduleDayResponse.model_validate(r) for r in rows]


@router.put(
    "/work-schedules/default", response_model=list[WorkScheduleDayResponse]
)
def update_default_schedule(
    data: WorkScheduleUpdate,
    company: Company = Depends(get_company),
    db: Session = Depends(get_db),
) -> list[WorkScheduleDayResponse]:
    """Replace the company default schedule."""
    rows = ScheduleService(db).update_company_default(company.id, data.days)
    return [WorkScheduleDayResponse.model_validate(r) for r in rows]


@router.get("/users/{user_id}/work-schedule", response_model=UserScheduleResponse)
def get_user_schedule(
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
) -> UserScheduleResponse:
    """Get a user's overrides and effective schedule."""
    return _user_schedule(ScheduleService(db), user)


@router.put("/users/{user_id}/work-schedule", response_model=UserScheduleResponse)
def update_user_schedule(
    data: WorkScheduleUpdate,
    company: Company = Depends(get_company),
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
) -> UserScheduleResponse:
    """Replace a user's schedule overrides."""
    service = ScheduleService(db)
    service.update_user_overrides(
        company.id, user.id, data.days, allow_user_edit=company.allow_user_schedule_edit
    )
    return _user_schedule(service, user)


@router.delete("/users/{user_id}/work-schedule", status_code=204)
def delete_user_schedule(
    company: Company = Depends(get_company),
    user: User = Depends(get_company_user),
    db: Session = Depends(get_db),
) -> None:
    """Remove a user's overrides so the company default applies."""
    ScheduleService(db).delete_user_overrides(
        company.id, user.id, allow_user_edit=company.allow_user_schedule_edit
    )
