# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Main API router for v1 endpoints."""

from fastapi import APIRouter

from timeclock.api.v1 import (
    absences,
    calendar,
    holidays,
    time_entries,
    timer,
    work_schedules,
)

api_router = APIRouter()

company_prefix = "/companies/{company_id}"
user_prefix = company_prefix + "/users/{user_id}"

# Per-user routes
api_router.include_router(calendar.router, prefix=user_prefix, tags=["calendar"])
api_router.include_router(timer.router, prefix=user_prefix, tags=["timer"])
api_router.include_router(time_entries.router, prefix=user_prefix, tags=["time-entries"])

# Company routes
api_router.include_router(
    work_schedules.router, prefix=company_prefix, tags=["work-schedules"]
)
api_router.include_router(holidays.router, prefix=company_prefix, tags=["holidays"])
api_router.include_router(absences.router, prefix=company_prefix, tags=["absences"])
