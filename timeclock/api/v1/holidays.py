# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Holiday API endpoints."""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from timeclock.api.deps import get_company, get_db
from timeclock.models import Company
from timeclock.schemas.holiday import (
    CompanyHolidayCreate,
    CompanyHolidayResponse,
    Holiday,
    HolidaySyncRequest,
    HolidaySyncResult,
)
from timeclock.services.holiday_service import HolidayService

router = APIRouter()


@router.get("/holidays", response_model=list[Holiday])
def list_holidays(
    year: int = Query(..., ge=2000, le=2100),
    company: Company = Depends(get_company),
    db: Session = Depends(get_db),
) -> list[Holiday]:
    """Get public and company holidays of a year."""
    return HolidayService(db).get_holidays_for_year(company.id, year)


@router.get("/holidays/custom", response_model=list[CompanyHolidayResponse])
def list_company_holidays(
    company: Company = Depends(get_company),
    db: Session = Depends(get_db),
) -> list[CompanyHolidayResponse]:
    """List the company's own holidays."""
    rows = HolidayService(db).list_company_holidays(company.id)
    return [CompanyHolidayResponse.model_validate(r) for r in rows]


@router.post(
    "/holidays/custom", response_model=CompanyHolidayResponse, status_code=201
)
def create_company_holiday(
    data: CompanyHolidayCreate,
    company: Company = Depends(get_company),
    db: Session = Depends(get_db),
) -> CompanyHolidayResponse:
    """Create a company holiday."""
    holiday = HolidayService(db).create_company_holiday(
        company.id, data.date, data.name, data.is_recurring
    )
    return CompanyHolidayResponse.model_validate(holiday)


@router.delete("/holidays/custom/{holiday_id}", status_code=204)
def delete_company_holiday(
    holiday_id: uuid.UUID,
    company: Company = Depends(get_company),
    db: Session = Depends(get_db),
) -> None:
    """Delete a company holiday."""
    HolidayService(db).delete_company_holiday(company.id, holiday_id)


@router.post("/holidays/sync", response_model=list[HolidaySyncResult])
def sync_public_holidays(
    data: HolidaySyncRequest,
    company: Company = Depends(get_company),
    db: Session = Depends(get_db),
) -> list[HolidaySyncResult]:
    """Pull public holidays for the company's country and region."""
    return HolidayService(db).sync_public_holidays(company.id, data.years)
