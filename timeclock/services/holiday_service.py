# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Holiday resolution and company holiday management."""

import logging
from calendar import isleap
from datetime import date
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from timeclock.exceptions import (
    CompanyLocationNotFoundError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from timeclock.integrations.base import HolidayProvider, ProviderHoliday
from timeclock.integrations.holidays_lib import HolidaysLibraryProvider
from timeclock.models import (
    CompanyHoliday,
    CompanyLocation,
    HolidayScope,
    HolidaySource,
    PublicHoliday,
)
from timeclock.schemas.holiday import Holiday, HolidaySyncResult
from timeclock.services.absence_service import AbsenceService

logger = logging.getLogger(__name__)

_SCOPE_ORDER = {
    HolidayScope.NATIONAL: 0,
    HolidayScope.REGIONAL: 1,
    HolidayScope.COMPANY: 2,
}


def recurring_dates(month: int, day: int, date_from: date, date_to: date) -> list[date]:
    """Dates in the inclusive range that fall on a given month/day.

    February 29th only matches leap years.
    """
    matches = []
    for year in range(date_from.year, date_to.year + 1):
        if month == 2 and day == 29 and not isleap(year):
            continue
        candidate = date(year, month, day)
        if date_from <= candidate <= date_to:
            matches.append(candidate)
    return matches


def dedupe_and_sort(holidays: list[Holiday]) -> list[Holiday]:
    """Keep the first holiday per (date, scope), ordered by date then scope."""
    seen: set[tuple[date, HolidayScope]] = set()
    unique = []
    for holiday in holidays:
        key = (holiday.date, holiday.scope)
        if key in seen:
            continue
        seen.add(key)
        unique.append(holiday)
    return sorted(unique, key=lambda h: (h.date, _SCOPE_ORDER[h.scope]))


class HolidayService:
    """Service for resolving and managing holidays."""

    def __init__(self, db: Session, provider: HolidayProvider | None = None) -> None:
        """Initialize the service.

        Args:
            db: Database session.
            provider: Source for public holiday syncs.
        """
        self.db = db
        self.provider = provider or HolidaysLibraryProvider()

    def get_location(self, company_id: UUID) -> CompanyLocation | None:
        """Get a company's location, if configured."""
        return (
            self.db.query(CompanyLocation)
            .filter(CompanyLocation.company_id == company_id)
            .first()
        )

    def resolve(self, company_id: UUID, date_from: date, date_to: date) -> list[Holiday]:
        """Resolve every holiday that applies to a company in a range.

        Args:
            company_id: The company ID.
            date_from: First date, inclusive.
            date_to: Last date, inclusive.

        Returns:
            National, regional and company holidays sorted by date.

        Raises:
            CompanyLocationNotFoundError: If the company has no location.
        """
        location = self.get_location(company_id)
        if not location:
            raise CompanyLocationNotFoundError(
                f"Company {company_id} has no location configured"
            )
        return self.resolve_for_region(
            location.region_code,
            date_from,
            date_to,
            company_id=company_id,
            country_code=location.country_code,
        )

    def resolve_for_region(
        self,
        region_code: str,
        date_from: date,
        date_to: date,
        company_id: UUID | None = None,
        country_code: str | None = None,
    ) -> list[Holiday]:
        """Resolve holidays for a region, optionally with a company's own.

        Args:
            region_code: ISO 3166-2 region, e.g. "ES-MD".
            date_from: First date, inclusive.
            date_to: Last date, inclusive.
            company_id: Include this company's holidays when given.
            country_code: Country; derived from the region when omitted.

        Returns:
            Holidays sorted by date.
        """
        country = country_code or region_code.split("-", 1)[0]
        public = (
            self.db.query(PublicHoliday)
            .filter(
                PublicHoliday.country_code == country,
                PublicHoliday.date >= date_from,
                PublicHoliday.date <= date_to,
                (PublicHoliday.region_code.is_(None))
                | (PublicHoliday.region_code == region_code),
            )
            .all()
        )
        resolved = [
            Holiday(
                date=h.date,
                name=h.name,
                local_name=h.local_name,
                scope=HolidayScope.REGIONAL if h.region_code else HolidayScope.NATIONAL,
                region_code=h.region_code,
                is_recurring=False,
            )
            for h in public
        ]

        if company_id is not None:
            resolved.extend(self._company_holidays_in_range(company_id, date_from, date_to))

        return dedupe_and_sort(resolved)

    def is_holiday(self, company_id: UUID, check_date: date) -> bool:
        """Check if a date is a holiday for a company.

        Companies without a location have no holidays.
        """
        if not self.get_location(company_id):
            return False
        return bool(self.resolve(company_id, check_date, check_date))

    def list_company_holidays(self, company_id: UUID) -> list[CompanyHoliday]:
        """List a company's own holidays by date."""
        return (
            self.db.query(CompanyHoliday)
            .filter(CompanyHoliday.company_id == company_id)
            .order_by(CompanyHoliday.date)
            .all()
        )

    def create_company_holiday(
        self,
        company_id: UUID,
        holiday_date: date,
        name: str,
        is_recurring: bool = False,
    ) -> CompanyHoliday:
        """Create a company holiday.

        Args:
            company_id: The company ID.
            holiday_date: The date.
            name: The holiday name.
            is_recurring: Repeat on the same month/day every year.

        Returns:
            The created holiday.

        Raises:
            ConflictError: If the company already has a holiday on that date.
        """
        existing = (
            self.db.query(CompanyHoliday)
            .filter(
                CompanyHoliday.company_id == company_id,
                CompanyHoliday.date == holiday_date,
            )
            .first()
        )
        if existing:
            raise ConflictError(f"A company holiday already exists on {holiday_date}")

        holiday = CompanyHoliday(
            company_id=company_id,
            date=holiday_date,
            name=name,
            is_recurring=is_recurring,
        )
        self.db.add(holiday)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(
                f"A company holiday already exists on {holiday_date}"
            ) from None
        self.db.refresh(holiday)
        logger.info(f"Created company holiday {name!r} on {holiday_date} for {company_id}")
        self._recheck_absences(company_id)
        return holiday

    def delete_company_holiday(self, company_id: UUID, holiday_id: UUID) -> None:
        """Delete a company holiday.

        Raises:
            NotFoundError: If the holiday does not belong to the company.
        """
        holiday = (
            self.db.query(CompanyHoliday)
            .filter(
                CompanyHoliday.id == holiday_id,
                CompanyHoliday.company_id == company_id,
            )
            .first()
        )
        if not holiday:
            raise NotFoundError("Company holiday not found")
        self.db.delete(holiday)
        self.db.commit()
        logger.info(f"Deleted company holiday {holiday_id} of {company_id}")
        self._recheck_absences(company_id)

    def get_holidays_for_year(self, company_id: UUID, year: int) -> list[Holiday]:
        """Public and company holidays of a calendar year."""
        return self.resolve(company_id, date(year, 1, 1), date(year, 12, 31))

    def sync_public_holidays(
        self, company_id: UUID, years: list[int]
    ) -> list[HolidaySyncResult]:
        """Pull public holidays for the company's country and region.

        Records that fail to store are logged and skipped.

        Args:
            company_id: The company ID.
            years: Years to sync.

        Returns:
            Added/updated counts per year.

        Raises:
            CompanyLocationNotFoundError: If the company has no location.
            ValidationError: If the provider has no calendar for the region.
        """
        location = self.get_location(company_id)
        if not location:
            raise CompanyLocationNotFoundError(
                f"Company {company_id} has no location configured"
            )

        results = []
        for year in years:
            try:
                fetched = self.provider.fetch_year(
                    location.country_code, year, location.region_code
                )
            except NotImplementedError as e:
                raise ValidationError(
                    f"No holiday calendar for {location.region_code}: {e}"
                ) from None
            added = updated = 0
            for record in fetched:
                try:
                    with self.db.begin_nested():
                        if self._upsert_public_holiday(record, year):
                            added += 1
                        else:
                            updated += 1
                except SQLAlchemyError as e:
                    logger.warning(
                        f"Skipping holiday {record.name!r} on {record.date}: {e}"
                    )
            self.db.commit()
            logger.info(
                f"Synced {location.country_code}/{location.region_code} {year}: "
                f"{added} added, {updated} updated"
            )
            results.append(
                HolidaySyncResult(
                    year=year, holidays_added=added, holidays_updated=updated
                )
            )
        self._recheck_absences(company_id)
        return results

    def _upsert_public_holiday(self, record: ProviderHoliday, year: int) -> bool:
        """Insert or update one public holiday. Returns True when inserted."""
        region_filter = (
            PublicHoliday.region_code.is_(None)
            if record.region_code is None
            else PublicHoliday.region_code == record.region_code
        )
        existing = (
            self.db.query(PublicHoliday)
            .filter(
                PublicHoliday.date == record.date,
                PublicHoliday.country_code == record.country_code,
                region_filter,
            )
            .first()
        )
        if existing:
            existing.name = record.name
            existing.local_name = record.local_name
            existing.is_fixed = record.is_fixed
            self.db.flush()
            return False

        self.db.add(
            PublicHoliday(
                date=record.date,
                name=record.name,
                local_name=record.local_name,
                country_code=record.country_code,
                region_code=record.region_code,
                year=year,
                is_fixed=record.is_fixed,
                source=HolidaySource.PROVIDER,
            )
        )
        self.db.flush()
        return True

    def _company_holidays_in_range(
        self, company_id: UUID, date_from: date, date_to: date
    ) -> list[Holiday]:
        rows = (
            self.db.query(CompanyHoliday)
            .filter(
                CompanyHoliday.company_id == company_id,
                (CompanyHoliday.is_recurring == True)  # noqa: E712
                | (
                    (CompanyHoliday.date >= date_from)
                    & (CompanyHoliday.date <= date_to)
                ),
            )
            .all()
        )
        result = []
        for row in rows:
            if row.is_recurring:
                dates = recurring_dates(row.date.month, row.date.day, date_from, date_to)
            else:
                dates = [row.date]
            result.extend(
                Holiday(
                    date=d,
                    name=row.name,
                    scope=HolidayScope.COMPANY,
                    is_recurring=row.is_recurring,
                )
                for d in dates
            )
        return result

    def _recheck_absences(self, company_id: UUID) -> None:
        changed = AbsenceService(self.db, holidays=self).recheck_absences_for_company(
            company_id
        )
        if changed:
            logger.info(f"Holiday change updated {changed} absences of {company_id}")
