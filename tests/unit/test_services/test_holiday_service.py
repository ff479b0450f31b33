# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for holiday_service."""

import uuid
from datetime import date

import pytest

from timeclock.config import settings
from timeclock.exceptions import CompanyLocationNotFoundError, ConflictError, NotFoundError
from timeclock.integrations.base import HolidayProvider, ProviderHoliday
from timeclock.models import (
    Absence,
    AbsenceStatus,
    AbsenceType,
    Company,
    CompanyHoliday,
    CompanyLocation,
    HolidayScope,
    PublicHoliday,
)
from timeclock.services.holiday_service import HolidayService, recurring_dates


class FakeProvider(HolidayProvider):
    """Provider returning a fixed list of holidays."""

    def __init__(self, records: list[ProviderHoliday]):
        self.records = records
        self.calls: list[tuple[str, int, str | None]] = []

    @classmethod
    def get_type(cls) -> str:
        return "fake"

    def fetch_year(self, country_code, year, region_code=None):
        self.calls.append((country_code, year, region_code))
        return [r for r in self.records if r.date.year == year]


def provider_holiday(day: date, name: str, region_code: str | None = None) -> ProviderHoliday:
    return ProviderHoliday(
        date=day,
        name=name,
        local_name=name,
        country_code="ES",
        region_code=region_code,
        is_fixed=True,
    )


def add_public(db_session, day: date, name: str, region_code: str | None = None, local_name=None):
    db_session.add(
        PublicHoliday(
            date=day,
            name=name,
            local_name=local_name,
            country_code="ES",
            region_code=region_code,
            year=day.year,
        )
    )
    db_session.commit()


class TestRecurringDates:
    """Tests for projecting recurring holidays."""

    def test_matches_every_year_in_range(self):
        assert recurring_dates(12, 24, date(2024, 12, 1), date(2025, 12, 31)) == [
            date(2024, 12, 24),
            date(2025, 12, 24),
        ]

    def test_outside_range(self):
        assert recurring_dates(12, 24, date(2025, 1, 1), date(2025, 6, 30)) == []

    def test_feb_29_only_in_leap_years(self):
        assert recurring_dates(2, 29, date(2023, 1, 1), date(2025, 12, 31)) == [
            date(2024, 2, 29)
        ]


class TestResolve:
    """Tests for HolidayService.resolve."""

    def test_national_and_matching_region_only(self, db_session, company):
        add_public(db_session, date(2025, 1, 1), "New Year")
        add_public(db_session, date(2025, 5, 2), "Madrid Day", region_code="ES-MD")
        add_public(db_session, date(2025, 4, 23), "Sant Jordi", region_code="ES-CT")

        holidays = HolidayService(db_session).resolve(
            company.id, date(2025, 1, 1), date(2025, 12, 31)
        )

        assert [(h.date, h.scope) for h in holidays] == [
            (date(2025, 1, 1), HolidayScope.NATIONAL),
            (date(2025, 5, 2), HolidayScope.REGIONAL),
        ]
        assert holidays[1].region_code == "ES-MD"

    def test_company_holidays(self, db_session, company):
        db_session.add_all(
            [
                CompanyHoliday(company_id=company.id, date=date(2025, 3, 14), name="Offsite"),
                CompanyHoliday(
                    company_id=company.id,
                    date=date(2019, 12, 24),
                    name="Christmas Eve",
                    is_recurring=True,
                ),
                CompanyHoliday(company_id=company.id, date=date(2024, 3, 14), name="Old"),
            ]
        )
        db_session.commit()

        holidays = HolidayService(db_session).resolve(
            company.id, date(2025, 1, 1), date(2025, 12, 31)
        )

        assert [(h.date, h.name) for h in holidays] == [
            (date(2025, 3, 14), "Offsite"),
            (date(2025, 12, 24), "Christmas Eve"),
        ]
        assert all(h.scope == HolidayScope.COMPANY for h in holidays)
        assert holidays[1].is_recurring is True

    def test_same_date_in_different_scopes_kept_separately(self, db_session, company):
        add_public(db_session, date(2025, 1, 6), "Epiphany")
        db_session.add(
            CompanyHoliday(company_id=company.id, date=date(2025, 1, 6), name="Kings")
        )
        db_session.commit()

        holidays = HolidayService(db_session).resolve(
            company.id, date(2025, 1, 6), date(2025, 1, 6)
        )
        assert [h.scope for h in holidays] == [HolidayScope.NATIONAL, HolidayScope.COMPANY]

    def test_other_company_holidays_ignored(self, db_session, company):
        other = Company(name="Other")
        db_session.add(other)
        db_session.flush()
        db_session.add(CompanyHoliday(company_id=other.id, date=date(2025, 3, 3), name="X"))
        db_session.commit()

        assert HolidayService(db_session).resolve(
            company.id, date(2025, 3, 1), date(2025, 3, 31)
        ) == []

    def test_no_location_raises(self, db_session):
        company = Company(name="Nowhere")
        db_session.add(company)
        db_session.commit()

        with pytest.raises(CompanyLocationNotFoundError):
            HolidayService(db_session).resolve(company.id, date(2025, 1, 1), date(2025, 1, 31))

    def test_resolve_for_region_without_company(self, db_session):
        add_public(db_session, date(2025, 5, 2), "Madrid Day", region_code="ES-MD")
        holidays = HolidayService(db_session).resolve_for_region(
            "ES-MD", date(2025, 5, 1), date(2025, 5, 31)
        )
        assert len(holidays) == 1
        assert holidays[0].scope == HolidayScope.REGIONAL

    def test_public_holidays_are_not_recurring(self, db_session, company):
        db_session.add(
            PublicHoliday(
                date=date(2025, 12, 25),
                name="Christmas",
                country_code="ES",
                year=2025,
                is_fixed=True,
            )
        )
        db_session.commit()

        holidays = HolidayService(db_session).resolve(
            company.id, date(2025, 12, 1), date(2025, 12, 31)
        )
        assert holidays[0].scope == HolidayScope.NATIONAL
        assert holidays[0].is_recurring is False

    def test_location_country_defaults_from_settings(self, db_session, monkeypatch):
        monkeypatch.setattr(settings, "default_country_code", "PT")
        company = Company(name="Lisbon")
        db_session.add(company)
        db_session.flush()
        db_session.add(CompanyLocation(company_id=company.id, region_code="PT-11"))
        db_session.commit()

        assert HolidayService(db_session).get_location(company.id).country_code == "PT"


class TestIsHoliday:
    """Tests for HolidayService.is_holiday."""

    def test_public_holiday(self, db_session, company):
        add_public(db_session, date(2025, 1, 1), "New Year")
        service = HolidayService(db_session)
        assert service.is_holiday(company.id, date(2025, 1, 1)) is True
        assert service.is_holiday(company.id, date(2025, 1, 2)) is False

    def test_without_location(self, db_session):
        company = Company(name="Nowhere")
        db_session.add(company)
        db_session.commit()
        assert HolidayService(db_session).is_holiday(company.id, date(2025, 1, 1)) is False


class TestCompanyHolidayManagement:
    """Tests for creating and deleting company holidays."""

    def test_create_and_list(self, db_session, company):
        service = HolidayService(db_session)
        created = service.create_company_holiday(company.id, date(2025, 8, 1), "Summer")

        assert created.id is not None
        assert [h.name for h in service.list_company_holidays(company.id)] == ["Summer"]

    def test_create_duplicate_date(self, db_session, company):
        service = HolidayService(db_session)
        service.create_company_holiday(company.id, date(2025, 8, 1), "Summer")
        with pytest.raises(ConflictError):
            service.create_company_holiday(company.id, date(2025, 8, 1), "Again")

    def test_delete(self, db_session, company):
        service = HolidayService(db_session)
        created = service.create_company_holiday(company.id, date(2025, 8, 1), "Summer")
        service.delete_company_holiday(company.id, created.id)
        assert service.list_company_holidays(company.id) == []

    def test_delete_missing(self, db_session, company):
        with pytest.raises(NotFoundError):
            HolidayService(db_session).delete_company_holiday(company.id, uuid.uuid4())

    def test_holidays_for_year(self, db_session, company):
        add_public(db_session, date(2025, 12, 25), "Christmas", local_name="Navidad")
        add_public(db_session, date(2026, 1, 1), "New Year")
        HolidayService(db_session).create_company_holiday(
            company.id, date(2025, 2, 3), "Anniversary"
        )

        holidays = HolidayService(db_session).get_holidays_for_year(company.id, 2025)
        assert [h.name for h in holidays] == ["Anniversary", "Christmas"]
        assert holidays[1].local_name == "Navidad"


class TestSyncPublicHolidays:
    """Tests for syncing public holidays from a provider."""

    def test_adds_then_updates(self, db_session, company):
        provider = FakeProvider(
            [
                provider_holiday(date(2025, 1, 1), "New Year"),
                provider_holiday(date(2025, 5, 2), "Madrid Day", region_code="ES-MD"),
            ]
        )
        service = HolidayService(db_session, provider=provider)

        first = service.sync_public_holidays(company.id, [2025])
        assert first[0].year == 2025
        assert first[0].holidays_added == 2
        assert first[0].holidays_updated == 0
        assert provider.calls == [("ES", 2025, "ES-MD")]

        provider.records[0] = provider_holiday(date(2025, 1, 1), "New Year's Day")
        second = service.sync_public_holidays(company.id, [2025])
        assert second[0].holidays_added == 0
        assert second[0].holidays_updated == 2

        stored = db_session.query(PublicHoliday).order_by(PublicHoliday.date).all()
        assert [h.name for h in stored] == ["New Year's Day", "Madrid Day"]
        assert stored[1].region_code == "ES-MD"

    def test_failed_record_is_skipped(self, db_session, company):
        broken = ProviderHoliday(
            date=date(2025, 1, 6),
            name=None,
            local_name=None,
            country_code="ES",
            region_code=None,
            is_fixed=True,
        )
        provider = FakeProvider([provider_holiday(date(2025, 1, 1), "New Year"), broken])

        result = HolidayService(db_session, provider=provider).sync_public_holidays(
            company.id, [2025]
        )

        assert result[0].holidays_added == 1
        assert db_session.query(PublicHoliday).count() == 1

    def test_requires_location(self, db_session):
        company = Company(name="Nowhere")
        db_session.add(company)
        db_session.commit()

        with pytest.raises(CompanyLocationNotFoundError):
            HolidayService(db_session, provider=FakeProvider([])).sync_public_holidays(
                company.id, [2025]
            )

    def test_sync_rechecks_absences(self, db_session, company, test_user, default_schedule):
        absence = Absence(
            user_id=test_user.id,
            company_id=company.id,
            start_date=date(2025, 5, 2),
            end_date=date(2025, 5, 2),
            type=AbsenceType.PERSONAL_LEAVE,
            status=AbsenceStatus.APPROVED,
            workdays_count=1,
        )
        db_session.add(absence)
        db_session.commit()
        provider = FakeProvider(
            [provider_holiday(date(2025, 5, 2), "Madrid Day", region_code="ES-MD")]
        )

        HolidayService(db_session, provider=provider).sync_public_holidays(company.id, [2025])
        db_session.refresh(absence)

        assert absence.status == AbsenceStatus.CANCELLED
        assert absence.workdays_count == 0
