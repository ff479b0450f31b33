# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for time_entry_service."""

import uuid
from datetime import date, datetime

import pytest

from timeclock.exceptions import NotFoundError, ValidationError
from timeclock.models import EntryType, TimeEntry, User
from timeclock.schemas.time_entry import TimeEntryCreate, TimeEntryUpdate
from timeclock.services.time_entry_service import TimeEntryService


@pytest.fixture
def service(db_session) -> TimeEntryService:
    return TimeEntryService(db_session)


def morning(day: int = 18) -> TimeEntryCreate:
    return TimeEntryCreate(
        start_time=datetime(2025, 3, day, 9, 0),
        end_time=datetime(2025, 3, day, 13, 0),
    )


class TestCreate:
    """Tests for recording entries directly."""

    def test_duration_derived_from_bounds(self, service, company, test_user):
        data = TimeEntryCreate(
            start_time=datetime(2025, 3, 18, 9, 0),
            end_time=datetime(2025, 3, 18, 10, 30, 30),
            entry_type=EntryType.PAUSE_COFFEE,
            is_in_office=False,
        )

        entry = service.create_entry(company.id, test_user.id, data)

        assert entry.duration_minutes == 91
        assert entry.entry_type == EntryType.PAUSE_COFFEE
        assert entry.is_in_office is False
        assert entry.work_date == date(2025, 3, 18)

    @pytest.mark.parametrize(
        "end_time", [datetime(2025, 3, 18, 9, 0), datetime(2025, 3, 18, 8, 30)]
    )
    def test_end_not_after_start(self, service, db_session, company, test_user, end_time):
        data = TimeEntryCreate(start_time=datetime(2025, 3, 18, 9, 0), end_time=end_time)

        with pytest.raises(ValidationError):
            service.create_entry(company.id, test_user.id, data)
        assert db_session.query(TimeEntry).count() == 0


class TestUpdate:
    """Tests for editing entries."""

    def test_update_recomputes_duration(self, service, company, test_user):
        entry = service.create_entry(company.id, test_user.id, morning())

        updated = service.update_entry(
            test_user.id,
            entry.id,
            TimeEntryUpdate(end_time=datetime(2025, 3, 18, 14, 15), is_in_office=False),
        )

        assert updated.start_time == datetime(2025, 3, 18, 9, 0)
        assert updated.duration_minutes == 315
        assert updated.is_in_office is False

    def test_update_rejects_inverted_bounds(self, service, company, test_user):
        entry = service.create_entry(company.id, test_user.id, morning())

        with pytest.raises(ValidationError):
            service.update_entry(
                test_user.id,
                entry.id,
                TimeEntryUpdate(start_time=datetime(2025, 3, 18, 13, 0)),
            )
        assert service.get_entry(test_user.id, entry.id).duration_minutes == 240

    def test_update_other_users_entry(self, service, db_session, company, test_user):
        other = User(company_id=company.id, name="Other", email="other@example.com")
        db_session.add(other)
        db_session.commit()
        entry = service.create_entry(company.id, test_user.id, morning())

        with pytest.raises(NotFoundError):
            service.update_entry(other.id, entry.id, TimeEntryUpdate(is_in_office=False))


class TestListAndDelete:
    """Tests for listing and deleting entries."""

    def test_list_filters_by_start_date(self, service, company, test_user):
        for day in (17, 18, 19):
            service.create_entry(company.id, test_user.id, morning(day))

        entries = service.list_entries(test_user.id, date(2025, 3, 18), date(2025, 3, 19))

        assert [e.work_date for e in entries] == [date(2025, 3, 19), date(2025, 3, 18)]
        assert len(service.list_entries(test_user.id)) == 3

    def test_list_rejects_inverted_range(self, service, test_user):
        with pytest.raises(ValidationError):
            service.list_entries(test_user.id, date(2025, 3, 19), date(2025, 3, 18))

    def test_delete(self, service, db_session, company, test_user):
        entry = service.create_entry(company.id, test_user.id, morning())

        service.delete_entry(test_user.id, entry.id)

        assert db_session.query(TimeEntry).count() == 0
        with pytest.raises(NotFoundError):
            service.delete_entry(test_user.id, entry.id)

    def test_get_unknown(self, service, test_user):
        with pytest.raises(NotFoundError):
            service.get_entry(test_user.id, uuid.uuid4())
