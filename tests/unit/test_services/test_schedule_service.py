# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for schedule_service."""

from decimal import Decimal

import pytest

from timeclock.exceptions import PermissionDeniedError, ValidationError
from timeclock.models import User, WorkSchedule
from timeclock.schemas.work_schedule import WorkScheduleDayInput
from timeclock.services.schedule_service import (
    ScheduleService,
    merge_schedule,
    validate_schedule_days,
)


def make_row(dow: int, start="09:00", end="18:00", brk=None, user_id=None, workable=True):
    return WorkSchedule(
        day_of_week=dow,
        user_id=user_id,
        is_workable=workable,
        start_time=start,
        end_time=end,
        break_start_time=brk[0] if brk else None,
        break_end_time=brk[1] if brk else None,
    )


def workday(dow: int, start="09:00", end="17:00", **kwargs) -> WorkScheduleDayInput:
    return WorkScheduleDayInput(day_of_week=dow, start_time=start, end_time=end, **kwargs)


class TestMergeSchedule:
    """Tests for merging defaults with overrides."""

    def test_expected_minutes_subtract_break(self):
        """09:00-18:00 with a one hour break expects 480 minutes."""
        schedule = merge_schedule([make_row(1, brk=("13:00", "14:00"))], [])
        assert schedule.day(1).expected_minutes == 480

    def test_always_seven_days(self):
        schedule = merge_schedule([make_row(0)], [])
        assert [d.day_of_week for d in schedule.days] == list(range(7))
        assert schedule.day(3).is_workable is False
        assert schedule.day(3).expected_minutes == 0

    def test_override_wins(self):
        """A user override replaces the default for that weekday only."""
        defaults = [make_row(0), make_row(1)]
        overrides = [make_row(0, start="10:00", end="14:00", user_id="u")]
        schedule = merge_schedule(defaults, overrides)

        assert schedule.day(0).expected_minutes == 240
        assert schedule.day(0).is_override is True
        assert schedule.day(1).expected_minutes == 540
        assert schedule.day(1).is_override is False

    def test_override_for_day_missing_from_defaults(self):
        schedule = merge_schedule([make_row(0)], [make_row(5, user_id="u")])
        assert schedule.day(5).is_workable is True
        assert schedule.workable_days == 2

    def test_override_can_make_day_non_working(self):
        overrides = [make_row(0, "00:00", "00:00", user_id="u", workable=False)]
        schedule = merge_schedule([make_row(0)], overrides)
        assert schedule.day(0).is_workable is False
        assert schedule.day(0).expected_minutes == 0

    def test_merge_is_idempotent(self):
        defaults = [make_row(d) for d in range(5)]
        overrides = [make_row(2, "08:00", "12:00", user_id="u")]
        assert merge_schedule(defaults, overrides) == merge_schedule(defaults, overrides)

    def test_break_longer_than_shift_floors_at_zero(self):
        schedule = merge_schedule([make_row(0, "09:00", "10:00", brk=("08:00", "12:00"))], [])
        assert schedule.day(0).expected_minutes == 0

    def test_weekly_minutes(self):
        schedule = merge_schedule(
            [make_row(d, brk=("13:00", "14:00")) for d in range(5)], []
        )
        assert schedule.weekly_minutes == 2400
        assert schedule.workable_days == 5


class TestValidateScheduleDays:
    """Tests for schedule update validation."""

    def test_valid_days(self):
        validate_schedule_days(
            [
                workday(0, break_start_time="12:00", break_end_time="12:30"),
                WorkScheduleDayInput(day_of_week=6, is_workable=False),
            ]
        )

    def test_duplicate_day(self):
        with pytest.raises(ValidationError, match="Duplicate"):
            validate_schedule_days([workday(0), workday(0)])

    def test_workable_needs_times(self):
        with pytest.raises(ValidationError):
            validate_schedule_days([WorkScheduleDayInput(day_of_week=0)])

    def test_end_before_start(self):
        with pytest.raises(ValidationError, match="end_time"):
            validate_schedule_days([workday(0, start="17:00", end="09:00")])

    def test_half_break_rejected(self):
        with pytest.raises(ValidationError, match="break"):
            validate_schedule_days([workday(0, break_start_time="12:00")])

    def test_break_outside_hours(self):
        with pytest.raises(ValidationError, match="within working hours"):
            validate_schedule_days(
                [workday(0, break_start_time="08:00", break_end_time="09:30")]
            )

    def test_inverted_break(self):
        with pytest.raises(ValidationError, match="break end"):
            validate_schedule_days(
                [workday(0, break_start_time="13:00", break_end_time="12:00")]
            )


class TestScheduleService:
    """Tests for ScheduleService against the database."""

    def test_effective_schedule_reads_defaults_and_overrides(
        self, db_session, company, test_user, default_schedule
    ):
        db_session.add(
            WorkSchedule(
                company_id=company.id,
                user_id=test_user.id,
                day_of_week=4,
                is_workable=True,
                start_time="08:00",
                end_time="14:00",
            )
        )
        db_session.commit()

        schedule = ScheduleService(db_session).get_effective_schedule(
            company.id, test_user.id
        )
        assert schedule.day(0).expected_minutes == 480
        assert schedule.day(4).expected_minutes == 360
        assert schedule.day(5).is_workable is False

    def test_other_users_overrides_ignored(
        self, db_session, company, test_user, default_schedule
    ):
        other = User(company_id=company.id, name="Other", email="other@example.com")
        db_session.add(other)
        db_session.flush()
        db_session.add(
            WorkSchedule(
                company_id=company.id,
                user_id=other.id,
                day_of_week=0,
                is_workable=False,
                start_time="00:00",
                end_time="00:00",
            )
        )
        db_session.commit()

        schedule = ScheduleService(db_session).get_effective_schedule(
            company.id, test_user.id
        )
        assert schedule.day(0).is_workable is True

    def test_malformed_time_raises_value_error(self, db_session, company, test_user):
        db_session.add(
            WorkSchedule(
                company_id=company.id,
                day_of_week=0,
                is_workable=True,
                start_time="9:00",
                end_time="17:00",
            )
        )
        db_session.commit()

        with pytest.raises(ValueError):
            ScheduleService(db_session).get_effective_schedule(company.id, test_user.id)

    def test_update_company_default_replaces_rows(
        self, db_session, company, test_user, default_schedule
    ):
        service = ScheduleService(db_session)
        rows = service.update_company_default(company.id, [workday(0), workday(1)])

        assert [r.day_of_week for r in rows] == [0, 1]
        assert len(service.get_company_default(company.id)) == 2

    def test_update_company_default_recalculates_hourly_cost(
        self, db_session, company, test_user
    ):
        days = [
            workday(d, "09:00", "18:00", break_start_time="13:00", break_end_time="14:00")
            for d in range(5)
        ]
        ScheduleService(db_session).update_company_default(company.id, days)

        db_session.refresh(test_user)
        # 3000 / (8h * 21.75)
        assert test_user.hourly_cost == Decimal("17.24")

    def test_non_workable_day_stored_with_placeholders(self, db_session, company):
        rows = ScheduleService(db_session).update_company_default(
            company.id, [WorkScheduleDayInput(day_of_week=6, is_workable=False)]
        )
        assert rows[0].start_time == "00:00"
        assert rows[0].end_time == "00:00"
        assert rows[0].break_start_time is None

    def test_invalid_update_keeps_previous_rows(
        self, db_session, company, default_schedule
    ):
        service = ScheduleService(db_session)
        with pytest.raises(ValidationError):
            service.update_company_default(
                company.id, [workday(0, start="18:00", end="09:00")]
            )
        assert len(service.get_company_default(company.id)) == 7

    def test_update_user_overrides(self, db_session, company, test_user, default_schedule):
        service = ScheduleService(db_session)
        rows = service.update_user_overrides(
            company.id, test_user.id, [workday(0, "08:00", "12:00")]
        )

        assert len(rows) == 1
        assert rows[0].user_id == test_user.id
        db_session.refresh(test_user)
        # Weekly 4h + 4 * 8h over 5 days = 7.2h average
        assert test_user.hourly_cost == Decimal("19.16")

    def test_update_user_overrides_denied(self, db_session, company, test_user):
        with pytest.raises(PermissionDeniedError):
            ScheduleService(db_session).update_user_overrides(
                company.id, test_user.id, [workday(0)], allow_user_edit=False
            )

    def test_delete_user_overrides(self, db_session, company, test_user, default_schedule):
        service = ScheduleService(db_session)
        service.update_user_overrides(company.id, test_user.id, [workday(0), workday(1)])

        assert service.delete_user_overrides(company.id, test_user.id) == 2
        assert service.get_user_overrides(company.id, test_user.id) == []
        assert service.has_overrides(company.id, test_user.id) is False
