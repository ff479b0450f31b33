# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Work schedule resolution and maintenance.

A company keeps one default weekly schedule; any user may override
individual weekdays. The effective schedule of a user is the default with
those overrides laid on top.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.orm import Session

from timeclock.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from timeclock.models import User, WorkSchedule
from timeclock.schemas.work_schedule import WorkScheduleDayInput
from timeclock.services.time_utils import minutes_between, parse_hhmm

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
PLACEHOLDER_TIME = "00:00"


@dataclass
class ScheduleDay:
    """One resolved weekday."""

    day_of_week: int
    is_workable: bool
    start_time: str | None = None
    end_time: str | None = None
    break_start_time: str | None = None
    break_end_time: str | None = None
    expected_minutes: int = 0
    is_override: bool = False


@dataclass
class EffectiveSchedule:
    """Exactly seven resolved days, Monday first."""

    days: list[ScheduleDay]

    def day(self, day_of_week: int) -> ScheduleDay:
        """Return the schedule for a weekday (0=Monday)."""
        return self.days[day_of_week]

    @property
    def weekly_minutes(self) -> int:
        """Total expected minutes over the week."""
        return sum(d.expected_minutes for d in self.days if d.is_workable)

    @property
    def workable_days(self) -> int:
        """Number of workable weekdays."""
        return sum(1 for d in self.days if d.is_workable)


def expected_minutes_for(row: WorkSchedule) -> int:
    """Expected working minutes of a stored schedule row.

    Args:
        row: The schedule row.

    Returns:
        Minutes between start and end minus the break, never negative.
        Non-workable rows expect nothing.

    Raises:
        ValueError: If a stored time is malformed.
    """
    if not row.is_workable:
        return 0
    minutes = minutes_between(row.start_time, row.end_time)
    if row.break_start_time and row.break_end_time:
        minutes -= minutes_between(row.break_start_time, row.break_end_time)
    return max(minutes, 0)


def _to_day(row: WorkSchedule, is_override: bool) -> ScheduleDay:
    if not row.is_workable:
        return ScheduleDay(
            day_of_week=row.day_of_week, is_workable=False, is_override=is_override
        )
    return ScheduleDay(
        day_of_week=row.day_of_week,
        is_workable=True,
        start_time=row.start_time,
        end_time=row.end_time,
        break_start_time=row.break_start_time,
        break_end_time=row.break_end_time,
        expected_minutes=expected_minutes_for(row),
        is_override=is_override,
    )


def merge_schedule(
    defaults: Iterable[WorkSchedule], overrides: Iterable[WorkSchedule]
) -> EffectiveSchedule:
    """Lay per-user overrides over the company default.

    Days present in neither set are non-workable.
    """
    by_day = {row.day_of_week: _to_day(row, is_override=False) for row in defaults}
    for row in overrides:
        by_day[row.day_of_week] = _to_day(row, is_override=True)

    return EffectiveSchedule(
        days=[
            by_day.get(dow, ScheduleDay(day_of_week=dow, is_workable=False))
            for dow in range(DAYS_PER_WEEK)
        ]
    )


def validate_schedule_days(days: Sequence[WorkScheduleDayInput]) -> None:
    """Validate a schedule update request.

    Raises:
        ValidationError: On the first rule violated.
    """
    seen: set[int] = set()
    for day in days:
        if not 0 <= day.day_of_week < DAYS_PER_WEEK:
            raise ValidationError(f"Invalid day_of_week: {day.day_of_week}")
        if day.day_of_week in seen:
            raise ValidationError(f"Duplicate day_of_week: {day.day_of_week}")
        seen.add(day.day_of_week)

        if not day.is_workable:
            continue

        if not day.start_time or not day.end_time:
            raise ValidationError(
                f"Day {day.day_of_week}: workable days need start_time and end_time"
            )
        try:
            start = parse_hhmm(day.start_time)
            end = parse_hhmm(day.end_time)
        except ValueError as e:
            raise ValidationError(str(e)) from None
        if end <= start:
            raise ValidationError(
                f"Day {day.day_of_week}: end_time must be after start_time"
            )

        if bool(day.break_start_time) != bool(day.break_end_time):
            raise ValidationError(
                f"Day {day.day_of_week}: break needs both start and end"
            )
        if day.break_start_time and day.break_end_time:
            try:
                break_start = parse_hhmm(day.break_start_time)
                break_end = parse_hhmm(day.break_end_time)
            except ValueError as e:
                raise ValidationError(str(e)) from None
            if break_end <= break_start:
                raise ValidationError(
                    f"Day {day.day_of_week}: break end must be after break start"
                )
            if break_start < start or break_end > end:
                raise ValidationError(
                    f"Day {day.day_of_week}: break must be within working hours"
                )


class ScheduleService:
    """Service for resolving and maintaining work schedules."""

    def __init__(self, db: Session) -> None:
        """Initialize the service.

        Args:
            db: Database session.
        """
        self.db = db

    def get_company_default(self, company_id: UUID) -> list[WorkSchedule]:
        """Get the company default rows ordered by weekday."""
        return (
            self.db.query(WorkSchedule)
            .filter(
                WorkSchedule.company_id == company_id,
                WorkSchedule.user_id.is_(None),
            )
            .order_by(WorkSchedule.day_of_week)
            .all()
        )

    def get_user_overrides(self, company_id: UUID, user_id: UUID) -> list[WorkSchedule]:
        """Get a user's override rows ordered by weekday."""
        return (
            self.db.query(WorkSchedule)
            .filter(
                WorkSchedule.company_id == company_id,
                WorkSchedule.user_id == user_id,
            )
            .order_by(WorkSchedule.day_of_week)
            .all()
        )

    def get_effective_schedule(self, company_id: UUID, user_id: UUID) -> EffectiveSchedule:
        """Resolve the weekly schedule that applies to a user.

        Defaults and overrides are read in a single query.

        Args:
            company_id: The company ID.
            user_id: The user ID.

        Returns:
            The merged seven-day schedule.

        Raises:
            ValueError: If a stored time string is malformed.
        """
        rows = (
            self.db.query(WorkSchedule)
            .filter(
                WorkSchedule.company_id == company_id,
                (WorkSchedule.user_id.is_(None)) | (WorkSchedule.user_id == user_id),
            )
            .all()
        )
        defaults = [r for r in rows if r.user_id is None]
        overrides = [r for r in rows if r.user_id is not None]
        return merge_schedule(defaults, overrides)

    def has_overrides(self, company_id: UUID, user_id: UUID) -> bool:
        """Check whether a user has any personal schedule rows."""
        return (
            self.db.query(WorkSchedule.id)
            .filter(
                WorkSchedule.company_id == company_id,
                WorkSchedule.user_id == user_id,
            )
            .first()
            is not None
        )

    def update_company_default(
        self, company_id: UUID, days: Sequence[WorkScheduleDayInput]
    ) -> list[WorkSchedule]:
        """Replace the company default schedule.

        Hourly costs of salaried users following the default are
        recalculated once the new schedule is committed.

        Args:
            company_id: The company ID.
            days: The new default days.

        Returns:
            The stored default rows.

        Raises:
            ValidationError: If the days are invalid.
        """
        validate_schedule_days(days)
        self._replace_rows(company_id, None, days)
        logger.info(f"Replaced default schedule of company {company_id} ({len(days)} days)")

        self._cost_service().recalculate_for_company(company_id)
        return self.get_company_default(company_id)

    def update_user_overrides(
        self,
        company_id: UUID,
        user_id: UUID,
        days: Sequence[WorkScheduleDayInput],
        allow_user_edit: bool = True,
    ) -> list[WorkSchedule]:
        """Replace a user's schedule overrides.

        Args:
            company_id: The company ID.
            user_id: The user ID.
            days: The new override days.
            allow_user_edit: Whether the caller may edit this schedule.

        Returns:
            The stored override rows.

        Raises:
            PermissionDeniedError: If editing is not allowed.
            NotFoundError: If the user is not in the company.
            ValidationError: If the days are invalid.
        """
        if not allow_user_edit:
            raise PermissionDeniedError("Editing this work schedule is not allowed")
        self._require_user(company_id, user_id)
        validate_schedule_days(days)
        self._replace_rows(company_id, user_id, days)
        logger.info(f"Replaced schedule overrides of user {user_id} ({len(days)} days)")

        self._cost_service().recalculate_for_user(company_id, user_id)
        return self.get_user_overrides(company_id, user_id)

    def delete_user_overrides(
        self, company_id: UUID, user_id: UUID, allow_user_edit: bool = True
    ) -> int:
        """Remove all of a user's overrides.

        Returns:
            Number of rows removed.
        """
        if not allow_user_edit:
            raise PermissionDeniedError("Editing this work schedule is not allowed")
        self._require_user(company_id, user_id)
        deleted = (
            self.db.query(WorkSchedule)
            .filter(
                WorkSchedule.company_id == company_id,
                WorkSchedule.user_id == user_id,
            )
            .delete(synchronize_session=False)
        )
        self.db.commit()
        logger.info(f"Removed {deleted} schedule overrides of user {user_id}")

        self._cost_service().recalculate_for_user(company_id, user_id)
        return deleted

    def _replace_rows(
        self,
        company_id: UUID,
        user_id: UUID | None,
        days: Sequence[WorkScheduleDayInput],
    ) -> None:
        owner = (
            WorkSchedule.user_id.is_(None)
            if user_id is None
            else WorkSchedule.user_id == user_id
        )
        try:
            self.db.query(WorkSchedule).filter(
                WorkSchedule.company_id == company_id, owner
            ).delete(synchronize_session=False)
            for day in days:
                self.db.add(self._row_from_input(company_id, user_id, day))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    @staticmethod
    def _row_from_input(
        company_id: UUID, user_id: UUID | None, day: WorkScheduleDayInput
    ) -> WorkSchedule:
        if not day.is_workable:
            return WorkSchedule(
                company_id=company_id,
                user_id=user_id,
                day_of_week=day.day_of_week,
                is_workable=False,
                start_time=PLACEHOLDER_TIME,
                end_time=PLACEHOLDER_TIME,
            )
        return WorkSchedule(
            company_id=company_id,
            user_id=user_id,
            day_of_week=day.day_of_week,
            is_workable=True,
            start_time=day.start_time,
            end_time=day.end_time,
            break_start_time=day.break_start_time,
            break_end_time=day.break_end_time,
        )

    def _require_user(self, company_id: UUID, user_id: UUID) -> User:
        user = (
            self.db.query(User)
            .filter(User.id == user_id, User.company_id == company_id)
            .first()
        )
        if not user:
            raise NotFoundError("User not found")
        return user

    def _cost_service(self):
        # hourly_cost_service depends on this module
        from timeclock.services.hourly_cost_service import HourlyCostService

        return HourlyCostService(self.db)
