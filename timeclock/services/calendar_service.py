# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Attendance calendar aggregation.

``build_calendar`` is a pure function: it classifies each date of a range
from the effective schedule, holidays, approved absences and time entries,
and summarises the result. ``CalendarService`` gathers those inputs.
"""

import logging
from calendar import monthrange
from collections import defaultdict
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta
from uuid import UUID

from sqlalchemy.orm import Session

from timeclock.clock import Clock, SystemClock
from timeclock.exceptions import (
    CompanyLocationNotFoundError,
    NotFoundError,
    ValidationError,
)
from timeclock.models import Absence, DayStatus, EntryType, HolidayScope, TimeEntry, User
from timeclock.schemas.calendar import (
    CalendarDay,
    CalendarResponse,
    CalendarSummary,
    TimeEntryBrief,
)
from timeclock.schemas.holiday import Holiday
from timeclock.services.absence_service import AbsenceService
from timeclock.services.holiday_service import HolidayService
from timeclock.services.lookups import AbsenceLookup, HolidayLookup
from timeclock.services.schedule_service import EffectiveSchedule, ScheduleService
from timeclock.services.time_utils import daterange, round_half_up

logger = logging.getLogger(__name__)

MIN_YEAR = 2000
MAX_YEAR = 2100

_PUBLIC_SCOPES = (HolidayScope.NATIONAL, HolidayScope.REGIONAL)
_NOT_WORKING_DAY = (DayStatus.FUTURE, DayStatus.BEFORE_USER_CREATED)


def _holiday_label(holiday: Holiday) -> str:
    return holiday.local_name or holiday.name


def classify_day(
    day: date,
    *,
    today: date,
    user_created: date,
    expected_minutes: int,
    logged_minutes: int,
    public_holiday: Holiday | None,
    company_holiday: Holiday | None,
    absence: Absence | None,
) -> CalendarDay:
    """Classify a single date. The first matching rule wins.

    Args:
        day: The date.
        today: Current date; later dates are FUTURE.
        user_created: Date the user was created.
        expected_minutes: Scheduled minutes for the date.
        logged_minutes: WORK minutes logged on the date.
        public_holiday: National or regional holiday on the date.
        company_holiday: Company holiday on the date.
        absence: Approved absence covering the date.

    Returns:
        The classified day, without entries.
    """
    result = CalendarDay(
        date=day,
        day_of_week=day.weekday(),
        status=DayStatus.MISSING_LOGS,
        expected_minutes=expected_minutes,
        logged_minutes=logged_minutes,
    )

    if day < user_created:
        result.status = DayStatus.BEFORE_USER_CREATED
    elif day > today:
        result.status = DayStatus.FUTURE
    elif public_holiday:
        result.status = DayStatus.PUBLIC_HOLIDAY
        result.holiday_name = _holiday_label(public_holiday)
        result.is_overtime = logged_minutes > 0 or None
    elif company_holiday:
        result.status = DayStatus.COMPANY_HOLIDAY
        result.holiday_name = _holiday_label(company_holiday)
        result.is_overtime = logged_minutes > 0 or None
    elif absence:
        result.status = DayStatus.ABSENCE
        result.absence_type = absence.type
        result.is_overtime = logged_minutes > 0 or None
    elif expected_minutes == 0:
        result.status = DayStatus.NON_WORKING_DAY
        result.is_overtime = logged_minutes > 0 or None
    elif logged_minutes >= expected_minutes:
        result.status = DayStatus.WORKED
    elif logged_minutes > 0:
        result.status = DayStatus.PARTIALLY_WORKED
    return result


def summarize(days: Sequence[CalendarDay]) -> CalendarSummary:
    """Aggregate statistics over days not flagged as outside the month."""
    summary = CalendarSummary()
    for day in days:
        if day.is_outside_month:
            continue
        if day.expected_minutes > 0 and day.status not in _NOT_WORKING_DAY:
            summary.working_days += 1
            summary.total_expected_minutes += day.expected_minutes
        if day.status in (DayStatus.WORKED, DayStatus.PARTIALLY_WORKED):
            summary.days_worked += 1
        elif day.status == DayStatus.MISSING_LOGS:
            summary.days_missing += 1
        elif day.status == DayStatus.PUBLIC_HOLIDAY:
            summary.public_holidays += 1
        elif day.status == DayStatus.COMPANY_HOLIDAY:
            summary.company_holidays += 1
        elif day.status == DayStatus.ABSENCE:
            summary.absence_days += 1
        summary.total_logged_minutes += day.logged_minutes

    if summary.total_expected_minutes > 0:
        ratio = summary.total_logged_minutes * 100 / summary.total_expected_minutes
        summary.compliance_percentage = int(round_half_up(ratio))
    return summary


def build_calendar(
    date_from: date,
    date_to: date,
    *,
    schedule: EffectiveSchedule,
    holidays: Sequence[Holiday],
    absences: Sequence[Absence],
    entries: Sequence[TimeEntry],
    today: date,
    user_created: date,
    month_bounds: tuple[date, date] | None = None,
) -> CalendarResponse:
    """Classify every date of a range and summarise it.

    Args:
        date_from: First date, inclusive.
        date_to: Last date, inclusive.
        schedule: The user's effective weekly schedule.
        holidays: Holidays resolved for the range.
        absences: Approved absences intersecting the range.
        entries: Time entries starting in the range.
        today: Current date.
        user_created: Date the user was created.
        month_bounds: First and last day of the month for padded month
            views; days outside are flagged ``is_outside_month``.

    Returns:
        The calendar days in ascending order with their summary.
    """
    public_by_date: dict[date, Holiday] = {}
    company_by_date: dict[date, Holiday] = {}
    for holiday in holidays:
        target = public_by_date if holiday.scope in _PUBLIC_SCOPES else company_by_date
        target.setdefault(holiday.date, holiday)

    entries_by_date: dict[date, list[TimeEntry]] = defaultdict(list)
    for entry in sorted(entries, key=lambda e: e.start_time):
        entries_by_date[entry.work_date].append(entry)

    # Earliest starting absence wins on overlap
    ordered_absences = sorted(absences, key=lambda a: a.start_date)

    days = []
    for day in daterange(date_from, date_to):
        day_entries = entries_by_date.get(day, [])
        logged = sum(
            e.duration_minutes for e in day_entries if e.entry_type == EntryType.WORK
        )
        scheduled = schedule.day(day.weekday())
        expected = scheduled.expected_minutes if scheduled.is_workable else 0

        calendar_day = classify_day(
            day,
            today=today,
            user_created=user_created,
            expected_minutes=expected,
            logged_minutes=logged,
            public_holiday=public_by_date.get(day),
            company_holiday=company_by_date.get(day),
            absence=next((a for a in ordered_absences if a.covers(day)), None),
        )
        calendar_day.entries = [TimeEntryBrief.model_validate(e) for e in day_entries]
        if month_bounds:
            calendar_day.is_outside_month = not (
                month_bounds[0] <= day <= month_bounds[1]
            )
        days.append(calendar_day)

    return CalendarResponse(days=days, summary=summarize(days))


def month_range(year: int, month: int) -> tuple[date, date, date, date]:
    """Bounds of a 0-indexed month and its Monday-to-Sunday padding.

    Returns:
        (padded_start, first_day, last_day, padded_end)
    """
    first = date(year, month + 1, 1)
    last = date(year, month + 1, monthrange(year, month + 1)[1])
    padded_start = first - timedelta(days=first.weekday())
    padded_end = last + timedelta(days=6 - last.weekday())
    return padded_start, first, last, padded_end


class CalendarService:
    """Service assembling attendance calendars."""

    def __init__(
        self,
        db: Session,
        clock: Clock | None = None,
        holidays: HolidayLookup | None = None,
        absences: AbsenceLookup | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            db: Database session.
            clock: Source of "today".
            holidays: Holiday lookup; defaults to ``HolidayService``.
            absences: Absence lookup; defaults to ``AbsenceService``.
        """
        self.db = db
        self.clock = clock or SystemClock()
        self.schedules = ScheduleService(db)
        self.holidays = holidays or HolidayService(db)
        self.absences = absences or AbsenceService(db)

    def get_calendar(
        self, company_id: UUID, user_id: UUID, date_from: date, date_to: date
    ) -> CalendarResponse:
        """Calendar for an arbitrary inclusive range.

        Raises:
            ValidationError: If date_from is after date_to.
            NotFoundError: If the user is not in the company.
        """
        if date_from > date_to:
            raise ValidationError("'from' must not be after 'to'")
        return self._build(company_id, user_id, date_from, date_to)

    def get_calendar_month(
        self, company_id: UUID, user_id: UUID, year: int, month: int
    ) -> CalendarResponse:
        """Calendar for a month padded to whole weeks.

        Args:
            company_id: The company ID.
            user_id: The user ID.
            year: Year between 2000 and 2100.
            month: Month, 0-indexed (0 = January).

        Raises:
            ValidationError: If year or month is out of range.
        """
        if not MIN_YEAR <= year <= MAX_YEAR:
            raise ValidationError(f"year must be between {MIN_YEAR} and {MAX_YEAR}")
        if not 0 <= month <= 11:
            raise ValidationError("month must be between 0 and 11")

        padded_start, first, last, padded_end = month_range(year, month)
        return self._build(
            company_id, user_id, padded_start, padded_end, month_bounds=(first, last)
        )

    def _build(
        self,
        company_id: UUID,
        user_id: UUID,
        date_from: date,
        date_to: date,
        month_bounds: tuple[date, date] | None = None,
    ) -> CalendarResponse:
        user = (
            self.db.query(User)
            .filter(User.id == user_id, User.company_id == company_id)
            .first()
        )
        if not user:
            raise NotFoundError("User not found")

        try:
            schedule = self.schedules.get_effective_schedule(company_id, user_id)
        except ValueError as e:
            raise ValidationError(str(e)) from None

        try:
            holidays = self.holidays.resolve(company_id, date_from, date_to)
        except CompanyLocationNotFoundError:
            logger.warning(
                f"Company {company_id} has no location; calendar built without holidays"
            )
            holidays = []

        return build_calendar(
            date_from,
            date_to,
            schedule=schedule,
            holidays=holidays,
            absences=self.absences.resolve(user_id, date_from, date_to),
            entries=self._entries(user_id, date_from, date_to),
            today=self.clock.today(),
            user_created=user.created_at.date(),
            month_bounds=month_bounds,
        )

    def _entries(self, user_id: UUID, date_from: date, date_to: date) -> list[TimeEntry]:
        start = datetime.combine(date_from, time.min)
        end = datetime.combine(date_to + timedelta(days=1), time.min)
        return (
            self.db.query(TimeEntry)
            .filter(
                TimeEntry.user_id == user_id,
                TimeEntry.start_time >= start,
                TimeEntry.start_time < end,
            )
            .order_by(TimeEntry.start_time)
            .all()
        )
