# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Absence requests, reviews and approved absence lookups.

Absences start PENDING. A review moves them to APPROVED or REJECTED, the
owner may cancel them, and a holiday change that leaves an open absence
without any workday cancels it.

``workdays_count`` is the number of scheduled, non-holiday dates the
absence covers. It is stored on request and recounted whenever the
company's holidays change.
"""

import logging
from collections.abc import Sequence
from datetime import date
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from timeclock.clock import Clock, SystemClock
from timeclock.exceptions import (
    CompanyLocationNotFoundError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from timeclock.models import Absence, AbsenceStatus, User
from timeclock.schemas.absence import AbsenceCreate, AbsenceReview, AbsenceStats
from timeclock.services.lookups import HolidayLookup
from timeclock.services.schedule_service import ScheduleService
from timeclock.services.time_utils import daterange

logger = logging.getLogger(__name__)

# Statuses that block overlapping requests and are kept in sync with holidays
OPEN_STATUSES = (AbsenceStatus.PENDING, AbsenceStatus.APPROVED)

AUTO_CANCEL_NOTE = (
    "[Automatic] Cancelled because the absence no longer covers any workday "
    "after a holiday change."
)


class AbsenceService:
    """Service for absence requests and approved absence queries."""

    def __init__(
        self,
        db: Session,
        holidays: HolidayLookup | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            db: Database session.
            holidays: Source of holiday dates for workday counting.
                Defaults to the stored holidays of the company.
            clock: Source of "now" for review timestamps.
        """
        self.db = db
        self.holidays = holidays
        self.clock = clock or SystemClock()

    def resolve(self, user_id: UUID, date_from: date, date_to: date) -> list[Absence]:
        """Approved absences of a user intersecting the inclusive range."""
        return self.resolve_many([user_id], date_from, date_to)

    def resolve_many(
        self, user_ids: Sequence[UUID], date_from: date, date_to: date
    ) -> list[Absence]:
        """Approved absences of several users intersecting the inclusive range.

        Args:
            user_ids: Users to include.
            date_from: First date, inclusive.
            date_to: Last date, inclusive.

        Returns:
            Absences ordered by start date.
        """
        if not user_ids:
            return []
        return (
            self.db.query(Absence)
            .filter(
                Absence.user_id.in_(list(user_ids)),
                Absence.status == AbsenceStatus.APPROVED,
                Absence.start_date <= date_to,
                Absence.end_date >= date_from,
            )
            .order_by(Absence.start_date, Absence.created_at)
            .all()
        )

    def resolve_for_company(
        self,
        company_id: UUID,
        date_from: date,
        date_to: date,
        user_id: UUID | None = None,
    ) -> list[Absence]:
        """Approved absences of a company's users, optionally one user only."""
        query = self.db.query(Absence).filter(
            Absence.company_id == company_id,
            Absence.status == AbsenceStatus.APPROVED,
            Absence.start_date <= date_to,
            Absence.end_date >= date_from,
        )
        if user_id:
            query = query.filter(Absence.user_id == user_id)
        return query.order_by(Absence.start_date, Absence.created_at).all()

    def count_workdays_in_range(
        self,
        company_id: UUID,
        user_id: UUID,
        date_from: date,
        date_to: date,
        holidays: HolidayLookup | None = None,
    ) -> int:
        """Count scheduled, non-holiday dates in a range.

        Companies without a location have no holidays.

        Args:
            company_id: The company ID.
            user_id: The user whose schedule applies.
            date_from: First date, inclusive.
            date_to: Last date, inclusive.
            holidays: Source of holiday dates; the service's own by default.

        Returns:
            Number of workdays.
        """
        lookup = holidays or self._holiday_lookup()
        schedule = ScheduleService(self.db).get_effective_schedule(company_id, user_id)
        try:
            resolved = lookup.resolve(company_id, date_from, date_to)
        except CompanyLocationNotFoundError:
            resolved = []
        holiday_dates = {h.date for h in resolved}
        return sum(
            1
            for d in daterange(date_from, date_to)
            if schedule.day(d.weekday()).is_workable and d not in holiday_dates
        )

    def list_absences(
        self,
        company_id: UUID,
        status: AbsenceStatus | None = None,
        user_id: UUID | None = None,
    ) -> list[Absence]:
        """List a company's absences, newest first."""
        query = self.db.query(Absence).filter(Absence.company_id == company_id)
        if status:
            query = query.filter(Absence.status == status)
        if user_id:
            query = query.filter(Absence.user_id == user_id)
        return query.order_by(Absence.start_date.desc(), Absence.created_at.desc()).all()

    def get_absence(self, company_id: UUID, absence_id: UUID) -> Absence:
        """Get an absence of a company.

        Raises:
            NotFoundError: If the absence does not belong to the company.
        """
        absence = (
            self.db.query(Absence)
            .filter(Absence.id == absence_id, Absence.company_id == company_id)
            .first()
        )
        if not absence:
            raise NotFoundError("Absence not found")
        return absence

    def request_absence(
        self, company_id: UUID, user_id: UUID, data: AbsenceCreate
    ) -> Absence:
        """Request an absence for a user.

        Args:
            company_id: The company ID.
            user_id: The requesting user.
            data: Dates, type and notes.

        Returns:
            The new PENDING absence with its workday count.

        Raises:
            ValidationError: If the range is inverted or covers no workday.
            ConflictError: If it overlaps a pending or approved absence.
        """
        if data.end_date < data.start_date:
            raise ValidationError("end_date must not be before start_date")

        workdays = self.count_workdays_in_range(
            company_id, user_id, data.start_date, data.end_date
        )
        if workdays == 0:
            raise ValidationError(
                "The selected range contains no workday; "
                "check the work schedule and holidays"
            )

        overlapping = (
            self.db.query(Absence.id)
            .filter(
                Absence.user_id == user_id,
                Absence.status.in_(OPEN_STATUSES),
                Absence.start_date <= data.end_date,
                Absence.end_date >= data.start_date,
            )
            .first()
        )
        if overlapping:
            raise ConflictError("An absence already overlaps the selected dates")

        absence = Absence(
            user_id=user_id,
            company_id=company_id,
            start_date=data.start_date,
            end_date=data.end_date,
            type=data.type,
            status=AbsenceStatus.PENDING,
            workdays_count=workdays,
            notes=data.notes or None,
        )
        self.db.add(absence)
        self.db.commit()
        self.db.refresh(absence)
        logger.info(
            f"User {user_id} requested {data.type.value} "
            f"{data.start_date}..{data.end_date} ({workdays} workdays)"
        )
        return absence

    def cancel_absence(self, company_id: UUID, user_id: UUID, absence_id: UUID) -> Absence:
        """Cancel one of the user's own absences.

        Raises:
            NotFoundError: If the absence does not belong to the user.
        """
        absence = (
            self.db.query(Absence)
            .filter(
                Absence.id == absence_id,
                Absence.company_id == company_id,
                Absence.user_id == user_id,
            )
            .first()
        )
        if not absence:
            raise NotFoundError("Absence not found")

        absence.status = AbsenceStatus.CANCELLED
        self.db.commit()
        self.db.refresh(absence)
        logger.info(f"User {user_id} cancelled absence {absence_id}")
        return absence

    def review_absence(
        self, company_id: UUID, absence_id: UUID, data: AbsenceReview
    ) -> Absence:
        """Approve or reject a pending absence.

        Args:
            company_id: The company ID.
            absence_id: The absence to review.
            data: Reviewer, decision and optional notes.

        Returns:
            The reviewed absence.

        Raises:
            NotFoundError: If the absence or the reviewer is not in the company.
            ValidationError: If the absence is not pending or the decision
                is not APPROVED/REJECTED.
        """
        absence = self.get_absence(company_id, absence_id)
        if absence.status != AbsenceStatus.PENDING:
            raise ValidationError("Only pending absences can be reviewed")
        if data.status not in (AbsenceStatus.APPROVED, AbsenceStatus.REJECTED):
            raise ValidationError("status must be APPROVED or REJECTED")

        reviewer = (
            self.db.query(User)
            .filter(User.id == data.reviewer_id, User.company_id == company_id)
            .first()
        )
        if not reviewer:
            raise NotFoundError("Reviewer not found")

        absence.status = data.status
        absence.notes = data.notes or absence.notes
        absence.reviewed_by_id = reviewer.id
        absence.reviewed_at = self.clock.now()
        self.db.commit()
        self.db.refresh(absence)
        logger.info(f"Absence {absence_id} {data.status.value.lower()} by {reviewer.id}")
        return absence

    def get_absence_stats(self, company_id: UUID) -> AbsenceStats:
        """Count a company's absences per status."""
        rows = (
            self.db.query(Absence.status, func.count(Absence.id))
            .filter(Absence.company_id == company_id)
            .group_by(Absence.status)
            .all()
        )
        return AbsenceStats(**{status.value.lower(): count for status, count in rows})

    def recheck_absences_for_company(self, company_id: UUID) -> int:
        """Recount workdays of open absences after a holiday change.

        Absences that no longer cover any workday are cancelled with a note.

        Args:
            company_id: The company ID.

        Returns:
            Number of absences that changed.
        """
        absences = (
            self.db.query(Absence)
            .filter(
                Absence.company_id == company_id,
                Absence.status.in_(OPEN_STATUSES),
            )
            .all()
        )
        changed = 0
        for absence in absences:
            workdays = self.count_workdays_in_range(
                company_id, absence.user_id, absence.start_date, absence.end_date
            )
            if workdays == 0:
                absence.status = AbsenceStatus.CANCELLED
                absence.workdays_count = 0
                absence.notes = (
                    f"{absence.notes}\n\n{AUTO_CANCEL_NOTE}"
                    if absence.notes
                    else AUTO_CANCEL_NOTE
                )
                logger.info(f"Auto-cancelled absence {absence.id}: no workdays left")
                changed += 1
            elif workdays != absence.workdays_count:
                absence.workdays_count = workdays
                changed += 1
        if changed:
            self.db.commit()
        return changed

    def _holiday_lookup(self) -> HolidayLookup:
        if self.holidays is None:
            from timeclock.services.holiday_service import HolidayService

            self.holidays = HolidayService(self.db)
        return self.holidays
