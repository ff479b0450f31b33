# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Directly recorded and edited time entries.

Entries produced by the timer and entries created here share one table.
``duration_minutes`` is always derived from the bounds, never taken from
the caller.
"""

import logging
from datetime import date, datetime, timedelta
from uuid import UUID

from sqlalchemy.orm import Session

from timeclock.exceptions import NotFoundError, ValidationError
from timeclock.models import TimeEntry
from timeclock.schemas.time_entry import TimeEntryCreate, TimeEntryUpdate
from timeclock.services.timer_service import duration_minutes

logger = logging.getLogger(__name__)


def validate_bounds(start_time: datetime, end_time: datetime) -> None:
    """Raise ValidationError unless the entry ends after it starts."""
    if end_time <= start_time:
        raise ValidationError("end_time must be after start_time")


class TimeEntryService:
    """Service for listing, creating, editing and deleting time entries."""

    def __init__(self, db: Session) -> None:
        """Initialize the service.

        Args:
            db: Database session.
        """
        self.db = db

    def list_entries(
        self,
        user_id: UUID,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[TimeEntry]:
        """List a user's entries, newest first.

        Args:
            user_id: The user ID.
            date_from: Only entries starting on or after this date.
            date_to: Only entries starting on or before this date.

        Returns:
            Matching entries.

        Raises:
            ValidationError: If ``date_from`` is after ``date_to``.
        """
        if date_from and date_to and date_from > date_to:
            raise ValidationError("'from' must not be after 'to'")
        query = self.db.query(TimeEntry).filter(TimeEntry.user_id == user_id)
        if date_from:
            query = query.filter(
                TimeEntry.start_time >= datetime.combine(date_from, datetime.min.time())
            )
        if date_to:
            query = query.filter(
                TimeEntry.start_time
                < datetime.combine(date_to + timedelta(days=1), datetime.min.time())
            )
        return query.order_by(TimeEntry.start_time.desc()).all()

    def get_entry(self, user_id: UUID, entry_id: UUID) -> TimeEntry:
        """Get one of a user's entries.

        Raises:
            NotFoundError: If the entry does not belong to the user.
        """
        entry = (
            self.db.query(TimeEntry)
            .filter(TimeEntry.id == entry_id, TimeEntry.user_id == user_id)
            .first()
        )
        if not entry:
            raise NotFoundError("Time entry not found")
        return entry

    def create_entry(
        self, company_id: UUID, user_id: UUID, data: TimeEntryCreate
    ) -> TimeEntry:
        """Record a time entry.

        Raises:
            ValidationError: If ``end_time`` is not after ``start_time``.
        """
        validate_bounds(data.start_time, data.end_time)
        entry = TimeEntry(
            user_id=user_id,
            company_id=company_id,
            project_id=data.project_id,
            entry_type=data.entry_type,
            start_time=data.start_time,
            end_time=data.end_time,
            duration_minutes=duration_minutes(data.start_time, data.end_time),
            is_in_office=data.is_in_office,
            latitude=data.latitude,
            longitude=data.longitude,
            ip_address=data.ip_address,
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        logger.info(
            f"Recorded {entry.entry_type.value} entry for user {user_id}: "
            f"{entry.duration_minutes} minutes"
        )
        return entry

    def update_entry(
        self, user_id: UUID, entry_id: UUID, data: TimeEntryUpdate
    ) -> TimeEntry:
        """Edit a time entry and recompute its duration.

        Raises:
            NotFoundError: If the entry does not belong to the user.
            ValidationError: If the resulting bounds are inverted or empty.
        """
        entry = self.get_entry(user_id, entry_id)
        start_time = data.start_time or entry.start_time
        end_time = data.end_time or entry.end_time
        validate_bounds(start_time, end_time)

        entry.start_time = start_time
        entry.end_time = end_time
        entry.duration_minutes = duration_minutes(start_time, end_time)
        if data.entry_type is not None:
            entry.entry_type = data.entry_type
        if data.project_id is not None:
            entry.project_id = data.project_id
        if data.is_in_office is not None:
            entry.is_in_office = data.is_in_office

        self.db.commit()
        self.db.refresh(entry)
        logger.info(f"Updated time entry {entry_id} of user {user_id}")
        return entry

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete a time entry.

        Raises:
            NotFoundError: If the entry does not belong to the user.
        """
        entry = self.get_entry(user_id, entry_id)
        self.db.delete(entry)
        self.db.commit()
        logger.info(f"Deleted time entry {entry_id} of user {user_id}")
