# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Active timer state machine.

A user is either Idle (no ActiveTimer row) or Running (exactly one row,
guaranteed by the unique key on ``active_timers.user_id``). Stopping or
switching turns the running timer into a TimeEntry in one transaction.
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from timeclock.clock import Clock, SystemClock
from timeclock.exceptions import (
    NotFoundError,
    TimerAlreadyRunningError,
    TimerNotRunningError,
)
from timeclock.models import ActiveTimer, TimeEntry, User
from timeclock.schemas.timer import TimerStart, TimerSwitch
from timeclock.services.time_utils import round_half_up

logger = logging.getLogger(__name__)


def duration_minutes(started_at: datetime, ended_at: datetime) -> int:
    """Elapsed whole minutes, rounded half-up."""
    seconds = (ended_at - started_at).total_seconds()
    return int(round_half_up(seconds / 60))


class TimerService:
    """Service driving a user's active timer."""

    def __init__(self, db: Session, clock: Clock | None = None) -> None:
        """Initialize the service.

        Args:
            db: Database session.
            clock: Source of "now".
        """
        self.db = db
        self.clock = clock or SystemClock()

    def get_active(self, user_id: UUID) -> ActiveTimer | None:
        """Get the user's running timer, if any."""
        return self.db.query(ActiveTimer).filter(ActiveTimer.user_id == user_id).first()

    def start(self, user_id: UUID, company_id: UUID, data: TimerStart) -> ActiveTimer:
        """Start a timer.

        Args:
            user_id: The user ID.
            company_id: The company ID.
            data: Entry type, project and location metadata.

        Returns:
            The running timer.

        Raises:
            NotFoundError: If the user is not in the company.
            TimerAlreadyRunningError: If the user already has a timer,
                including one inserted concurrently.
        """
        self._require_user(company_id, user_id)
        if self.get_active(user_id):
            raise TimerAlreadyRunningError("A timer is already running")

        timer = ActiveTimer(
            user_id=user_id,
            company_id=company_id,
            project_id=data.project_id,
            entry_type=data.entry_type,
            started_at=self.clock.now(),
            is_in_office=data.is_in_office,
            latitude=data.latitude,
            longitude=data.longitude,
            ip_address=data.ip_address,
        )
        self.db.add(timer)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise TimerAlreadyRunningError("A timer is already running") from None
        self.db.refresh(timer)

        logger.info(f"Started {timer.entry_type.value} timer for user {user_id}")
        return timer

    def stop(self, user_id: UUID) -> TimeEntry:
        """Stop the running timer and record its time entry.

        Raises:
            TimerNotRunningError: If no timer is running.
        """
        timer = self._take_timer(user_id)
        now = self.clock.now()
        try:
            self._delete_timer(timer)
            entry = self._entry_from_timer(timer, now)
            self.db.add(entry)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(entry)

        logger.info(
            f"Stopped timer for user {user_id}: {entry.duration_minutes} minutes"
        )
        return entry

    def switch(self, user_id: UUID, data: TimerSwitch) -> tuple[TimeEntry, ActiveTimer]:
        """Close the running timer and start a new one at the same instant.

        Args:
            user_id: The user ID.
            data: Settings for the new timer. An unset ``is_in_office``
                keeps the running timer's value.

        Returns:
            The recorded entry and the new timer.

        Raises:
            TimerNotRunningError: If no timer is running.
            TimerAlreadyRunningError: If another timer was started concurrently.
        """
        old = self._take_timer(user_id)
        now = self.clock.now()
        try:
            self._delete_timer(old)
            entry = self._entry_from_timer(old, now)
            self.db.add(entry)
            self.db.flush()
            timer = ActiveTimer(
                user_id=user_id,
                company_id=old.company_id,
                project_id=data.project_id,
                entry_type=data.entry_type,
                started_at=now,
                is_in_office=(
                    old.is_in_office if data.is_in_office is None else data.is_in_office
                ),
                latitude=data.latitude,
                longitude=data.longitude,
                ip_address=data.ip_address,
            )
            self.db.add(timer)
            try:
                self.db.flush()
            except IntegrityError:
                raise TimerAlreadyRunningError("A timer is already running") from None
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(entry)
        self.db.refresh(timer)

        logger.info(
            f"Switched timer for user {user_id}: {old.entry_type.value} -> "
            f"{timer.entry_type.value}"
        )
        return entry, timer

    def cancel(self, user_id: UUID) -> ActiveTimer:
        """Discard the running timer without recording time.

        Returns:
            The discarded timer.

        Raises:
            TimerNotRunningError: If no timer is running.
        """
        timer = self._take_timer(user_id)
        try:
            self._delete_timer(timer)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Cancelled timer for user {user_id}")
        return timer

    def _take_timer(self, user_id: UUID) -> ActiveTimer:
        """Load the running timer detached from the session."""
        timer = self.get_active(user_id)
        if not timer:
            raise TimerNotRunningError("No timer is running")
        self.db.expunge(timer)
        return timer

    def _delete_timer(self, timer: ActiveTimer) -> None:
        """Delete the timer row, failing if another request already did."""
        deleted = (
            self.db.query(ActiveTimer)
            .filter(ActiveTimer.id == timer.id)
            .delete(synchronize_session=False)
        )
        if deleted == 0:
            raise TimerNotRunningError("No timer is running")

    @staticmethod
    def _entry_from_timer(timer: ActiveTimer, ended_at: datetime) -> TimeEntry:
        return TimeEntry(
            user_id=timer.user_id,
            company_id=timer.company_id,
            project_id=timer.project_id,
            entry_type=timer.entry_type,
            start_time=timer.started_at,
            end_time=ended_at,
            duration_minutes=duration_minutes(timer.started_at, ended_at),
            is_in_office=timer.is_in_office,
            latitude=timer.latitude,
            longitude=timer.longitude,
            ip_address=timer.ip_address,
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
