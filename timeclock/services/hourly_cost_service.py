# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Hourly cost derivation from monthly salary and work schedule."""

import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from timeclock.exceptions import NotFoundError
from timeclock.models import User, WorkSchedule
from timeclock.services.schedule_service import EffectiveSchedule, ScheduleService
from timeclock.services.time_utils import round_half_up

logger = logging.getLogger(__name__)

AVERAGE_WORKING_DAYS_PER_MONTH = Decimal("21.75")
# Standard 40h week over 5 days, used when the schedule has no work at all
FALLBACK_MONTHLY_HOURS = Decimal(40) * AVERAGE_WORKING_DAYS_PER_MONTH / Decimal(5)


def monthly_hours_for(schedule: EffectiveSchedule) -> Decimal:
    """Average working hours in a month for a schedule."""
    workable_days = schedule.workable_days
    weekly_minutes = schedule.weekly_minutes
    if workable_days == 0 or weekly_minutes == 0:
        return FALLBACK_MONTHLY_HOURS

    avg_daily_hours = Decimal(weekly_minutes) / Decimal(workable_days) / Decimal(60)
    return avg_daily_hours * AVERAGE_WORKING_DAYS_PER_MONTH


def calculate_hourly_cost(
    monthly_salary: Decimal | int | float, schedule: EffectiveSchedule
) -> Decimal:
    """Divide a monthly salary by the schedule's monthly hours.

    Args:
        monthly_salary: Gross monthly salary.
        schedule: The user's effective schedule.

    Returns:
        Hourly cost rounded half-up to two decimals.
    """
    salary = Decimal(str(monthly_salary))
    return round_half_up(salary / monthly_hours_for(schedule), 2)


class HourlyCostService:
    """Service keeping users' hourly costs in line with their schedule."""

    def __init__(self, db: Session) -> None:
        """Initialize the service.

        Args:
            db: Database session.
        """
        self.db = db
        self.schedules = ScheduleService(db)

    def from_salary(
        self, company_id: UUID, user_id: UUID, monthly_salary: Decimal | int | float
    ) -> Decimal:
        """Compute a user's hourly cost for a given salary."""
        schedule = self.schedules.get_effective_schedule(company_id, user_id)
        return calculate_hourly_cost(monthly_salary, schedule)

    def recalculate_for_user(self, company_id: UUID, user_id: UUID) -> Decimal | None:
        """Recompute and store a user's hourly cost.

        Args:
            company_id: The company ID.
            user_id: The user ID.

        Returns:
            The new hourly cost, or None when the user has no salary.

        Raises:
            NotFoundError: If the user is not in the company.
        """
        user = (
            self.db.query(User)
            .filter(User.id == user_id, User.company_id == company_id)
            .first()
        )
        if not user:
            raise NotFoundError("User not found")
        if user.salary is None:
            return None

        user.hourly_cost = self.from_salary(company_id, user_id, user.salary)
        self.db.commit()
        logger.info(f"Recalculated hourly cost for user {user_id}: {user.hourly_cost}")
        return user.hourly_cost

    def recalculate_for_company(self, company_id: UUID) -> int:
        """Recompute hourly costs of users following the company default.

        Users with personal schedule overrides are left alone.

        Returns:
            Number of users updated.
        """
        overridden = select(WorkSchedule.user_id).where(
            WorkSchedule.company_id == company_id,
            WorkSchedule.user_id.is_not(None),
        )
        users = (
            self.db.query(User)
            .filter(
                User.company_id == company_id,
                User.is_active == True,  # noqa: E712
                User.salary.is_not(None),
                User.id.not_in(overridden),
            )
            .all()
        )
        for user in users:
            user.hourly_cost = self.from_salary(company_id, user.id, user.salary)
        self.db.commit()

        logger.info(f"Recalculated hourly cost for {len(users)} users of company {company_id}")
        return len(users)
