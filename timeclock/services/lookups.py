# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Narrow read interfaces between the holiday, absence and calendar services.

The absence service only needs to know which dates are holidays, and the
calendar only needs approved absences; these protocols are all they see.
"""

from datetime import date
from typing import Protocol
from uuid import UUID

from timeclock.models import Absence
from timeclock.schemas.holiday import Holiday


class HolidayLookup(Protocol):
    """Anything that can resolve holidays for a company."""

    def resolve(self, company_id: UUID, date_from: date, date_to: date) -> list[Holiday]:
        """Return holidays in the inclusive range."""
        ...


class AbsenceLookup(Protocol):
    """Anything that can resolve approved absences for a user."""

    def resolve(self, user_id: UUID, date_from: date, date_to: date) -> list[Absence]:
        """Return approved absences intersecting the inclusive range."""
        ...
