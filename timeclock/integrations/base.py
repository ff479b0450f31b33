# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Base classes for external providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ProviderHoliday:
    """A public holiday as reported by a provider.

    ``region_code`` is None for holidays observed nationwide.
    """

    date: date
    name: str
    local_name: str | None
    country_code: str
    region_code: str | None
    is_fixed: bool


class HolidayProvider(ABC):
    """Interface for public holiday sources."""

    @classmethod
    @abstractmethod
    def get_type(cls) -> str:
        """Unique identifier for this provider."""
        ...

    @abstractmethod
    def fetch_year(
        self, country_code: str, year: int, region_code: str | None = None
    ) -> list[ProviderHoliday]:
        """Return national holidays of a year, plus those of a region.

        Args:
            country_code: ISO 3166-1 alpha-2 country code.
            year: The year.
            region_code: Optional ISO 3166-2 subdivision (e.g. "ES-MD").
        """
        ...
