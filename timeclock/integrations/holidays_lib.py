# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Holiday provider backed by the ``holidays`` package."""

import logging
from datetime import date

import holidays

from timeclock.integrations.base import HolidayProvider, ProviderHoliday

logger = logging.getLogger(__name__)


def subdivision_of(region_code: str) -> str:
    """Strip the country prefix from an ISO 3166-2 code ("ES-MD" -> "MD")."""
    return region_code.split("-", 1)[1] if "-" in region_code else region_code


class HolidaysLibraryProvider(HolidayProvider):
    """Offline provider using the ``holidays`` package calendars."""

    @classmethod
    def get_type(cls) -> str:
        """Unique identifier for this provider."""
        return "holidays"

    def __init__(self, language: str = "en_US") -> None:
        """Initialize with the language used for ``name``.

        ``local_name`` always uses the country's default language.
        """
        self.language = language

    def _calendar(
        self, country_code: str, year: int, subdiv: str | None, language: str | None
    ) -> holidays.HolidayBase:
        return holidays.country_holidays(
            country_code, subdiv=subdiv, years=year, language=language
        )

    def fetch_year(
        self, country_code: str, year: int, region_code: str | None = None
    ) -> list[ProviderHoliday]:
        """Return national holidays of a year, plus those of a region.

        Args:
            country_code: ISO 3166-1 alpha-2 country code.
            year: The year.
            region_code: Optional ISO 3166-2 subdivision (e.g. "ES-MD").

        Returns:
            National holidays followed by region-only ones, sorted by date.

        Raises:
            NotImplementedError: If the country or subdivision is unknown.
        """
        national = self._calendar(country_code, year, None, self.language)
        national_local = self._calendar(country_code, year, None, None)
        next_year = self._calendar(country_code, year + 1, None, None)

        result = [
            ProviderHoliday(
                date=day,
                name=name,
                local_name=national_local.get(day),
                country_code=country_code,
                region_code=None,
                is_fixed=self._recurs_next_year(day, national_local.get(day), next_year),
            )
            for day, name in sorted(national.items())
        ]

        if region_code:
            subdiv = subdivision_of(region_code)
            regional = self._calendar(country_code, year, subdiv, self.language)
            regional_local = self._calendar(country_code, year, subdiv, None)
            regional_next = self._calendar(country_code, year + 1, subdiv, None)
            for day, name in sorted(regional.items()):
                if day in national:
                    continue
                result.append(
                    ProviderHoliday(
                        date=day,
                        name=name,
                        local_name=regional_local.get(day),
                        country_code=country_code,
                        region_code=region_code,
                        is_fixed=self._recurs_next_year(
                            day, regional_local.get(day), regional_next
                        ),
                    )
                )

        logger.debug(
            f"Fetched {len(result)} holidays for {country_code}/{region_code} {year}"
        )
        return sorted(result, key=lambda h: h.date)

    @staticmethod
    def _recurs_next_year(
        day: date, name: str | None, next_year: holidays.HolidayBase
    ) -> bool:
        """Same name on the same month/day next year means a fixed date."""
        try:
            following = day.replace(year=day.year + 1)
        except ValueError:
            return False
        return name is not None and next_year.get(following) == name
