# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Time parsing and rounding helpers shared by the services."""

import re
from collections.abc import Iterator
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

_HHMM = re.compile(r"^([0-1][0-9]|2[0-3]):([0-5][0-9])$")


def parse_hhmm(value: str) -> int:
    """Convert an "HH:mm" string to minutes since midnight.

    Args:
        value: Wall-clock time, 24-hour.

    Returns:
        Minutes since midnight.

    Raises:
        ValueError: If the value is not a valid "HH:mm" time.
    """
    match = _HHMM.match(value or "")
    if not match:
        raise ValueError(f"Invalid time format: {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_between(start: str, end: str) -> int:
    """Minutes from start to end (negative when end is earlier)."""
    return parse_hhmm(end) - parse_hhmm(start)


def round_half_up(value: Decimal | float | int, places: int = 0) -> Decimal:
    """Round a number half-up to the given number of decimal places."""
    exponent = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def daterange(date_from: date, date_to: date) -> Iterator[date]:
    """Yield every date from date_from to date_to inclusive."""
    current = date_from
    while current <= date_to:
        yield current
        current += timedelta(days=1)
