# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Common schema types."""

from pydantic import BaseModel

TIME_PATTERN = r"^([0-1][0-9]|2[0-3]):[0-5][0-9]$"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str


class ErrorResponse(BaseModel):
    """Body returned for domain errors."""

    detail: str
    code: str
