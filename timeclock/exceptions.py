# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Domain exceptions.

Each exception carries a stable ``code`` so clients can tell failure
categories apart, and an ``http_status`` used by the API layer.
"""


class TimeclockError(Exception):
    """Base exception for timeclock errors."""

    code = "error"
    http_status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TimeclockError):
    """Input rejected before reaching the core."""

    code = "validation_error"
    http_status = 400


class NotFoundError(TimeclockError):
    """Requested resource does not exist."""

    code = "not_found"
    http_status = 404


class ConflictError(TimeclockError):
    """Operation violates a uniqueness or state invariant."""

    code = "conflict"
    http_status = 409


class PermissionDeniedError(TimeclockError):
    """Caller is not allowed to perform the operation."""

    code = "permission_denied"
    http_status = 403


class TimerAlreadyRunningError(ConflictError):
    """User already has an active timer."""

    code = "timer_already_running"


class TimerNotRunningError(NotFoundError):
    """User has no active timer."""

    code = "timer_not_running"


class CompanyLocationNotFoundError(NotFoundError):
    """Company has no configured location, so holidays cannot be resolved."""

    code = "company_location_not_found"
