# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""API dependencies for dependency injection."""

import uuid
from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from timeclock.clock import Clock, SystemClock
from timeclock.database import SessionLocal
from timeclock.exceptions import NotFoundError
from timeclock.models import Company, User


def get_db() -> Generator[Session]:
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_clock() -> Clock:
    """Get the clock used for "now" and "today"."""
    return SystemClock()


def get_company(company_id: uuid.UUID, db: Session = Depends(get_db)) -> Company:
    """Get the company from the path, or 404."""
    company = db.query(Company).filter(Company.id == company_id).first()
    if not company:
        raise NotFoundError("Company not found")
    return company


def get_company_user(
    user_id: uuid.UUID,
    company: Company = Depends(get_company),
    db: Session = Depends(get_db),
) -> User:
    """Get a user of the company from the path, or 404."""
    user = (
        db.query(User)
        .filter(User.id == user_id, User.company_id == company.id)
        .first()
    )
    if not user:
        raise NotFoundError("User not found")
    return user
