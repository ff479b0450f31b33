# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
import os
from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set test environment before importing app
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from timeclock.api.deps import get_clock, get_db
from timeclock.clock import FixedClock
from timeclock.main import app
from timeclock.models import Company, CompanyLocation, User, WorkSchedule
from timeclock.models.base import Base

# Test database setup
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Wednesday, 19 March 2025, midday UTC
NOW = datetime(2025, 3, 19, 12, 0)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock() -> FixedClock:
    """Clock frozen at NOW."""
    return FixedClock(NOW)


@pytest.fixture(scope="function")
def client(db_session, clock):
    """Create a test client with database and clock overrides."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def company(db_session) -> Company:
    """Create a company located in Madrid."""
    company = Company(name="Acme")
    db_session.add(company)
    db_session.flush()
    db_session.add(
        CompanyLocation(company_id=company.id, country_code="ES", region_code="ES-MD")
    )
    db_session.commit()
    db_session.refresh(company)
    return company


@pytest.fixture
def test_user(db_session, company) -> User:
    """Create a salaried user created on 1 January 2025."""
    user = User(
        company_id=company.id,
        name="Test User",
        email="test@example.com",
        salary=Decimal("3000.00"),
        is_active=True,
        created_at=datetime(2025, 1, 1, 8, 0),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def default_schedule(db_session, company) -> list[WorkSchedule]:
    """Monday to Friday 09:00-18:00 with a 13:00-14:00 break."""
    rows = [
        WorkSchedule(
            company_id=company.id,
            day_of_week=dow,
            is_workable=True,
            start_time="09:00",
            end_time="18:00",
            break_start_time="13:00",
            break_end_time="14:00",
        )
        for dow in range(5)
    ]
    rows += [
        WorkSchedule(
            company_id=company.id,
            day_of_week=dow,
            is_workable=False,
            start_time="00:00",
            end_time="00:00",
        )
        for dow in (5, 6)
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows
