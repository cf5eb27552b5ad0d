# tests/conftest.py
"""
Shared pytest fixtures.

Dates used throughout: 2025-06-02 is a Monday, 2025-06-03 a Tuesday.
Resources are scheduled in America/New_York (UTC-4 in June).
"""

from datetime import date, datetime, timezone

import pytest
from sqlalchemy.orm import Session

from availability_engine.database import create_session_factory

from .fakes import FakeRedis, InMemoryBusySource, InMemoryRuleStore


@pytest.fixture
def monday() -> date:
    return date(2025, 6, 2)


@pytest.fixture
def tuesday() -> date:
    return date(2025, 6, 3)


@pytest.fixture
def now() -> datetime:
    """Sunday noon UTC, before any weekday window in the fixtures."""
    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def rule_store() -> InMemoryRuleStore:
    return InMemoryRuleStore()


@pytest.fixture
def busy_source() -> InMemoryBusySource:
    return InMemoryBusySource()


@pytest.fixture
def db_session() -> Session:
    """Fresh in-memory SQLite database per test."""
    session_factory = create_session_factory("sqlite:///:memory:", create_tables=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        session_factory.kw["bind"].dispose()


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch) -> FakeRedis:
    """Route the booking lock to an in-memory Redis so no test needs a server."""
    client = FakeRedis()
    monkeypatch.setattr("availability_engine.core.booking_lock._get_sync_redis", lambda: client)
    return client
