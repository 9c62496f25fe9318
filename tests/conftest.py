"""Pytest fixtures for pantrychef tests."""

from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from pantrychef.config.settings import Settings
from pantrychef.db.connection import DatabaseConnection
from pantrychef.events import EventChannel
from pantrychef.profiles.body_calc import UserProfile
from pantrychef.services import Services

# All service tests run at this moment unless they move the clock
NOW = datetime(2026, 3, 15, 12, 0, 0)


class FakeClock:
    """A settable clock for services."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def temp_db():
    """Create a temporary database with schema."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    db = DatabaseConnection(db_path)
    db.initialize_schema()

    yield db

    # Cleanup
    db_path.unlink(missing_ok=True)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def events():
    return EventChannel()


@pytest.fixture
def services(temp_db, events, clock):
    """Services wired to a temporary database, a fixed clock and a seeded generator."""
    settings = Settings()
    settings.generation.seed = 42
    return Services.create(temp_db, settings, events=events, clock=clock)


@pytest.fixture
def reference_profile():
    """Male, 80 kg, 180 cm, 30 years, moderately active, maintaining."""
    return UserProfile(
        weight=80,
        height=180,
        age=30,
        gender="male",
        activity_level="moderately_active",
        goal="maintain",
    )


@pytest.fixture
def profiled_services(services, reference_profile):
    """Services whose saved profile has established targets."""
    services.profiles.save_profile(reference_profile)
    return services
