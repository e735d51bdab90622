"""Shared test fixtures for the trip planner."""

import os
from datetime import datetime, timedelta, timezone

import pytest

# Settings are read at import time, so the environment has to be in place first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("API_BASE_URL", "http://localhost:3333")
os.environ.setdefault("WEB_BASE_URL", "http://localhost:3000")
os.environ.pop("REDIS_URL", None)

from tests.fakes import FakeCache, FakeTripStore, RecordingNotifier  # noqa: E402
from tripplanner.services.trips.notification import NotificationDispatcher  # noqa: E402
from tripplanner.services.trips.participant_service import ParticipantService  # noqa: E402
from tripplanner.services.trips.trip_service import TripService  # noqa: E402

API_BASE_URL = "http://api.test"
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return FakeTripStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def dispatcher(notifier):
    return NotificationDispatcher(notifier)


@pytest.fixture
def cache():
    return FakeCache()


@pytest.fixture
def trip_service(store, dispatcher):
    return TripService(store, dispatcher, API_BASE_URL, clock=lambda: NOW)


@pytest.fixture
def participant_service(store, dispatcher):
    return ParticipantService(store, dispatcher, API_BASE_URL)


@pytest.fixture
def trip_request():
    """Arguments for a valid trip starting ten days from NOW."""
    return {
        "destination": "Paris",
        "starts_at": NOW + timedelta(days=10),
        "ends_at": NOW + timedelta(days=15),
        "owner_name": "Alice",
        "owner_email": "alice@x.com",
        "emails_to_invite": ["bob@x.com"],
    }
