"""Route tests against in-memory collaborators."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from tests.conftest import API_BASE_URL
from tests.fakes import FakeTripStore, RecordingNotifier
from tripplanner.core.config import settings
from tripplanner.dependencies.services import get_participant_service, get_trip_service
from tripplanner.main import app
from tripplanner.services.trips.notification import NotificationDispatcher
from tripplanner.services.trips.participant_service import ParticipantService
from tripplanner.services.trips.trip_service import TripService


@pytest.fixture
def route_store():
    return FakeTripStore()


@pytest.fixture
def route_notifier():
    return RecordingNotifier()


@pytest.fixture
def client(route_store, route_notifier):
    dispatcher = NotificationDispatcher(route_notifier)
    app.dependency_overrides[get_trip_service] = lambda: TripService(route_store, dispatcher, API_BASE_URL)
    app.dependency_overrides[get_participant_service] = lambda: ParticipantService(
        route_store, dispatcher, API_BASE_URL
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def _trip_payload(**overrides):
    now = datetime.now(timezone.utc)
    payload = {
        "destination": "Paris",
        "starts_at": (now + timedelta(days=10)).isoformat(),
        "ends_at": (now + timedelta(days=15)).isoformat(),
        "owner_name": "Alice",
        "owner_email": "alice@x.com",
        "emails_to_invite": ["bob@x.com"],
    }
    payload.update(overrides)
    return payload


def _create_trip(client, **overrides):
    response = client.post("/trips", json=_trip_payload(**overrides))
    assert response.status_code == 200
    return response.json()["tripId"]


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_create_trip_and_list_participants(client, route_notifier):
    trip_id = _create_trip(client)

    response = client.get(f"/trips/{trip_id}/participants")
    assert response.status_code == 200
    participants = response.json()["participants"]
    assert [(p["email"], p["is_owner"], p["is_confirmed"]) for p in participants] == [
        ("alice@x.com", True, True),
        ("bob@x.com", False, False),
    ]
    assert [m["recipient_email"] for m in route_notifier.sent] == ["alice@x.com"]


def test_create_trip_in_the_past(client, route_store):
    past = datetime.now(timezone.utc) - timedelta(days=1)
    response = client.post("/trips", json=_trip_payload(destination="Rome", starts_at=past.isoformat()))

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid trip start date", "code": "INVALID_DATE_RANGE"}
    assert route_store.trips == {}


def test_create_trip_with_short_destination(client):
    response = client.post("/trips", json=_trip_payload(destination="Rio"))

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"


def test_malformed_owner_email_is_rejected_by_schema(client):
    response = client.post("/trips", json=_trip_payload(owner_email="alice"))
    assert response.status_code == 422


def test_invite_then_duplicate(client):
    trip_id = _create_trip(client)

    first = client.post(f"/trips/{trip_id}/invites", json={"email": "carol@x.com"})
    assert first.status_code == 200
    assert "participantId" in first.json()

    second = client.post(f"/trips/{trip_id}/invites", json={"email": "carol@x.com"})
    assert second.status_code == 409
    assert second.json()["code"] == "CONFLICT"


def test_invite_to_unknown_trip(client):
    response = client.post(f"/trips/{uuid4()}/invites", json={"email": "carol@x.com"})

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_get_and_confirm_participant(client):
    trip_id = _create_trip(client)
    participant_id = client.post(f"/trips/{trip_id}/invites", json={"email": "carol@x.com"}).json()["participantId"]

    response = client.get(f"/participants/{participant_id}")
    assert response.status_code == 200
    assert response.json()["participant"] == {
        "id": participant_id,
        "name": "",
        "email": "carol@x.com",
        "is_confirmed": False,
    }

    for _ in range(2):
        confirm = client.get(f"/participants/{participant_id}/confirm", follow_redirects=False)
        assert confirm.status_code == 307
        assert confirm.headers["location"] == f"{settings.WEB_BASE_URL.rstrip('/')}/trips/{trip_id}"

    assert client.get(f"/participants/{participant_id}").json()["participant"]["is_confirmed"] is True


def test_unknown_participant(client):
    assert client.get(f"/participants/{uuid4()}").status_code == 404
    assert client.get(f"/participants/{uuid4()}/confirm", follow_redirects=False).status_code == 404


def test_storage_outage_hides_internal_message(client, route_store):
    route_store.fail_writes = True
    response = client.post("/trips", json=_trip_payload())

    assert response.status_code == 503
    body = response.json()
    assert body["code"] == "DEPENDENCY_FAILURE"
    assert "participant insert failed" not in body["detail"]
