"""Unit tests for the trip validation rules."""

from datetime import datetime, timedelta, timezone

import pytest

from tripplanner.core.errors import ErrorKind, InvalidDateRangeError, InvalidInputError
from tripplanner.services.trips.validation import (
    unique_invite_emails,
    validate_destination,
    validate_email,
    validate_trip_window,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def test_window_in_the_future_is_accepted():
    validate_trip_window(NOW + timedelta(days=1), NOW + timedelta(days=3), NOW)


def test_single_moment_trip_is_accepted():
    start = NOW + timedelta(hours=1)
    validate_trip_window(start, start, NOW)


@pytest.mark.parametrize("offset", [timedelta(0), timedelta(seconds=-1), timedelta(days=-1)])
def test_start_at_or_before_now_is_rejected(offset):
    with pytest.raises(InvalidDateRangeError) as exc:
        validate_trip_window(NOW + offset, NOW + timedelta(days=5), NOW)
    assert exc.value.kind == ErrorKind.INVALID_DATE_RANGE
    assert exc.value.message == "Invalid trip start date"


def test_end_before_start_is_rejected():
    with pytest.raises(InvalidDateRangeError) as exc:
        validate_trip_window(NOW + timedelta(days=5), NOW + timedelta(days=4), NOW)
    assert exc.value.message == "Invalid trip end date"


def test_naive_datetimes_are_treated_as_utc():
    naive_now = NOW.replace(tzinfo=None)
    validate_trip_window(naive_now + timedelta(days=1), naive_now + timedelta(days=2), NOW)
    with pytest.raises(InvalidDateRangeError):
        validate_trip_window(naive_now - timedelta(days=1), naive_now + timedelta(days=2), NOW)


@pytest.mark.parametrize("destination", ["", "a", "Rio"])
def test_short_destination_is_rejected(destination):
    with pytest.raises(InvalidInputError):
        validate_destination(destination)


def test_destination_length_counts_every_character():
    assert validate_destination("    a") == "    a"
    assert validate_destination(" Rome ") == " Rome "


@pytest.mark.parametrize("email", ["", "not-an-email", "a@", "@x.com", "a b@x.com"])
def test_malformed_email_is_rejected(email):
    with pytest.raises(InvalidInputError):
        validate_email(email)


def test_non_string_email_is_rejected():
    with pytest.raises(InvalidInputError):
        validate_email(None)


def test_email_is_normalized_to_lower_case():
    assert validate_email("  Bob@Mail.COM ") == "bob@mail.com"


def test_invites_are_deduplicated_in_order():
    emails = ["bob@x.com", "carol@x.com", "BOB@x.com", "dave@x.com", "carol@x.com"]
    assert unique_invite_emails("alice@x.com", emails) == ["bob@x.com", "carol@x.com", "dave@x.com"]


def test_invite_matching_owner_is_dropped():
    assert unique_invite_emails("alice@x.com", ["Alice@x.com", "bob@x.com"]) == ["bob@x.com"]


def test_malformed_invite_email_fails_the_whole_list():
    with pytest.raises(InvalidInputError):
        unique_invite_emails("alice@x.com", ["bob@x.com", "nope"])
