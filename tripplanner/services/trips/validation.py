from datetime import datetime, timezone
from typing import Iterable, List

from email_validator import EmailNotValidError, validate_email as check_email_syntax

from tripplanner.core.errors import InvalidDateRangeError, InvalidInputError

MIN_DESTINATION_LENGTH = 4


def ensure_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def validate_trip_window(starts_at: datetime, ends_at: datetime, now: datetime) -> None:
    """
    A trip must start strictly after ``now`` and must not end before it starts.
    """
    starts_at, ends_at, now = ensure_utc(starts_at), ensure_utc(ends_at), ensure_utc(now)

    if starts_at <= now:
        raise InvalidDateRangeError("Invalid trip start date")
    if ends_at < starts_at:
        raise InvalidDateRangeError("Invalid trip end date")


def validate_destination(destination: str) -> str:
    if not isinstance(destination, str) or len(destination) < MIN_DESTINATION_LENGTH:
        raise InvalidInputError(
            f"Destination must be at least {MIN_DESTINATION_LENGTH} characters long"
        )
    return destination


def validate_email(email: str) -> str:
    """
    Check the address syntax (no DNS lookups) and return it normalised
    to lower case, the form participants are stored and compared in.
    """
    if not isinstance(email, str):
        raise InvalidInputError("Email address must be a string")
    try:
        validated = check_email_syntax(email.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise InvalidInputError(f"Invalid email address: {email}") from e
    return validated.normalized.lower()


def unique_invite_emails(owner_email: str, invite_emails: Iterable[str]) -> List[str]:
    """
    Validate the invite list and drop duplicates, keeping first-seen order.
    An invite matching the owner's address is dropped silently since the
    owner is already a participant.
    """
    seen = {owner_email}
    unique = []
    for email in invite_emails:
        normalized = validate_email(email)
        if normalized in seen:
            continue
        seen.add(normalized)
        unique.append(normalized)
    return unique
