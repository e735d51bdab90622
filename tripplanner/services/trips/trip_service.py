from datetime import datetime, timezone
from typing import Callable, Iterable, List, Tuple
from uuid import UUID, uuid4

from tripplanner.core.errors import TripPlannerError
from tripplanner.core.logger import logger
from tripplanner.core.result import OperationResult, failed
from tripplanner.models.trips.participant import Participant
from tripplanner.models.trips.trip_model import Trip
from tripplanner.repositories.trip_repository import TripStore
from tripplanner.services.trips.email_confirmation import build_trip_confirmation_link
from tripplanner.services.trips.notification import (
    ConfirmationContext,
    ConfirmationRequest,
    NotificationDispatcher,
)
from tripplanner.services.trips.validation import (
    ensure_utc,
    unique_invite_emails,
    validate_destination,
    validate_email,
    validate_trip_window,
)
from tripplanner.utils.date_format import format_trip_date


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TripService:
    def __init__(
        self,
        store: TripStore,
        dispatcher: NotificationDispatcher,
        api_base_url: str,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.dispatcher = dispatcher
        self.api_base_url = api_base_url
        self.clock = clock

    def _build_trip(
        self,
        destination: str,
        starts_at: datetime,
        ends_at: datetime,
        owner_name: str,
        owner_email: str,
        emails_to_invite: Iterable[str],
    ) -> Tuple[Trip, List[Participant]]:
        """Run every validation rule and build the unsaved trip with its participants."""
        now = self.clock()
        destination = validate_destination(destination)
        validate_trip_window(starts_at, ends_at, now)
        owner_email = validate_email(owner_email)
        invitees = unique_invite_emails(owner_email, emails_to_invite)

        trip = Trip(
            id=uuid4(),
            destination=destination,
            starts_at=ensure_utc(starts_at),
            ends_at=ensure_utc(ends_at),
            created_at=ensure_utc(now),
        )

        # The owner authored the request, so they start out confirmed
        owner = Participant(
            id=uuid4(),
            trip_id=trip.id,
            name=owner_name,
            email=owner_email,
            is_owner=True,
            is_confirmed=True,
        )
        participants = [owner] + [
            Participant(
                id=uuid4(),
                trip_id=trip.id,
                name="",
                email=email,
                is_owner=False,
                is_confirmed=False,
            )
            for email in invitees
        ]
        return trip, participants

    def _owner_confirmation(self, trip: Trip, owner: Participant) -> ConfirmationRequest:
        return ConfirmationRequest(
            recipient_name=owner.name,
            recipient_email=owner.email,
            subject=f"Confirm your trip to {trip.destination}",
            context=ConfirmationContext(
                destination=trip.destination,
                starts_on=format_trip_date(trip.starts_at),
                ends_on=format_trip_date(trip.ends_at),
                confirmation_link=build_trip_confirmation_link(self.api_base_url, trip.id),
                is_owner=True,
            ),
        )

    async def create_trip(
        self,
        destination: str,
        starts_at: datetime,
        ends_at: datetime,
        owner_name: str,
        owner_email: str,
        emails_to_invite: Iterable[str] = (),
    ) -> OperationResult[UUID]:
        try:
            trip, participants = self._build_trip(
                destination, starts_at, ends_at, owner_name, owner_email, emails_to_invite
            )
            trip = await self.store.create_trip_with_participants(trip, participants)
        except TripPlannerError as e:
            return failed("create_trip", e)

        logger.info(
            f"Trip {trip.id} to {trip.destination} created with {len(participants)} participants"
        )

        # Committed above; a failed email does not undo the trip
        await self.dispatcher.dispatch(self._owner_confirmation(trip, participants[0]))
        return OperationResult.success(trip.id)
