from typing import List, Optional
from uuid import UUID, uuid4

from redis.exceptions import RedisError

from tripplanner.core.cache import RedisCache
from tripplanner.core.errors import ConflictError, NotFoundError, TripPlannerError
from tripplanner.core.logger import logger
from tripplanner.core.result import OperationResult, failed
from tripplanner.models.trips.participant import Participant
from tripplanner.models.trips.trip_model import Trip
from tripplanner.repositories.trip_repository import TripStore
from tripplanner.schemas.trip.participant import (
    ParticipantConfirmation,
    ParticipantOut,
    TripParticipantOut,
)
from tripplanner.services.trips.email_confirmation import build_participant_confirmation_link
from tripplanner.services.trips.notification import (
    ConfirmationContext,
    ConfirmationRequest,
    NotificationDispatcher,
)
from tripplanner.services.trips.validation import validate_email
from tripplanner.utils.date_format import format_trip_date


class ParticipantService:
    def __init__(
        self,
        store: TripStore,
        dispatcher: NotificationDispatcher,
        api_base_url: str,
        cache: Optional[RedisCache] = None,
        cache_ttl: int = 600,
    ):
        self.store = store
        self.dispatcher = dispatcher
        self.api_base_url = api_base_url
        self.cache = cache
        self.cache_ttl = cache_ttl

    @staticmethod
    def _cache_key(participant_id: UUID) -> str:
        return RedisCache.build_key("participants", "id", participant_id)

    async def _get_trip(self, trip_id: UUID) -> Trip:
        trip = await self.store.find_trip_by_id(trip_id)
        if trip is None:
            raise NotFoundError("Trip not found")
        return trip

    async def _get_participant(self, participant_id: UUID) -> Participant:
        participant = await self.store.find_participant_by_id(participant_id)
        if participant is None:
            raise NotFoundError("Participant not found")
        return participant

    def _invite_confirmation(self, trip: Trip, participant: Participant) -> ConfirmationRequest:
        return ConfirmationRequest(
            recipient_name=participant.name,
            recipient_email=participant.email,
            subject=f"Confirm your attendance on the trip to {trip.destination}",
            context=ConfirmationContext(
                destination=trip.destination,
                starts_on=format_trip_date(trip.starts_at),
                ends_on=format_trip_date(trip.ends_at),
                confirmation_link=build_participant_confirmation_link(self.api_base_url, participant.id),
            ),
        )

    async def invite_participant(self, trip_id: UUID, email: str) -> OperationResult[UUID]:
        try:
            email = validate_email(email)
            trip = await self._get_trip(trip_id)

            if await self.store.find_participant(trip_id, email) is not None:
                raise ConflictError("This email has already been invited to this trip")

            # The unique constraint still rejects a concurrent invite that slips past the check
            participant = await self.store.create_participant(
                Participant(
                    id=uuid4(),
                    trip_id=trip_id,
                    name="",
                    email=email,
                    is_owner=False,
                    is_confirmed=False,
                )
            )
        except TripPlannerError as e:
            return failed("invite_participant", e)

        logger.info(f"Participant {participant.id} invited to trip {trip_id}")

        await self.dispatcher.dispatch(self._invite_confirmation(trip, participant))
        return OperationResult.success(participant.id)

    async def _read_cached(self, cache_key: str) -> Optional[ParticipantOut]:
        if self.cache is None:
            return None
        try:
            cached = await self.cache.get(cache_key)
        except RedisError as e:
            logger.warning(f"Participant cache read failed for {cache_key}: {e}")
            return None
        return ParticipantOut(**cached) if cached else None

    async def _write_cached(self, cache_key: str, projection: ParticipantOut) -> None:
        # Only confirmed projections are cached: confirmed is terminal, so they never go stale
        if self.cache is None or not projection.is_confirmed:
            return
        try:
            await self.cache.set(cache_key, projection.model_dump(mode="json"), expire=self.cache_ttl)
        except RedisError as e:
            logger.warning(f"Participant cache write failed for {cache_key}: {e}")

    async def get_participant(self, participant_id: UUID) -> OperationResult[ParticipantOut]:
        cache_key = self._cache_key(participant_id)
        cached = await self._read_cached(cache_key)
        if cached is not None:
            logger.info(f"Participant {participant_id} retrieved from cache")
            return OperationResult.success(cached)

        try:
            participant = await self._get_participant(participant_id)
        except TripPlannerError as e:
            return failed("get_participant", e)

        projection = ParticipantOut.model_validate(participant)
        await self._write_cached(cache_key, projection)
        return OperationResult.success(projection)

    async def confirm_participant(self, participant_id: UUID) -> OperationResult[ParticipantConfirmation]:
        try:
            participant = await self._get_participant(participant_id)
            already_confirmed = bool(participant.is_confirmed)
            # Confirmed is terminal, confirming again changes nothing
            if not already_confirmed:
                await self.store.set_participant_confirmed(participant_id)
        except TripPlannerError as e:
            return failed("confirm_participant", e)

        if already_confirmed:
            logger.info(f"Participant {participant_id} was already confirmed")
        else:
            logger.info(f"Participant {participant_id} confirmed")

        return OperationResult.success(
            ParticipantConfirmation(
                participant_id=participant.id,
                trip_id=participant.trip_id,
                is_confirmed=True,
                already_confirmed=already_confirmed,
            )
        )

    async def get_trip_participants(self, trip_id: UUID) -> OperationResult[List[TripParticipantOut]]:
        try:
            await self._get_trip(trip_id)
            participants = await self.store.list_trip_participants(trip_id)
        except TripPlannerError as e:
            return failed("get_trip_participants", e)

        return OperationResult.success(
            [TripParticipantOut.model_validate(p) for p in participants]
        )
