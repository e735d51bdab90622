"""
Storage collaborator for trips and participants.

``TripStore`` is the narrow interface the services depend on;
``SqlAlchemyTripStore`` implements it over one request-scoped
``AsyncSession``. Each mutating call is its own transaction, and the
``(trip_id, email)`` uniqueness of participants is enforced by the database
constraint rather than by the pre-check done in the service.
"""

from functools import wraps
from typing import List, Optional, Protocol
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from tripplanner.core.errors import ConflictError, DependencyFailureError
from tripplanner.core.logger import logger
from tripplanner.models.trips.participant import Participant
from tripplanner.models.trips.trip_model import Trip


class TripStore(Protocol):
    async def create_trip_with_participants(self, trip: Trip, participants: List[Participant]) -> Trip: ...

    async def find_trip_by_id(self, trip_id: UUID) -> Optional[Trip]: ...

    async def find_participant(self, trip_id: UUID, email: str) -> Optional[Participant]: ...

    async def create_participant(self, participant: Participant) -> Participant: ...

    async def find_participant_by_id(self, participant_id: UUID) -> Optional[Participant]: ...

    async def set_participant_confirmed(self, participant_id: UUID) -> None: ...

    async def list_trip_participants(self, trip_id: UUID) -> List[Participant]: ...


def translate_storage_errors(func):
    """Roll back and surface unexpected database errors as DependencyFailureError."""
    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Storage error in {func.__name__}: {e}")
            raise DependencyFailureError(f"Storage failure during {func.__name__}") from e
    return wrapper


class SqlAlchemyTripStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    @translate_storage_errors
    async def create_trip_with_participants(self, trip: Trip, participants: List[Participant]) -> Trip:
        # Trip and participants go out in a single commit, all or nothing
        trip.participants = list(participants)
        self.db.add(trip)
        await self.db.commit()
        return trip

    @translate_storage_errors
    async def find_trip_by_id(self, trip_id: UUID) -> Optional[Trip]:
        return await self.db.get(Trip, trip_id)

    @translate_storage_errors
    async def find_participant(self, trip_id: UUID, email: str) -> Optional[Participant]:
        result = await self.db.execute(
            select(Participant).where(
                Participant.trip_id == trip_id,
                Participant.email == email,
            )
        )
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def create_participant(self, participant: Participant) -> Participant:
        trip_id, email = participant.trip_id, participant.email
        self.db.add(participant)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            # Only a row already holding this (trip_id, email) makes it a duplicate invite
            if await self.find_participant(trip_id, email) is not None:
                raise ConflictError("Participant already invited to this trip") from e
            logger.error(f"Participant insert for trip {trip_id} violated a constraint: {e}")
            raise DependencyFailureError("Participant could not be stored") from e
        return participant

    @translate_storage_errors
    async def find_participant_by_id(self, participant_id: UUID) -> Optional[Participant]:
        return await self.db.get(Participant, participant_id)

    @translate_storage_errors
    async def set_participant_confirmed(self, participant_id: UUID) -> None:
        await self.db.execute(
            update(Participant)
            .where(Participant.id == participant_id)
            .values(is_confirmed=True)
        )
        await self.db.commit()

    @translate_storage_errors
    async def list_trip_participants(self, trip_id: UUID) -> List[Participant]:
        result = await self.db.execute(
            select(Participant)
            .where(Participant.trip_id == trip_id)
            .order_by(Participant.is_owner.desc(), Participant.email)
        )
        return list(result.scalars().all())
