from typing import Optional

from fastapi import BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.cache import RedisCache
from tripplanner.core.config import settings
from tripplanner.core.database import get_db
from tripplanner.core.redis_lifecycle import get_cache
from tripplanner.repositories.trip_repository import SqlAlchemyTripStore, TripStore
from tripplanner.services.trips.email_confirmation import SmtpConfirmationNotifier
from tripplanner.services.trips.notification import (
    BackgroundNotificationDispatcher,
    ConfirmationNotifier,
    NotificationDispatcher,
)
from tripplanner.services.trips.participant_service import ParticipantService
from tripplanner.services.trips.trip_service import TripService


async def get_trip_store(db: AsyncSession = Depends(get_db)) -> TripStore:
    return SqlAlchemyTripStore(db)


def get_notifier() -> ConfirmationNotifier:
    return SmtpConfirmationNotifier.from_settings()


def get_dispatcher(
    background_tasks: BackgroundTasks,
    notifier: ConfirmationNotifier = Depends(get_notifier),
) -> NotificationDispatcher:
    return BackgroundNotificationDispatcher(notifier, background_tasks)


async def get_trip_service(
    store: TripStore = Depends(get_trip_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> TripService:
    return TripService(store, dispatcher, settings.API_BASE_URL)


async def get_participant_service(
    store: TripStore = Depends(get_trip_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    cache: Optional[RedisCache] = Depends(get_cache),
) -> ParticipantService:
    return ParticipantService(
        store,
        dispatcher,
        settings.API_BASE_URL,
        cache=cache,
        cache_ttl=settings.PARTICIPANT_CACHE_TTL,
    )
