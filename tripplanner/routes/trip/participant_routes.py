from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from tripplanner.core.config import settings
from tripplanner.dependencies.services import get_participant_service
from tripplanner.schemas.trip.participant import ParticipantResponse
from tripplanner.services.trips.participant_service import ParticipantService

router = APIRouter(prefix="/participants", tags=["Participants"])


@router.get("/{participant_id}", response_model=ParticipantResponse)
async def get_participant_route(
    participant_id: UUID,
    participant_service: ParticipantService = Depends(get_participant_service)
):
    result = await participant_service.get_participant(participant_id)
    return ParticipantResponse(participant=result.unwrap())


@router.get("/{participant_id}/confirm")
async def confirm_participant_route(
    participant_id: UUID,
    participant_service: ParticipantService = Depends(get_participant_service)
):
    result = await participant_service.confirm_participant(participant_id)
    confirmation = result.unwrap()
    return RedirectResponse(f"{settings.WEB_BASE_URL.rstrip('/')}/trips/{confirmation.trip_id}")
