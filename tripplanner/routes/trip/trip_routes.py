from uuid import UUID

from fastapi import APIRouter, Depends

from tripplanner.dependencies.services import get_participant_service, get_trip_service
from tripplanner.schemas.trip.participant import (
    ParticipantInviteCreate,
    ParticipantInvitedResponse,
    TripParticipantsResponse,
)
from tripplanner.schemas.trip.trip_schema import TripCreate, TripCreatedResponse
from tripplanner.services.trips.participant_service import ParticipantService
from tripplanner.services.trips.trip_service import TripService

router = APIRouter(prefix="/trips", tags=["Trips"])


@router.post("", response_model=TripCreatedResponse)
async def create_trip_route(
    trip: TripCreate,
    trip_service: TripService = Depends(get_trip_service)
):
    result = await trip_service.create_trip(
        destination=trip.destination,
        starts_at=trip.starts_at,
        ends_at=trip.ends_at,
        owner_name=trip.owner_name,
        owner_email=trip.owner_email,
        emails_to_invite=trip.emails_to_invite,
    )
    return TripCreatedResponse(tripId=result.unwrap())


@router.get("/{trip_id}/participants", response_model=TripParticipantsResponse)
async def list_trip_participants(
    trip_id: UUID,
    participant_service: ParticipantService = Depends(get_participant_service)
):
    result = await participant_service.get_trip_participants(trip_id)
    return TripParticipantsResponse(participants=result.unwrap())


@router.post("/{trip_id}/invites", response_model=ParticipantInvitedResponse)
async def invite_participant_route(
    trip_id: UUID,
    invite: ParticipantInviteCreate,
    participant_service: ParticipantService = Depends(get_participant_service)
):
    result = await participant_service.invite_participant(trip_id, invite.email)
    return ParticipantInvitedResponse(participantId=result.unwrap())
