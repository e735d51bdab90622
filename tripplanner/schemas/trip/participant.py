from pydantic import BaseModel, EmailStr
from typing import List
from uuid import UUID


# When a participant is invited to an existing trip
class ParticipantInviteCreate(BaseModel):
    email: EmailStr


class ParticipantInvitedResponse(BaseModel):
    participantId: UUID


# Read-only projection of a single participant
class ParticipantOut(BaseModel):
    id: UUID
    name: str
    email: str
    is_confirmed: bool

    model_config = {
        "from_attributes": True
    }


class ParticipantResponse(BaseModel):
    participant: ParticipantOut


# Participant as listed on its trip
class TripParticipantOut(ParticipantOut):
    is_owner: bool


class TripParticipantsResponse(BaseModel):
    participants: List[TripParticipantOut]

    model_config = {
        "from_attributes": True
    }


class ParticipantConfirmation(BaseModel):
    participant_id: UUID
    trip_id: UUID
    is_confirmed: bool
    already_confirmed: bool
