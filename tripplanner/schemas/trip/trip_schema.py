from pydantic import BaseModel, EmailStr, Field
from typing import List
from datetime import datetime
from uuid import UUID


class TripCreate(BaseModel):
    destination: str
    starts_at: datetime
    ends_at: datetime
    owner_name: str
    owner_email: EmailStr
    emails_to_invite: List[EmailStr] = Field(default_factory=list)


class TripCreatedResponse(BaseModel):
    tripId: UUID
