from sqlalchemy import Column, ForeignKey, String, Boolean, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from tripplanner.core.database import Base
import uuid


class Participant(Base):
    __tablename__ = "participants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id = Column(Uuid, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String, nullable=False, default="")
    email = Column(String, nullable=False)
    is_owner = Column(Boolean, nullable=False, default=False)
    is_confirmed = Column(Boolean, nullable=False, default=False)

    # A trip may not invite the same email twice, even under concurrent invites
    __table_args__ = (
        UniqueConstraint('trip_id', 'email', name='uq_participant_trip_email'),
    )

    trip = relationship("Trip", back_populates="participants")
