from sqlalchemy import Column, String, DateTime, Uuid
from tripplanner.core.database import Base
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import uuid


class Trip(Base):
    __tablename__ = "trips"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    destination = Column(String, nullable=False)
    starts_at = Column(DateTime(timezone=True), nullable=False)
    ends_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    participants = relationship(
        "Participant",
        back_populates="trip",
        cascade="all, delete",
        passive_deletes=True,
    )

