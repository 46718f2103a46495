"""Room model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Boolean, Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship

from officeops.db.base import Base


class Room(Base):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, index=True)
    capacity = Column(Integer, nullable=True)
    seating = Column(Text, nullable=True)
    presentation = Column(Boolean, nullable=False, default=False)
    image = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    meetings = relationship("Meeting", back_populates="room")
