"""MeetingStatus model (append-only status history)."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from officeops.db.base import Base


class MeetingStatus(Base):
    __tablename__ = "meeting_statuses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meeting_id = Column(Integer, ForeignKey("meetings.id", ondelete="CASCADE"), nullable=False)
    status = Column(String(20), nullable=False)
    approved_by = Column(Integer, nullable=True)
    declined_by = Column(Integer, nullable=True)
    decline_reason = Column(Text, nullable=True)
    changed_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    meeting = relationship("Meeting", back_populates="statuses")

    __table_args__ = (Index("idx_meeting_statuses_meeting", "meeting_id", "changed_at"),)
