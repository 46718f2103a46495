"""TicketAssignment model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from officeops.db.base import Base


class TicketAssignment(Base):
    __tablename__ = "ticket_assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ticket_id = Column(Integer, ForeignKey("helpdesk_tickets.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, nullable=False)
    assigned_by = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    ticket = relationship("HelpdeskTicket", back_populates="assignments")

    __table_args__ = (
        Index("idx_ticket_assignments_ticket", "ticket_id"),
        UniqueConstraint("ticket_id", "user_id", name="uq_ticket_user"),
    )
