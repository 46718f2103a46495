"""HelpdeskTicket model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, Text, DateTime, Index
from sqlalchemy.orm import relationship

from officeops.db.base import Base


class HelpdeskTicket(Base):
    __tablename__ = "helpdesk_tickets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    details = Column(Text, nullable=True)
    user_id = Column(Integer, nullable=False, index=True)  # reporter
    assigned_by = Column(Integer, nullable=True)
    # Primary assignee, mirrors the first row of ticket_assignments
    assigned_to = Column(Integer, nullable=True, index=True)
    status = Column(String(20), nullable=False, default="open")
    priority = Column(String(20), nullable=False, default="medium")
    request_time = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    last_update_time = Column(DateTime(timezone=True), nullable=True)
    resolve_time = Column(DateTime(timezone=True), nullable=True)
    trashed_at = Column(DateTime(timezone=True), nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    assignments = relationship(
        "TicketAssignment",
        back_populates="ticket",
        cascade="all, delete-orphan",
        order_by="TicketAssignment.id",
    )

    __table_args__ = (Index("idx_helpdesk_tickets_live", "deleted_at", "trashed_at"),)
