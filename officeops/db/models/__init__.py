"""Database models."""
from officeops.db.models.room import Room
from officeops.db.models.meeting import Meeting
from officeops.db.models.meeting_status import MeetingStatus
from officeops.db.models.meeting_attendee import MeetingAttendee
from officeops.db.models.sop import Sop
from officeops.db.models.sop_file import SopFile
from officeops.db.models.helpdesk_ticket import HelpdeskTicket
from officeops.db.models.ticket_assignment import TicketAssignment

__all__ = [
    "Room",
    "Meeting",
    "MeetingStatus",
    "MeetingAttendee",
    "Sop",
    "SopFile",
    "HelpdeskTicket",
    "TicketAssignment",
]
