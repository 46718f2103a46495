"""Database base class and model imports."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models here for Alembic to detect them
from officeops.db.models.room import Room  # noqa: F401, E402
from officeops.db.models.meeting import Meeting  # noqa: F401, E402
from officeops.db.models.meeting_status import MeetingStatus  # noqa: F401, E402
from officeops.db.models.meeting_attendee import MeetingAttendee  # noqa: F401, E402
from officeops.db.models.sop import Sop  # noqa: F401, E402
from officeops.db.models.sop_file import SopFile  # noqa: F401, E402
from officeops.db.models.helpdesk_ticket import HelpdeskTicket  # noqa: F401, E402
from officeops.db.models.ticket_assignment import TicketAssignment  # noqa: F401, E402
