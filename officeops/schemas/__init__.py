"""Pydantic schemas for request/response validation."""
from officeops.schemas.room import RoomCreate, RoomUpdate, RoomDetail
from officeops.schemas.meeting import (
    MeetingCreate,
    MeetingUpdate,
    MeetingDetail,
    StatusChange,
    StatusEntry,
    AttendeesReplace,
    AttendeeList,
)
from officeops.schemas.sop import (
    SopCreate,
    SopUpdate,
    SopFileUpload,
    SopFileDetail,
    SopDetail,
    SopUploadResponse,
)
from officeops.schemas.ticket import (
    TicketCreate,
    TicketUpdate,
    TicketAssignmentsUpdate,
    TicketDetail,
    PurgeResult,
)
from officeops.schemas.common import SuccessResponse, ErrorResponse, ErrorDetail

__all__ = [
    "RoomCreate",
    "RoomUpdate",
    "RoomDetail",
    "MeetingCreate",
    "MeetingUpdate",
    "MeetingDetail",
    "StatusChange",
    "StatusEntry",
    "AttendeesReplace",
    "AttendeeList",
    "SopCreate",
    "SopUpdate",
    "SopFileUpload",
    "SopFileDetail",
    "SopDetail",
    "SopUploadResponse",
    "TicketCreate",
    "TicketUpdate",
    "TicketAssignmentsUpdate",
    "TicketDetail",
    "PurgeResult",
    "SuccessResponse",
    "ErrorResponse",
    "ErrorDetail",
]
