"""Helpdesk ticket schemas."""
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from officeops.core.constants import (
    DEFAULT_TICKET_PRIORITY,
    TICKET_PRIORITIES,
    TICKET_STATUSES,
    TICKET_STATUS_OPEN,
)
from officeops.core.sanitization import parse_id_list, sanitize_title


def _check_choice(v: Optional[str], choices, name: str) -> Optional[str]:
    if v is None:
        return v
    v = v.strip().lower()
    if v not in choices:
        raise ValueError(f"{name} must be one of: {', '.join(choices)}")
    return v


class TicketCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    details: Optional[str] = Field(None, max_length=10000)
    priority: str = DEFAULT_TICKET_PRIORITY
    status: str = TICKET_STATUS_OPEN
    # An id, a comma-separated string or a list; omitted means unassigned
    assigned_to: Optional[List[int]] = None

    @field_validator('title')
    @classmethod
    def sanitize_title_field(cls, v: str) -> str:
        return sanitize_title(v)

    @field_validator('priority')
    @classmethod
    def validate_priority(cls, v: str) -> str:
        return _check_choice(v, TICKET_PRIORITIES, "priority")

    @field_validator('status')
    @classmethod
    def validate_status(cls, v: str) -> str:
        return _check_choice(v, TICKET_STATUSES, "status")

    @field_validator('assigned_to', mode='before')
    @classmethod
    def parse_assignees(cls, v):
        return parse_id_list(v)


class TicketUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    details: Optional[str] = Field(None, max_length=10000)
    priority: Optional[str] = None
    status: Optional[str] = None
    # Omitted leaves assignments alone, [] or "" unassigns everyone
    assigned_to: Optional[List[int]] = None

    @field_validator('title')
    @classmethod
    def sanitize_title_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_title(v) if v is not None else v

    @field_validator('priority')
    @classmethod
    def validate_priority(cls, v: Optional[str]) -> Optional[str]:
        return _check_choice(v, TICKET_PRIORITIES, "priority")

    @field_validator('status')
    @classmethod
    def validate_status(cls, v: Optional[str]) -> Optional[str]:
        return _check_choice(v, TICKET_STATUSES, "status")

    @field_validator('assigned_to', mode='before')
    @classmethod
    def parse_assignees(cls, v):
        return parse_id_list(v)

    @model_validator(mode='after')
    def reject_null_required_fields(self):
        for field in ("title", "priority", "status"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class TicketAssignmentsUpdate(BaseModel):
    assigned_to: List[int]

    @field_validator('assigned_to', mode='before')
    @classmethod
    def parse_assignees(cls, v):
        parsed = parse_id_list(v)
        return [] if parsed is None else parsed


class TicketDetail(BaseModel):
    id: int
    title: str
    details: Optional[str] = None
    user_id: int
    assigned_by: Optional[int] = None
    assigned_to: Optional[int] = None
    assignees: List[int]
    status: str
    priority: str
    request_time: str
    last_update_time: Optional[str] = None
    resolve_time: Optional[str] = None
    trashed_at: Optional[str] = None
    deleted_at: Optional[str] = None
    created_at: str
    updated_at: Optional[str] = None


class PurgeResult(BaseModel):
    purged: int
    older_than_days: int
