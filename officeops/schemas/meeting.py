"""Meeting schemas."""
from datetime import datetime
from typing import List, Optional
from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from officeops.core.constants import MEETING_STATUSES, MEETING_STATUS_DECLINED
from officeops.core.sanitization import MAX_REASON_LENGTH, parse_id_list, sanitize_text, sanitize_title

# Older clients send camelCase or short names for the org unit ids
WING_ALIASES = AliasChoices("wing_id", "wingId", "wing")
SUBWING_ALIASES = AliasChoices("subw_id", "subwId", "subw")


def _parse_attendees(v):
    """None leaves attendees unchanged; anything else becomes a clean id list."""
    return parse_id_list(v)


class MeetingCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    room_id: int = Field(..., gt=0)
    start_time: datetime
    end_time: datetime
    wing_id: Optional[int] = Field(None, validation_alias=WING_ALIASES)
    subw_id: Optional[int] = Field(None, validation_alias=SUBWING_ALIASES)
    attendees: Optional[List[int]] = None

    @field_validator('title')
    @classmethod
    def sanitize_title_field(cls, v: str) -> str:
        return sanitize_title(v)

    @field_validator('attendees', mode='before')
    @classmethod
    def parse_attendees(cls, v):
        return _parse_attendees(v)


class MeetingUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    room_id: Optional[int] = Field(None, gt=0)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    wing_id: Optional[int] = Field(None, validation_alias=WING_ALIASES)
    subw_id: Optional[int] = Field(None, validation_alias=SUBWING_ALIASES)
    attendees: Optional[List[int]] = None

    @field_validator('title')
    @classmethod
    def sanitize_title_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_title(v) if v is not None else v

    @field_validator('attendees', mode='before')
    @classmethod
    def parse_attendees(cls, v):
        return _parse_attendees(v)

    @model_validator(mode='after')
    def reject_null_required_fields(self):
        for field in ("title", "room_id", "start_time", "end_time"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class MeetingDetail(BaseModel):
    id: int
    title: str
    room_id: int
    user_id: int
    start_time: str
    end_time: str
    wing_id: Optional[int] = None
    subw_id: Optional[int] = None
    status: Optional[str] = None
    attendees: List[int]
    created_at: str
    updated_at: Optional[str] = None


class StatusChange(BaseModel):
    status: str
    decline_reason: Optional[str] = Field(None, max_length=MAX_REASON_LENGTH)

    @field_validator('status')
    @classmethod
    def validate_status(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in MEETING_STATUSES:
            raise ValueError(f"status must be one of: {', '.join(MEETING_STATUSES)}")
        return v

    @field_validator('decline_reason')
    @classmethod
    def sanitize_reason(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return sanitize_text(v, max_length=MAX_REASON_LENGTH) or None

    @model_validator(mode='after')
    def require_reason_on_decline(self):
        if self.status == MEETING_STATUS_DECLINED and not self.decline_reason:
            raise ValueError("decline_reason is required when declining a meeting")
        return self


class StatusEntry(BaseModel):
    id: int
    meeting_id: int
    status: str
    approved_by: Optional[int] = None
    declined_by: Optional[int] = None
    decline_reason: Optional[str] = None
    changed_at: str


class AttendeesReplace(BaseModel):
    attendees: List[int]

    @field_validator('attendees', mode='before')
    @classmethod
    def parse_attendees(cls, v):
        parsed = parse_id_list(v)
        return [] if parsed is None else parsed


class AttendeeList(BaseModel):
    meeting_id: int
    attendees: List[int]
