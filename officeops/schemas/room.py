"""Room schemas."""
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from officeops.core.sanitization import sanitize_text, sanitize_title, parse_bool


class RoomBase(BaseModel):
    capacity: Optional[int] = Field(None, ge=0)
    seating: Optional[str] = Field(None, max_length=1000)
    image: Optional[str] = Field(None, max_length=255)

    @field_validator('seating')
    @classmethod
    def sanitize_seating(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_text(v) if v is not None else v


class RoomCreate(RoomBase):
    name: str = Field(..., min_length=1, max_length=200)
    presentation: bool = False

    @field_validator('name')
    @classmethod
    def sanitize_name_field(cls, v: str) -> str:
        return sanitize_title(v)

    @field_validator('presentation', mode='before')
    @classmethod
    def parse_presentation(cls, v):
        """Accept 1/0 and yes/no as well as booleans."""
        return parse_bool(v)


class RoomUpdate(RoomBase):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    presentation: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def sanitize_name_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_title(v) if v is not None else v

    @field_validator('presentation', mode='before')
    @classmethod
    def parse_presentation(cls, v):
        return parse_bool(v) if v is not None else v

    @model_validator(mode='after')
    def reject_null_required_fields(self):
        for field in ("name", "presentation"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class RoomDetail(BaseModel):
    id: int
    name: str
    capacity: Optional[int] = None
    seating: Optional[str] = None
    presentation: bool
    image: Optional[str] = None
    created_at: str
    updated_at: Optional[str] = None
