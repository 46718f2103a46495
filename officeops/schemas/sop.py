"""SOP document schemas."""
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from officeops.core.constants import DEFAULT_SOP_VISIBILITY, SOP_VISIBILITIES
from officeops.core.sanitization import sanitize_file_url, sanitize_title
from officeops.schemas.meeting import SUBWING_ALIASES, WING_ALIASES


def _check_visibility(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in SOP_VISIBILITIES:
        raise ValueError(f"visibility must be one of: {', '.join(SOP_VISIBILITIES)}")
    return v


class SopCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    file_url: Optional[str] = None
    version: Optional[str] = Field(None, max_length=20)
    wing_id: Optional[int] = Field(None, validation_alias=WING_ALIASES)
    subw_id: Optional[int] = Field(None, validation_alias=SUBWING_ALIASES)
    visibility: str = DEFAULT_SOP_VISIBILITY

    @field_validator('title')
    @classmethod
    def sanitize_title_field(cls, v: str) -> str:
        return sanitize_title(v)

    @field_validator('file_url')
    @classmethod
    def sanitize_file_url_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_file_url(v) if v is not None else v

    @field_validator('visibility')
    @classmethod
    def validate_visibility(cls, v: str) -> str:
        return _check_visibility(v)


class SopUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    wing_id: Optional[int] = Field(None, validation_alias=WING_ALIASES)
    subw_id: Optional[int] = Field(None, validation_alias=SUBWING_ALIASES)
    visibility: Optional[str] = None

    @field_validator('title')
    @classmethod
    def sanitize_title_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_title(v) if v is not None else v

    @field_validator('visibility')
    @classmethod
    def validate_visibility(cls, v: Optional[str]) -> Optional[str]:
        return _check_visibility(v)

    @model_validator(mode='after')
    def reject_null_required_fields(self):
        for field in ("title", "visibility"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class SopFileUpload(BaseModel):
    file_url: str
    version: Optional[str] = Field(None, max_length=20)
    title: Optional[str] = Field(None, max_length=255)

    @field_validator('file_url')
    @classmethod
    def sanitize_file_url_field(cls, v: str) -> str:
        return sanitize_file_url(v)


class SopFileDetail(BaseModel):
    id: int
    sop_id: int
    title: str
    file_url: str
    version: str
    timestamp: int
    created_at: str


class SopDetail(BaseModel):
    id: int
    title: str
    version: Optional[str] = None
    file_url: Optional[str] = None
    wing_id: Optional[int] = None
    subw_id: Optional[int] = None
    visibility: str
    created_by: Optional[int] = None
    created_at: str
    updated_at: Optional[str] = None
    files: Optional[List[SopFileDetail]] = None


class SopUploadResponse(BaseModel):
    created_version: bool
    sop: SopDetail
