"""Schemas for versioned business requirements documents."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class BusinessRequirementCreate(BaseModel):
    """Manual save; always stored as a new version"""

    content: str = Field(..., min_length=1, description="Full document body")


class BusinessRequirementOut(BaseModel):
    id: UUID
    meeting_id: UUID
    content: str
    version: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BusinessRequirementLatestOut(BaseModel):
    """Latest stored version, or the default template when none exists"""

    id: Optional[UUID] = None
    meeting_id: UUID
    content: str
    version: int = Field(0, description="0 when the default template is returned")
    is_default: bool = False
    created_at: Optional[datetime] = None


class RegenerateRequest(BaseModel):
    meeting_id: UUID = Field(..., alias="meetingId")

    class Config:
        populate_by_name = True


class RegenerateResponse(BaseModel):
    success: bool = True
    content: str
    version: int
    id: UUID
