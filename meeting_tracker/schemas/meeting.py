"""Schemas for meetings and projects."""

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

MeetingStatus = Literal["upcoming", "in-progress", "completed"]


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class ProjectOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MeetingCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    meeting_date: Optional[datetime] = None
    status: MeetingStatus = "upcoming"
    participant_count: Optional[int] = Field(None, ge=0)
    project_id: Optional[UUID] = None


class MeetingUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    meeting_date: Optional[datetime] = None
    status: Optional[MeetingStatus] = None
    participant_count: Optional[int] = Field(None, ge=0)
    project_id: Optional[UUID] = None

    @field_validator("title", "status")
    @classmethod
    def required_columns_not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class MeetingOut(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    meeting_date: Optional[datetime] = None
    status: str
    participant_count: Optional[int] = None
    project_id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
