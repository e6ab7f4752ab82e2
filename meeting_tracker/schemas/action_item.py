"""Schemas for action items and consolidated tasks (same shape)."""

from datetime import date, datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field, field_validator

from meeting_tracker.models.action_item import (
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    PRIORITIES,
    STATUSES,
)

Priority = Literal["Low", "Medium", "High", "Critical"]
Status = Literal["To Do", "Not Started", "In Progress", "Completed", "On Hold"]


def _match_choice(value, choices, default: str) -> str:
    if isinstance(value, str):
        wanted = value.strip().lower()
        for choice in choices:
            if choice.lower() == wanted:
                return choice
    return default


def _optional_text(value) -> Optional[str]:
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    text = text.strip()
    return text or None


class ExtractedActionItem(BaseModel):
    """
    One action item as returned by the model.

    Accepts the camelCase keys requested by the extraction prompt as well as
    the snake_case keys used by the merge prompt. Values outside the known
    priority/status sets fall back to the defaults; unreadable due dates
    become null.
    """

    action_item: str = Field(
        ..., validation_alias=AliasChoices("action_item", "actionItem")
    )
    category: Optional[str] = None
    priority: str = DEFAULT_PRIORITY
    status: str = DEFAULT_STATUS
    due_date: Optional[date] = Field(
        None, validation_alias=AliasChoices("due_date", "dueDate")
    )
    remarks: Optional[str] = None
    additional_info: Optional[str] = Field(
        None, validation_alias=AliasChoices("additional_info", "additionalInfo")
    )
    assigned_to: Optional[str] = Field(
        None, validation_alias=AliasChoices("assigned_to", "assignedTo")
    )

    @field_validator("action_item", mode="before")
    @classmethod
    def require_description(cls, v):
        text = _optional_text(v)
        if not text:
            raise ValueError("action item description is empty")
        return text

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v):
        return _match_choice(v, PRIORITIES, DEFAULT_PRIORITY)

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v):
        return _match_choice(v, STATUSES, DEFAULT_STATUS)

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v):
        if isinstance(v, date):
            return v
        if isinstance(v, str) and v.strip():
            try:
                return date.fromisoformat(v.strip()[:10])
            except ValueError:
                return None
        return None

    @field_validator("category", "remarks", "additional_info", "assigned_to", mode="before")
    @classmethod
    def clean_text(cls, v):
        return _optional_text(v)


class ActionItemCreate(BaseModel):
    """Manual action item entry"""

    action_item: str = Field(..., min_length=1, description="Task description")
    category: Optional[str] = Field(None, max_length=100)
    priority: Priority = DEFAULT_PRIORITY
    status: Status = DEFAULT_STATUS
    due_date: Optional[date] = None
    remarks: Optional[str] = None
    additional_info: Optional[str] = None
    assigned_to: Optional[str] = Field(None, max_length=255)


class ActionItemUpdate(BaseModel):
    """In-place edit of an action item or task; omitted fields are kept"""

    action_item: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, max_length=100)
    priority: Optional[Priority] = None
    status: Optional[Status] = None
    due_date: Optional[date] = None
    remarks: Optional[str] = None
    additional_info: Optional[str] = None
    assigned_to: Optional[str] = Field(None, max_length=255)

    @field_validator("action_item")
    @classmethod
    def description_not_null(cls, v):
        # Only runs when the field is sent; omitting it keeps the stored text
        if v is None:
            raise ValueError("action_item cannot be null")
        return v


class ActionItemOut(BaseModel):
    id: UUID
    meeting_id: UUID
    action_item: str
    category: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[date] = None
    remarks: Optional[str] = None
    additional_info: Optional[str] = None
    assigned_to: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Tasks share the action item layout
TaskOut = ActionItemOut
