"""ActionItem and Task models.

Both tables share one column layout: action items come from per-chunk
extraction or manual entry, tasks are the consolidated output of the merge
step and are edited independently afterwards.
"""

import uuid

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declared_attr, relationship
from sqlalchemy.sql import func

from meeting_tracker.db.base import Base

PRIORITIES = ("Low", "Medium", "High", "Critical")
STATUSES = ("To Do", "Not Started", "In Progress", "Completed", "On Hold")

DEFAULT_PRIORITY = "Medium"
DEFAULT_STATUS = "Not Started"


class ActionItemColumns:
    """Columns shared by action_items and tasks."""

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    @declared_attr
    def meeting_id(cls):
        return Column(
            UUID(as_uuid=True),
            ForeignKey("meetings.id", ondelete="CASCADE"),
            nullable=False,
        )

    @declared_attr
    def user_id(cls):
        return Column(
            UUID(as_uuid=True),
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        )

    action_item = Column(Text, nullable=False)
    category = Column(String(100), nullable=True)
    priority = Column(String(20), nullable=True, default=DEFAULT_PRIORITY)
    status = Column(String(20), nullable=True, default=DEFAULT_STATUS)
    due_date = Column(Date, nullable=True)
    remarks = Column(Text, nullable=True)
    additional_info = Column(Text, nullable=True)
    assigned_to = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class ActionItem(ActionItemColumns, Base):
    __tablename__ = "action_items"

    meeting = relationship("Meeting", back_populates="action_items")


class Task(ActionItemColumns, Base):
    __tablename__ = "tasks"

    meeting = relationship("Meeting", back_populates="tasks")
