"""Meeting model - the container owning documents, chunks, action items and BRDs."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from meeting_tracker.db.base import Base


class Meeting(Base):
    __tablename__ = "meetings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    project_id = Column(
        UUID(as_uuid=True),
        ForeignKey("projects.id", ondelete="SET NULL"),
        nullable=True,
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    meeting_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(
        String(20), nullable=False, default="upcoming"
    )  # upcoming, in-progress, completed
    participant_count = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    owner = relationship("User", back_populates="meetings")
    project = relationship("Project", back_populates="meetings")
    documents = relationship(
        "Document", back_populates="meeting", cascade="all, delete-orphan"
    )
    data_chunks = relationship(
        "DataChunk", back_populates="meeting", cascade="all, delete-orphan"
    )
    action_items = relationship(
        "ActionItem", back_populates="meeting", cascade="all, delete-orphan"
    )
    tasks = relationship(
        "Task", back_populates="meeting", cascade="all, delete-orphan"
    )
    business_requirements = relationship(
        "BusinessRequirement", back_populates="meeting", cascade="all, delete-orphan"
    )
