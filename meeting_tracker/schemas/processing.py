"""Request/response contracts for the ingestion and merge entry points.

Field names on the wire are camelCase; snake_case is accepted on input too.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from meeting_tracker.schemas.action_item import ActionItemOut, TaskOut


class ChunkIn(BaseModel):
    text: str = ""
    source_document: Optional[str] = Field(None, alias="sourceDocument")
    chunk_index: Optional[int] = Field(None, alias="chunkIndex", ge=0)
    file_path: Optional[str] = None

    class Config:
        populate_by_name = True


class ProcessDocumentRequest(BaseModel):
    chunks: List[ChunkIn]
    meeting_id: UUID = Field(..., alias="meetingId")
    user_id: Optional[UUID] = Field(None, alias="userId")

    class Config:
        populate_by_name = True


class ProcessDocumentResponse(BaseModel):
    success: bool = True
    chunks_processed: int = Field(..., alias="chunksProcessed")
    action_items_generated: int = Field(..., alias="actionItemsGenerated")
    action_items: List[ActionItemOut] = Field(default_factory=list, alias="actionItems")

    class Config:
        populate_by_name = True


class SummarizeRequest(BaseModel):
    meeting_id: UUID = Field(..., alias="meetingId")
    user_id: Optional[UUID] = Field(None, alias="userId")

    class Config:
        populate_by_name = True


class SummarizeResponse(BaseModel):
    message: str
    tasks_created: int = Field(..., alias="tasksCreated")
    tasks: List[TaskOut] = Field(default_factory=list)

    class Config:
        populate_by_name = True
