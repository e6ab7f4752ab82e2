from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from meeting_tracker.schemas.processing import ProcessDocumentResponse


class DocumentOut(BaseModel):
    id: UUID
    meeting_id: UUID
    name: str
    media_type: str
    byte_size: int
    storage_path: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DataChunkOut(BaseModel):
    id: UUID
    meeting_id: UUID
    source_document: str
    chunk_index: int
    text: str
    file_path: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DocumentUploadResponse(BaseModel):
    document: DocumentOut
    chunks_created: int = Field(..., alias="chunksCreated")
    ingestion: ProcessDocumentResponse

    class Config:
        populate_by_name = True
