"""
Data chunk API endpoints (read-only).
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from meeting_tracker.core.deps import get_current_user, get_db, get_owned_meeting, parse_uuid
from meeting_tracker.models.data_chunk import DataChunk
from meeting_tracker.models.user import User
from meeting_tracker.schemas.document import DataChunkOut

router = APIRouter(prefix="/data-chunks", tags=["data-chunks"])


@router.get("/meeting/{meeting_id}", response_model=List[DataChunkOut])
def list_data_chunks(
    meeting_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List stored chunks grouped by source document, in document order."""
    meeting = get_owned_meeting(db, parse_uuid(meeting_id, "meeting ID"), current_user)

    return (
        db.query(DataChunk)
        .filter(DataChunk.meeting_id == meeting.id)
        .order_by(DataChunk.source_document, DataChunk.chunk_index)
        .all()
    )
