"""
Ingestion entry point: extract action items from pre-chunked transcript text.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from meeting_tracker.core.deps import (
    check_requested_user,
    get_current_user,
    get_db,
    get_owned_meeting,
)
from meeting_tracker.models.user import User
from meeting_tracker.schemas.action_item import ActionItemOut
from meeting_tracker.schemas.processing import ProcessDocumentRequest, ProcessDocumentResponse
from meeting_tracker.services.action_item_extractor import process_chunks

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/processing", tags=["processing"])


@router.post("/process-document", response_model=ProcessDocumentResponse)
async def process_document(
    data: ProcessDocumentRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Store the chunks and extract action items from each of them.

    Chunks are handled one at a time in the order given. A chunk whose LLM
    call fails is skipped; the response reports every chunk received.
    """
    user_id = check_requested_user(data.user_id, current_user)
    meeting = get_owned_meeting(db, data.meeting_id, current_user)

    result = await process_chunks(db, meeting.id, user_id, data.chunks)

    return ProcessDocumentResponse(
        success=True,
        chunks_processed=result.chunks_processed,
        action_items_generated=result.action_items_generated,
        action_items=[ActionItemOut.model_validate(item) for item in result.action_items],
    )
