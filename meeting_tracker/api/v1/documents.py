"""
Document upload endpoints.

An upload is stored, recorded as a documents row, converted to text,
chunked and sent through the same ingestion path as pre-chunked text.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from meeting_tracker.core.config import settings
from meeting_tracker.core.deps import get_current_user, get_db, get_owned_meeting, parse_uuid
from meeting_tracker.core.exceptions import UnsupportedFileFormatError
from meeting_tracker.models.document import Document
from meeting_tracker.models.user import User
from meeting_tracker.schemas.action_item import ActionItemOut
from meeting_tracker.schemas.document import DocumentOut, DocumentUploadResponse
from meeting_tracker.schemas.processing import ChunkIn, ProcessDocumentResponse
from meeting_tracker.services.action_item_extractor import process_chunks
from meeting_tracker.services.file_validator import (
    FileValidationError,
    validate_uploaded_file,
)
from meeting_tracker.services.storage import build_storage_path, get_storage_service
from meeting_tracker.services.text_chunker import create_text_chunks
from meeting_tracker.services.text_extractor import (
    DOCX_MEDIA_TYPE,
    PDF_MEDIA_TYPE,
    extract_text,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

MEDIA_TYPES = {"docx": DOCX_MEDIA_TYPE, "pdf": PDF_MEDIA_TYPE}


@router.post(
    "/upload",
    response_model=DocumentUploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_document(
    meeting_id: str = Form(...),
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Upload a meeting transcript and extract its action items.

    Supported file types: Word (.docx), PDF

    Security:
    - Validates file extension
    - Validates file content (magic bytes)
    - Enforces file size limits
    """
    meeting = get_owned_meeting(db, parse_uuid(meeting_id, "meeting ID"), current_user)
    filename = file.filename or ""

    content = await file.read()

    try:
        file_type = validate_uploaded_file(
            filename=filename,
            content=content,
            max_size_mb=settings.MAX_UPLOAD_SIZE_MB,
        )
    except FileValidationError as e:
        logger.warning(f"File validation failed for user {current_user.id}: {e.message}")
        if e.error_code == "UNSUPPORTED_TYPE":
            raise UnsupportedFileFormatError(e.message)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )

    media_type = MEDIA_TYPES[file_type]
    storage = get_storage_service()
    object_path = build_storage_path(current_user.id, meeting.id, filename)

    try:
        stored_path = storage.upload(object_path, content, media_type)
    except Exception as e:
        logger.error(f"Failed to store {filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store the uploaded file",
        )

    document = Document(
        meeting_id=meeting.id,
        user_id=current_user.id,
        name=filename,
        media_type=media_type,
        byte_size=len(content),
        storage_path=stored_path,
    )

    try:
        db.add(document)
        db.commit()
        db.refresh(document)
    except Exception as e:
        # Rollback: remove the stored object if the insert fails
        db.rollback()
        logger.error(f"Database insert failed, removing stored file: {e}")
        try:
            storage.delete(stored_path)
        except Exception as cleanup_error:
            logger.error(f"Failed to remove orphaned file {stored_path}: {cleanup_error}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register the document",
        )

    # The document stays stored even if no text can be read from it
    text = extract_text(content, filename, media_type)

    chunks = [
        ChunkIn(
            text=chunk.text,
            source_document=chunk.source_document,
            chunk_index=chunk.chunk_index,
            file_path=stored_path,
        )
        for chunk in create_text_chunks(text, filename, settings.CHUNK_SIZE)
    ]
    logger.info(f"Extracted {len(text)} characters from {filename} into {len(chunks)} chunks")

    result = await process_chunks(db, meeting.id, current_user.id, chunks)

    logger.info(
        f"Document uploaded: {filename} ({len(chunks)} chunks, "
        f"{result.action_items_generated} action items) by user {current_user.id}"
    )

    return DocumentUploadResponse(
        document=DocumentOut.model_validate(document),
        chunks_created=len(chunks),
        ingestion=ProcessDocumentResponse(
            success=True,
            chunks_processed=result.chunks_processed,
            action_items_generated=result.action_items_generated,
            action_items=[ActionItemOut.model_validate(item) for item in result.action_items],
        ),
    )


@router.get("/meeting/{meeting_id}", response_model=List[DocumentOut])
def list_documents(
    meeting_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the documents uploaded to a meeting, newest first."""
    meeting = get_owned_meeting(db, parse_uuid(meeting_id, "meeting ID"), current_user)

    return (
        db.query(Document)
        .filter(Document.meeting_id == meeting.id)
        .order_by(Document.created_at.desc())
        .all()
    )
