"""
Action item extraction from transcript chunks.

Chunks are processed one at a time: each chunk is stored as a data_chunks row
and sent to the chat model, and whatever the model returns is accumulated for
a single bulk insert at the end. A chunk whose LLM call or response parsing
fails is logged and skipped; the remaining chunks are still processed.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from meeting_tracker.core.config import settings
from meeting_tracker.core.exceptions import (
    AppException,
    DatabaseWriteError,
    UpstreamHttpError,
)
from meeting_tracker.models.action_item import ActionItem
from meeting_tracker.models.data_chunk import DataChunk
from meeting_tracker.schemas.action_item import ExtractedActionItem
from meeting_tracker.schemas.processing import ChunkIn
from meeting_tracker.services.json_parser import parse_model_json
from meeting_tracker.services.llm_client import LLMClient, get_llm_client

logger = logging.getLogger(__name__)

# =============================================================================
# Prompts
# =============================================================================

EXTRACTION_SYSTEM_PROMPT = """You are an AI assistant that extracts action items from meeting transcripts.

For each action item you identify, provide a JSON object with these fields:
- actionItem: Clear, specific description of the task
- category: One of "Task", "Follow-up", "Decision", "Research", "Review"
- priority: One of "Low", "Medium", "High", "Critical"
- status: Always "Not Started"
- dueDate: If mentioned, format as YYYY-MM-DD, otherwise null
- remarks: Any additional context or notes
- additionalInfo: Supporting details if any
- assignedTo: Person responsible if mentioned, otherwise null

Return ONLY a valid JSON array of action items. If no action items are found, return an empty array [].
Do not include any text before or after the JSON array."""

EXTRACTION_USER_TEMPLATE = """Extract action items from this meeting transcript chunk:

{text}"""


@dataclass
class IngestionResult:
    """Outcome of one ingestion request."""

    chunks_processed: int
    action_items: List[ActionItem] = field(default_factory=list)
    failed_chunks: int = 0

    @property
    def action_items_generated(self) -> int:
        return len(self.action_items)


def coerce_action_items(raw: Sequence[Any]) -> List[ExtractedActionItem]:
    """
    Validate decoded model output element by element.

    Elements that are not objects or lack a description are dropped.
    """
    items: List[ExtractedActionItem] = []
    for element in raw:
        if not isinstance(element, dict):
            logger.debug(f"Skipping non-object element: {element!r}")
            continue
        try:
            items.append(ExtractedActionItem.model_validate(element))
        except ValidationError as e:
            logger.debug(f"Skipping invalid action item: {e.errors()}")
    return items


async def extract_action_items(
    text: str,
    client: Optional[LLMClient] = None,
) -> List[ExtractedActionItem]:
    """
    Ask the model for the action items in one chunk of transcript.

    Returns:
        Parsed action items; [] when the model answers with no content or
        with a JSON value that is not an array

    Raises:
        UpstreamHttpError: If the LLM request fails
        MalformedModelOutputError: If the response cannot be parsed as JSON
    """
    client = client or get_llm_client()

    messages = [
        {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
        {"role": "user", "content": EXTRACTION_USER_TEMPLATE.format(text=text)},
    ]

    logger.debug(f"Sending chunk to LLM: {text[:100]}...")
    content = await client.chat(
        messages,
        temperature=settings.LLM_EXTRACTION_TEMPERATURE,
    )

    if not content:
        logger.info("No content in LLM response")
        return []

    logger.debug(f"LLM response (first 200 chars): {content[:200]}")
    data = parse_model_json(content)

    if not isinstance(data, list):
        logger.warning(f"Response was not an array: {type(data).__name__}")
        return []

    return coerce_action_items(data)


def _save_chunk(
    db: Session,
    meeting_id: UUID,
    user_id: UUID,
    chunk: ChunkIn,
    position: int,
) -> None:
    """Insert one data_chunks row; a failed insert is logged and rolled back."""
    chunk_index = chunk.chunk_index if chunk.chunk_index is not None else position
    db.add(DataChunk(
        meeting_id=meeting_id,
        user_id=user_id,
        text=chunk.text,
        source_document=chunk.source_document,
        chunk_index=chunk_index,
        file_path=chunk.file_path,
    ))
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error saving chunk {chunk_index} of {chunk.source_document}: {e}")


def _save_action_items(
    db: Session,
    meeting_id: UUID,
    user_id: UUID,
    items: List[ExtractedActionItem],
) -> List[ActionItem]:
    """Bulk insert extracted items in a single commit."""
    if not items:
        return []

    rows = [
        ActionItem(
            meeting_id=meeting_id,
            user_id=user_id,
            action_item=item.action_item,
            category=item.category,
            priority=item.priority,
            status=item.status,
            due_date=item.due_date,
            remarks=item.remarks,
            additional_info=item.additional_info,
            assigned_to=item.assigned_to,
        )
        for item in items
    ]

    db.add_all(rows)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error saving action items: {e}")
        raise DatabaseWriteError("Failed to save action items")

    for row in rows:
        db.refresh(row)

    logger.info(f"Successfully saved {len(rows)} action items to database")
    return rows


async def process_chunks(
    db: Session,
    meeting_id: UUID,
    user_id: UUID,
    chunks: Sequence[ChunkIn],
    client: Optional[LLMClient] = None,
) -> IngestionResult:
    """
    Store chunks and extract action items from them, one chunk at a time.

    Args:
        db: Database session
        meeting_id: Meeting the chunks belong to
        user_id: User stamped on every inserted row
        chunks: Chunks in document order
        client: LLM client (defaults to the shared instance)

    Returns:
        IngestionResult with the stored action items

    Raises:
        UpstreamHttpError: If no LLM API key is configured
        DatabaseWriteError: If the final action item insert fails
    """
    client = client or get_llm_client()
    if not client.api_key:
        raise UpstreamHttpError("LLM API key not configured")

    total = len(chunks)
    logger.info(f"Processing {total} chunks for meeting {meeting_id}")

    extracted: List[ExtractedActionItem] = []
    failed = 0

    for position, chunk in enumerate(chunks):
        logger.info(
            f"Processing chunk {position + 1}/{total} "
            f"from {chunk.source_document or 'unknown'}"
        )

        if chunk.text and chunk.source_document:
            _save_chunk(db, meeting_id, user_id, chunk, position)

        if not chunk.text or not chunk.text.strip():
            continue

        try:
            items = await extract_action_items(chunk.text, client)
        except AppException as e:
            failed += 1
            logger.error(f"Error processing chunk {position + 1}: {e.message}")
            continue

        extracted.extend(items)
        logger.info(f"Extracted {len(items)} action items from chunk {position + 1}")

    stored = _save_action_items(db, meeting_id, user_id, extracted)

    logger.info(
        f"Processing completed: {total} chunks processed, "
        f"{len(stored)} action items generated, {failed} chunks skipped"
    )

    return IngestionResult(
        chunks_processed=total,
        action_items=stored,
        failed_chunks=failed,
    )
