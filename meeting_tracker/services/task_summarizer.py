"""
Consolidate a meeting's action items into merged tasks.

All action items of the meeting are listed in one prompt; the model returns
the merged set as a JSON array, which is inserted into the tasks table.
Action items themselves are left untouched.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from meeting_tracker.core.config import settings
from meeting_tracker.core.exceptions import DatabaseWriteError, MalformedModelOutputError
from meeting_tracker.models.action_item import (
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    ActionItem,
    Task,
)
from meeting_tracker.services.action_item_extractor import coerce_action_items
from meeting_tracker.services.json_parser import parse_model_json
from meeting_tracker.services.llm_client import LLMClient, get_llm_client

logger = logging.getLogger(__name__)

NO_ACTION_ITEMS_MESSAGE = "No action items found for this meeting"
SUMMARIZED_MESSAGE = "Action items successfully summarized and merged"
DEFAULT_TASK_CATEGORY = "Task"

MERGE_SYSTEM_PROMPT = (
    "You are a helpful assistant that consolidates and merges similar action items "
    "into comprehensive tasks. Always respond with valid JSON."
)

MERGE_USER_TEMPLATE = """Analyze the following action items from a meeting and merge similar or related items into consolidated tasks.
For each merged task, provide:
- action_item: A clear, comprehensive description combining related items
- priority: The highest priority among merged items (Low, Medium, High, Critical)
- category: The most appropriate category
- assigned_to: Combined assignees if multiple, or single assignee
- remarks: Summary of what was merged
- additional_info: Any relevant additional context

Action Items:
{items}

Return a JSON array of merged tasks. Merge items that are:
1. Duplicates or near-duplicates
2. Related to the same feature/component
3. Sequential steps of the same process
4. Assigned to the same person for similar work

Return only the JSON array, no additional text."""


@dataclass
class SummaryResult:
    message: str
    tasks: List[Task] = field(default_factory=list)


def format_action_item_line(item: ActionItem) -> str:
    return (
        f"- {item.action_item} "
        f"(Priority: {item.priority or DEFAULT_PRIORITY}, "
        f"Assigned: {item.assigned_to or 'Unassigned'}, "
        f"Category: {item.category or 'General'})"
    )


def build_merge_prompt(items: List[ActionItem]) -> str:
    lines = "\n".join(format_action_item_line(item) for item in items)
    return MERGE_USER_TEMPLATE.format(items=lines)


async def summarize_action_items(
    db: Session,
    meeting_id: UUID,
    user_id: UUID,
    client: Optional[LLMClient] = None,
) -> SummaryResult:
    """
    Merge the meeting's action items into tasks.

    A meeting without action items is not an error: the result carries
    NO_ACTION_ITEMS_MESSAGE and no tasks, and the model is not called.

    Raises:
        UpstreamHttpError: If the LLM request fails
        MalformedModelOutputError: If the response is not a JSON array
        DatabaseWriteError: If the task insert fails
    """
    action_items = (
        db.query(ActionItem)
        .filter(ActionItem.meeting_id == meeting_id)
        .order_by(ActionItem.created_at)
        .all()
    )

    if not action_items:
        logger.info(f"No action items to summarize for meeting {meeting_id}")
        return SummaryResult(message=NO_ACTION_ITEMS_MESSAGE)

    client = client or get_llm_client()
    logger.info(f"Summarizing {len(action_items)} action items for meeting {meeting_id}")

    content = await client.chat(
        [
            {"role": "system", "content": MERGE_SYSTEM_PROMPT},
            {"role": "user", "content": build_merge_prompt(action_items)},
        ],
        temperature=settings.LLM_SUMMARY_TEMPERATURE,
    )

    data = parse_model_json(content)
    if not isinstance(data, list):
        raise MalformedModelOutputError("Expected a JSON array of merged tasks")

    merged = coerce_action_items(data)

    tasks = [
        Task(
            meeting_id=meeting_id,
            user_id=user_id,
            action_item=item.action_item,
            priority=item.priority or DEFAULT_PRIORITY,
            category=item.category or DEFAULT_TASK_CATEGORY,
            status=DEFAULT_STATUS,
            due_date=item.due_date,
            assigned_to=item.assigned_to,
            remarks=item.remarks,
            additional_info=item.additional_info,
        )
        for item in merged
    ]

    if tasks:
        db.add_all(tasks)
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error saving merged tasks: {e}")
            raise DatabaseWriteError("Failed to save merged tasks")

        for task in tasks:
            db.refresh(task)

    logger.info(
        f"Merged {len(action_items)} action items into {len(tasks)} tasks "
        f"for meeting {meeting_id}"
    )
    return SummaryResult(message=SUMMARIZED_MESSAGE, tasks=tasks)
