"""
Versioned Business Requirements Documents.

Every save inserts a new row with version = latest + 1 (1 for the first),
so earlier versions are never modified. Regeneration hands the current
document and the meeting's action items to the model and stores the whole
reply as the next version.
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from meeting_tracker.core.config import settings
from meeting_tracker.core.exceptions import (
    DatabaseWriteError,
    MalformedModelOutputError,
    NoActionItemsError,
)
from meeting_tracker.models.action_item import ActionItem
from meeting_tracker.models.business_requirement import BusinessRequirement
from meeting_tracker.services.brd_template import build_default_template
from meeting_tracker.services.llm_client import LLMClient, get_llm_client

logger = logging.getLogger(__name__)

REQUIREMENTS_SYSTEM_PROMPT = """You are a business analyst expert. Your task is to generate comprehensive business requirements based on action items from meetings and existing business requirements.

Generate a complete Business Requirements Document that includes:
1. Updated project overview based on action items
2. Refined business objectives and success metrics
3. Enhanced functional and non-functional requirements
4. Updated scope and boundaries
5. Risk assessment updates
6. Implementation timeline adjustments
7. All other standard BRD sections

Make sure to:
- Incorporate insights from the action items into relevant sections
- Maintain professional BRD formatting
- Include specific, measurable requirements
- Update dates and version numbers appropriately
- Ensure consistency between action items and requirements"""

REQUIREMENTS_USER_TEMPLATE = """Current Business Requirements:
{current}

Action Items from Meeting:
{items}

Please generate an updated Business Requirements Document that incorporates these action items into a comprehensive BRD structure. Make sure to:
1. Update the project overview based on the action items context
2. Derive functional requirements from the action items
3. Set appropriate priorities based on action item priorities
4. Include timeline considerations based on due dates
5. Incorporate assigned responsibilities into the requirements
6. Update risk assessments based on action item categories and remarks
7. Ensure all action items are properly reflected in the relevant BRD sections"""


def get_latest(db: Session, meeting_id: UUID) -> Optional[BusinessRequirement]:
    return (
        db.query(BusinessRequirement)
        .filter(BusinessRequirement.meeting_id == meeting_id)
        .order_by(BusinessRequirement.version.desc())
        .first()
    )


def list_versions(db: Session, meeting_id: UUID) -> List[BusinessRequirement]:
    """All stored versions, newest first."""
    return (
        db.query(BusinessRequirement)
        .filter(BusinessRequirement.meeting_id == meeting_id)
        .order_by(BusinessRequirement.version.desc())
        .all()
    )


def get_version(
    db: Session, meeting_id: UUID, version: int
) -> Optional[BusinessRequirement]:
    return (
        db.query(BusinessRequirement)
        .filter(
            BusinessRequirement.meeting_id == meeting_id,
            BusinessRequirement.version == version,
        )
        .first()
    )


def next_version(db: Session, meeting_id: UUID) -> int:
    latest = (
        db.query(func.max(BusinessRequirement.version))
        .filter(BusinessRequirement.meeting_id == meeting_id)
        .scalar()
    )
    return (latest or 0) + 1


def save_business_requirements(
    db: Session, meeting_id: UUID, content: str
) -> BusinessRequirement:
    """
    Store ``content`` as the next version of the meeting's document.

    Raises:
        DatabaseWriteError: If the insert fails (including a version clash
            with a concurrent save)
    """
    version = next_version(db, meeting_id)
    requirement = BusinessRequirement(
        meeting_id=meeting_id,
        content=content,
        version=version,
    )
    db.add(requirement)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error saving business requirements v{version}: {e}")
        raise DatabaseWriteError("Failed to save business requirements")

    db.refresh(requirement)
    logger.info(f"Saved business requirements version {version} for meeting {meeting_id}")
    return requirement


def format_action_item_block(index: int, item: ActionItem) -> str:
    due = item.due_date.isoformat() if item.due_date else "Not set"
    return (
        f"{index}. {item.action_item}\n"
        f"   - Priority: {item.priority or 'Medium'}\n"
        f"   - Status: {item.status or 'Not Started'}\n"
        f"   - Category: {item.category or 'General'}\n"
        f"   - Assigned To: {item.assigned_to or 'Unassigned'}\n"
        f"   - Due Date: {due}\n"
        f"   - Remarks: {item.remarks or ''}\n"
        f"   - Additional Info: {item.additional_info or ''}"
    )


def build_requirements_prompt(current: str, items: List[ActionItem]) -> str:
    blocks = "\n\n".join(
        format_action_item_block(i, item) for i, item in enumerate(items, start=1)
    )
    return REQUIREMENTS_USER_TEMPLATE.format(current=current, items=blocks)


async def regenerate_business_requirements(
    db: Session,
    meeting_id: UUID,
    client: Optional[LLMClient] = None,
) -> BusinessRequirement:
    """
    Rewrite the meeting's document from its action items.

    Raises:
        NoActionItemsError: If the meeting has no action items (nothing is
            written and the model is not called)
        UpstreamHttpError: If the LLM request fails
        MalformedModelOutputError: If the model returns an empty document
        DatabaseWriteError: If the insert fails
    """
    action_items = (
        db.query(ActionItem)
        .filter(ActionItem.meeting_id == meeting_id)
        .order_by(ActionItem.created_at.desc())
        .all()
    )
    if not action_items:
        raise NoActionItemsError()

    latest = get_latest(db, meeting_id)
    current = latest.content if latest else build_default_template()
    logger.info(
        f"Regenerating business requirements for meeting {meeting_id} from "
        f"{'version ' + str(latest.version) if latest else 'the default template'} "
        f"and {len(action_items)} action items"
    )

    client = client or get_llm_client()
    content = await client.chat(
        [
            {"role": "system", "content": REQUIREMENTS_SYSTEM_PROMPT},
            {"role": "user", "content": build_requirements_prompt(current, action_items)},
        ],
        temperature=settings.LLM_REQUIREMENTS_TEMPERATURE,
    )

    if not content or not content.strip():
        raise MalformedModelOutputError("Model returned an empty document")

    return save_business_requirements(db, meeting_id, content)
