"""
Action item API endpoints.

Action items are created by ingestion or manual entry and edited in place.
They are never deleted through the API.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from meeting_tracker.core.deps import get_current_user, get_db, get_owned_meeting, parse_uuid
from meeting_tracker.core.exceptions import DatabaseWriteError, NotFoundError
from meeting_tracker.models.action_item import ActionItem
from meeting_tracker.models.meeting import Meeting
from meeting_tracker.models.user import User
from meeting_tracker.schemas.action_item import (
    ActionItemCreate,
    ActionItemOut,
    ActionItemUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/action-items", tags=["action-items"])


def _get_action_item_with_access_check(
    db: Session, action_item_id: str, user: User
) -> ActionItem:
    """Get an action item whose meeting belongs to the user."""
    item = (
        db.query(ActionItem)
        .join(Meeting, ActionItem.meeting_id == Meeting.id)
        .filter(
            ActionItem.id == parse_uuid(action_item_id, "action item ID"),
            Meeting.user_id == user.id,
        )
        .first()
    )
    if not item:
        raise NotFoundError("Action item not found")
    return item


@router.get("/meeting/{meeting_id}", response_model=List[ActionItemOut])
def list_action_items(
    meeting_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List a meeting's action items, newest first."""
    meeting = get_owned_meeting(db, parse_uuid(meeting_id, "meeting ID"), current_user)

    return (
        db.query(ActionItem)
        .filter(ActionItem.meeting_id == meeting.id)
        .order_by(ActionItem.created_at.desc())
        .all()
    )


@router.post(
    "/meeting/{meeting_id}",
    response_model=ActionItemOut,
    status_code=status.HTTP_201_CREATED,
)
def create_action_item(
    meeting_id: str,
    data: ActionItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add an action item by hand."""
    meeting = get_owned_meeting(db, parse_uuid(meeting_id, "meeting ID"), current_user)

    item = ActionItem(
        meeting_id=meeting.id,
        user_id=current_user.id,
        **data.model_dump(),
    )
    db.add(item)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating action item in meeting {meeting_id}: {e}")
        raise DatabaseWriteError("Failed to save action item")
    db.refresh(item)

    logger.info(f"Created action item {item.id} in meeting {meeting.id}")
    return item


@router.patch("/{action_item_id}", response_model=ActionItemOut)
def update_action_item(
    action_item_id: str,
    data: ActionItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Save an edited row.

    Only the fields present in the body are changed.
    """
    item = _get_action_item_with_access_check(db, action_item_id, current_user)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(item, field, value)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating action item {action_item_id}: {e}")
        raise DatabaseWriteError("Failed to update action item")
    db.refresh(item)
    return item
