"""
Meeting API endpoints.

Meetings are owned by the user who created them; another user's meeting
answers 404 exactly like a missing one.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from meeting_tracker.core.deps import get_current_user, get_db, get_owned_meeting, parse_uuid
from meeting_tracker.core.exceptions import DatabaseWriteError, NotFoundError
from meeting_tracker.models.meeting import Meeting
from meeting_tracker.models.project import Project
from meeting_tracker.models.user import User
from meeting_tracker.schemas.meeting import MeetingCreate, MeetingOut, MeetingUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/meetings", tags=["meetings"])


def _check_project(db: Session, project_id) -> None:
    if project_id is not None and not db.query(Project).filter(Project.id == project_id).first():
        raise NotFoundError("Project not found")


@router.get("", response_model=List[MeetingOut])
def list_meetings(
    project_id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    List the user's meetings, newest meeting date first.

    - **project_id**: Only meetings of this project
    """
    query = db.query(Meeting).filter(Meeting.user_id == current_user.id)
    if project_id:
        query = query.filter(Meeting.project_id == parse_uuid(project_id, "project ID"))

    return query.order_by(Meeting.meeting_date.desc(), Meeting.created_at.desc()).all()


@router.post("", response_model=MeetingOut, status_code=status.HTTP_201_CREATED)
def create_meeting(
    data: MeetingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _check_project(db, data.project_id)

    meeting = Meeting(user_id=current_user.id, **data.model_dump())
    db.add(meeting)
    db.commit()
    db.refresh(meeting)

    logger.info(f"Created meeting {meeting.id} for user {current_user.id}")
    return meeting


@router.get("/{meeting_id}", response_model=MeetingOut)
def get_meeting(
    meeting_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_owned_meeting(db, parse_uuid(meeting_id, "meeting ID"), current_user)


@router.patch("/{meeting_id}", response_model=MeetingOut)
def update_meeting(
    meeting_id: str,
    data: MeetingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update meeting fields; omitted fields are left as they are."""
    meeting = get_owned_meeting(db, parse_uuid(meeting_id, "meeting ID"), current_user)

    changes = data.model_dump(exclude_unset=True)
    if "project_id" in changes:
        _check_project(db, changes["project_id"])

    for field, value in changes.items():
        setattr(meeting, field, value)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating meeting {meeting_id}: {e}")
        raise DatabaseWriteError("Failed to update meeting")
    db.refresh(meeting)
    return meeting
