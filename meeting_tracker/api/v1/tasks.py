"""
Task API endpoints.

Tasks are produced by merging a meeting's action items and can then be
edited independently of them.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from meeting_tracker.core.deps import (
    check_requested_user,
    get_current_user,
    get_db,
    get_owned_meeting,
    parse_uuid,
)
from meeting_tracker.core.exceptions import DatabaseWriteError, NotFoundError
from meeting_tracker.models.action_item import Task
from meeting_tracker.models.meeting import Meeting
from meeting_tracker.models.user import User
from meeting_tracker.schemas.action_item import ActionItemUpdate, TaskOut
from meeting_tracker.schemas.processing import SummarizeRequest, SummarizeResponse
from meeting_tracker.services.task_summarizer import summarize_action_items

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("/summarize", response_model=SummarizeResponse)
async def summarize_tasks(
    data: SummarizeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Merge the meeting's action items into consolidated tasks.

    Each call appends a new set of tasks; earlier tasks are kept.
    """
    user_id = check_requested_user(data.user_id, current_user)
    meeting = get_owned_meeting(db, data.meeting_id, current_user)

    result = await summarize_action_items(db, meeting.id, user_id)

    return SummarizeResponse(
        message=result.message,
        tasks_created=len(result.tasks),
        tasks=[TaskOut.model_validate(task) for task in result.tasks],
    )


@router.get("/meeting/{meeting_id}", response_model=List[TaskOut])
def list_tasks(
    meeting_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    meeting = get_owned_meeting(db, parse_uuid(meeting_id, "meeting ID"), current_user)

    return (
        db.query(Task)
        .filter(Task.meeting_id == meeting.id)
        .order_by(Task.created_at.desc())
        .all()
    )


@router.patch("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: str,
    data: ActionItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = (
        db.query(Task)
        .join(Meeting, Task.meeting_id == Meeting.id)
        .filter(
            Task.id == parse_uuid(task_id, "task ID"),
            Meeting.user_id == current_user.id,
        )
        .first()
    )
    if not task:
        raise NotFoundError("Task not found")

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(task, field, value)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating task {task_id}: {e}")
        raise DatabaseWriteError("Failed to update task")
    db.refresh(task)
    return task
