"""
Business Requirements Document API endpoints.

Every save, manual or generated, creates a new version.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from meeting_tracker.core.deps import get_current_user, get_db, get_owned_meeting, parse_uuid
from meeting_tracker.core.exceptions import NotFoundError
from meeting_tracker.models.user import User
from meeting_tracker.schemas.business_requirement import (
    BusinessRequirementCreate,
    BusinessRequirementLatestOut,
    BusinessRequirementOut,
    RegenerateRequest,
    RegenerateResponse,
)
from meeting_tracker.services import business_requirements as brd_service
from meeting_tracker.services.brd_template import build_default_template

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/business-requirements", tags=["business-requirements"])


@router.post("/regenerate", response_model=RegenerateResponse)
async def regenerate(
    data: RegenerateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Rewrite the document from the meeting's action items.

    Returns 400 when the meeting has no action items.
    """
    meeting = get_owned_meeting(db, data.meeting_id, current_user)

    requirement = await brd_service.regenerate_business_requirements(db, meeting.id)

    return RegenerateResponse(
        success=True,
        content=requirement.content,
        version=requirement.version,
        id=requirement.id,
    )


@router.get("/meeting/{meeting_id}", response_model=List[BusinessRequirementOut])
def list_versions(
    meeting_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """All stored versions, newest first."""
    meeting = get_owned_meeting(db, parse_uuid(meeting_id, "meeting ID"), current_user)
    return brd_service.list_versions(db, meeting.id)


@router.get("/meeting/{meeting_id}/latest", response_model=BusinessRequirementLatestOut)
def get_latest(
    meeting_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Latest version, or the default template when nothing is stored yet."""
    meeting = get_owned_meeting(db, parse_uuid(meeting_id, "meeting ID"), current_user)

    latest = brd_service.get_latest(db, meeting.id)
    if latest is None:
        return BusinessRequirementLatestOut(
            meeting_id=meeting.id,
            content=build_default_template(),
            version=0,
            is_default=True,
        )

    return BusinessRequirementLatestOut(
        id=latest.id,
        meeting_id=latest.meeting_id,
        content=latest.content,
        version=latest.version,
        created_at=latest.created_at,
    )


@router.get("/meeting/{meeting_id}/versions/{version}", response_model=BusinessRequirementOut)
def get_version(
    meeting_id: str,
    version: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    meeting = get_owned_meeting(db, parse_uuid(meeting_id, "meeting ID"), current_user)

    requirement = brd_service.get_version(db, meeting.id, version)
    if requirement is None:
        raise NotFoundError(f"Version {version} not found")
    return requirement


@router.post(
    "/meeting/{meeting_id}",
    response_model=BusinessRequirementOut,
    status_code=status.HTTP_201_CREATED,
)
def save_version(
    meeting_id: str,
    data: BusinessRequirementCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Save an edited document as the next version."""
    meeting = get_owned_meeting(db, parse_uuid(meeting_id, "meeting ID"), current_user)
    return brd_service.save_business_requirements(db, meeting.id, data.content)
