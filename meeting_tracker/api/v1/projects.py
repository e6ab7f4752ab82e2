"""
Project API endpoints.

Projects group meetings; only active projects are listed.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from meeting_tracker.core.deps import get_current_user, get_db
from meeting_tracker.models.project import Project
from meeting_tracker.models.user import User
from meeting_tracker.schemas.meeting import ProjectCreate, ProjectOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=List[ProjectOut])
def list_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List active projects, newest first."""
    return (
        db.query(Project)
        .filter(Project.status == "active")
        .order_by(Project.created_at.desc())
        .all()
    )


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(
    data: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    project = Project(name=data.name, description=data.description)
    db.add(project)
    db.commit()
    db.refresh(project)

    logger.info(f"Created project {project.id} ({project.name})")
    return project
