"""
Common dependencies for FastAPI endpoints.
"""
from typing import Generator, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from meeting_tracker.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from meeting_tracker.db.session import SessionLocal
from meeting_tracker.models.meeting import Meeting
from meeting_tracker.models.user import User
from meeting_tracker.services.auth import get_user_by_id, read_token_subject

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """
    Get the current authenticated user from JWT token.

    Raises:
        HTTPException: 401 if the token is missing, invalid or the user is gone
    """
    user_id = read_token_subject(credentials.credentials) if credentials else None
    user = get_user_by_id(db, user_id) if user_id else None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def parse_uuid(value: str, label: str = "ID") -> UUID:
    """Parse a path parameter as UUID, raising 400 on malformed input."""
    try:
        return UUID(value)
    except (ValueError, TypeError):
        raise BadRequestError(f"Invalid {label}")


def get_owned_meeting(db: Session, meeting_id: UUID, user: User) -> Meeting:
    """Load a meeting owned by the user; other users' meetings look absent."""
    meeting = db.query(Meeting).filter(
        Meeting.id == meeting_id,
        Meeting.user_id == user.id,
    ).first()

    if not meeting:
        raise NotFoundError("Meeting not found")

    return meeting


def check_requested_user(requested_user_id: Optional[UUID], user: User) -> UUID:
    """Callers may name a userId in the body; it must be their own."""
    if requested_user_id is not None and requested_user_id != user.id:
        raise ForbiddenError("userId does not match the authenticated user")
    return user.id
