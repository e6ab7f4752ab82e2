"""
Accounts and bearer tokens.

Tokens are HS256 JWTs whose ``sub`` claim is the user's UUID. Every meeting,
action item and task is scoped to that user.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from meeting_tracker.core.config import settings
from meeting_tracker.core.exceptions import BadRequestError
from meeting_tracker.models.user import User
from meeting_tracker.schemas.auth import Token

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def issue_token(user: User, lifetime: Optional[timedelta] = None) -> Token:
    """Sign a bearer token for ``user``."""
    lifetime = lifetime or timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": str(user.id),
        "username": user.username,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return Token(
        access_token=jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM),
        expires_in=int(lifetime.total_seconds()),
    )


def read_token_subject(token: str) -> Optional[UUID]:
    """
    Return the user id a token was issued for.

    None means the token is unusable: bad signature, expired, or missing
    or malformed ``sub``.
    """
    try:
        claims = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return UUID(claims["sub"])
    except (JWTError, KeyError, TypeError, ValueError):
        return None


def get_user_by_id(db: Session, user_id: UUID) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def register_user(db: Session, username: str, password: str, display_name: str) -> User:
    """
    Create an account.

    Raises:
        BadRequestError: If the username is already in use
    """
    if get_user_by_username(db, username):
        raise BadRequestError("This username is already taken")

    user = User(
        username=username,
        password_hash=hash_password(password),
        display_name=display_name,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    user = get_user_by_username(db, username)
    if user is None or not pwd_context.verify(password, user.password_hash):
        return None
    return user
