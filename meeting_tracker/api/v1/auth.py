"""
Account endpoints: register, login and the current user.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from meeting_tracker.core.deps import get_current_user, get_db
from meeting_tracker.models.user import User
from meeting_tracker.schemas.auth import UserLogin, UserOut, UserRegister, UserWithToken
from meeting_tracker.services.auth import authenticate_user, issue_token, register_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_for(user: User) -> UserWithToken:
    return UserWithToken(user=UserOut.model_validate(user), token=issue_token(user))


@router.post("/register", response_model=UserWithToken, status_code=status.HTTP_201_CREATED)
def register(data: UserRegister, db: Session = Depends(get_db)):
    """
    Create an account and sign the new user in.

    The username must be unused; the password must mix upper and lower case,
    digits and a special character.
    """
    user = register_user(db, data.username, data.password, data.display_name)
    logger.info(f"Registered user {user.username}")
    return _session_for(user)


@router.post("/login", response_model=UserWithToken)
def login(data: UserLogin, db: Session = Depends(get_db)):
    user = authenticate_user(db, data.username, data.password)
    if user is None:
        logger.warning(f"Failed login attempt for {data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _session_for(user)


@router.get("/me", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    return UserOut.model_validate(current_user)
