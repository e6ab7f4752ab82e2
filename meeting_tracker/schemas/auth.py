import re
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

PASSWORD_RULES = [
    (r"[a-z]", "Password must contain a lowercase letter"),
    (r"[A-Z]", "Password must contain an uppercase letter"),
    (r"\d", "Password must contain a digit"),
    (r"[^A-Za-z0-9]", "Password must contain a special character (!@#$%^&* etc.)"),
]
COMMON_PASSWORDS = {"password", "12345678", "qwerty123", "admin123"}


class UserRegister(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9_-]+$")
    password: str = Field(..., min_length=8, max_length=128)
    display_name: str = Field(..., min_length=1, max_length=100)

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, v: str) -> str:
        for pattern, message in PASSWORD_RULES:
            if not re.search(pattern, v):
                raise ValueError(message)
        if v.lower() in COMMON_PASSWORDS:
            raise ValueError("This password is too common")
        return v


class UserLogin(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class UserOut(BaseModel):
    id: UUID
    username: str
    display_name: str

    class Config:
        from_attributes = True


class UserWithToken(BaseModel):
    """Register/login response: the account plus a bearer token."""

    user: UserOut
    token: Token
