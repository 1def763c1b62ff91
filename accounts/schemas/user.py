"""
Pydantic models for user requests and responses.

Request bodies reject empty strings so the service only ever receives
validated, non-empty input. Response models never carry the password hash.
"""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, Field

from accounts.core.security import MAX_PASSWORD_BYTES, password_too_long

USERNAME_PATTERN = r"^[^@]+$"


def _check_password_bytes(value: str) -> str:
    if password_too_long(value):
        raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded")
    return value


NewPassword = Annotated[str, AfterValidator(_check_password_bytes)]


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, pattern=USERNAME_PATTERN, examples=["alice"])
    email: str = Field(..., min_length=3, pattern=r".+@.+", examples=["alice@example.com"])
    password: NewPassword = Field(..., min_length=1)
    fname: str = Field(..., min_length=1, examples=["Alice"])
    lname: str = Field(..., min_length=1, examples=["Anderson"])


class LoginRequest(BaseModel):
    identifier: str = Field(..., min_length=1, description="Username or e-mail address")
    password: str = Field(..., min_length=1)


class UpdateUsernameRequest(BaseModel):
    new_username: str = Field(..., min_length=1, pattern=USERNAME_PATTERN, alias="newUsername")

    model_config = {"populate_by_name": True}


class UpdateEmailRequest(BaseModel):
    new_email: str = Field(..., min_length=3, pattern=r".+@.+", alias="newEmail")
    password: str = Field(..., min_length=1)

    model_config = {"populate_by_name": True}


class UpdatePasswordRequest(BaseModel):
    new_password: NewPassword = Field(..., min_length=1, alias="newPassword")
    current_password: str = Field(..., min_length=1, alias="currentPassword")

    model_config = {"populate_by_name": True}


class UserRead(BaseModel):
    id: str
    username: str
    email: str
    fname: str
    lname: str

    model_config = {"from_attributes": True}


class NoteRead(BaseModel):
    id: str
    title: str
    content: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProfileRead(BaseModel):
    username: str
    email: str
    fname: str
    lname: str
    notes: List[NoteRead] = []

    model_config = {"from_attributes": True}


class LoginRead(BaseModel):
    userId: str

