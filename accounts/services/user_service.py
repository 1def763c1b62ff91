"""
Account use cases: registration, login, lookup, deletion and field updates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from accounts.core.config import Settings, get_settings
from accounts.core.errors import ApiError
from accounts.core.security import hash_password_async, password_too_long, verify_dummy_async, verify_password_async
from accounts.db.session import Database
from accounts.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Username or Password is Incorrect!"
USER_NOT_FOUND = "User not found"
INCORRECT_PASSWORD = "Incorrect Password!"
PASSWORD_TOO_LONG = "Password must be at most 72 bytes long"
USERNAME_HAS_AT = "Username must not contain '@'"


@dataclass
class RegisteredUser:
    id: str
    fname: str
    lname: str
    username: str
    email: str


@dataclass
class LoginResult:
    user_id: str


@dataclass
class NoteSummary:
    id: str
    title: str
    content: str
    created_at: Optional[datetime]


@dataclass
class UserProfile:
    username: str
    email: str
    fname: str
    lname: str
    notes: list[NoteSummary] = field(default_factory=list)


@dataclass
class UserService:
    """Enforces account-level rules on top of the user store.

    Holds no per-call state; every operation re-reads the current record
    before deciding anything, and all checks run before the single write.
    """

    database: Database
    settings: Settings = field(default_factory=get_settings)

    def __post_init__(self):
        self.repository = UserRepository(self.database)

    # -------------------------------------- helpers --------------------------------------
    async def _hash(self, password: str) -> str:
        return await hash_password_async(password, self.settings.bcrypt_rounds)

    # -------------------------------------- registration --------------------------------------
    async def register(self, username: str, email: str, password: str, fname: str, lname: str) -> RegisteredUser:
        if "@" in username:
            raise ApiError.validation(USERNAME_HAS_AT)
        if password_too_long(password):
            raise ApiError.validation(PASSWORD_TOO_LONG)
        password_hash = await self._hash(password)
        try:
            user = await self.repository.create(
                username=username,
                email=email,
                password_hash=password_hash,
                fname=fname,
                lname=lname,
            )
        except IntegrityError as exc:
            logger.info("Registration rejected for %s: username or email taken", username)
            raise ApiError.conflict("Username or Email already taken") from exc
        logger.info("Registered user %s", user.id)
        return RegisteredUser(id=user.id, fname=user.fname, lname=user.lname, username=user.username, email=user.email)

    # -------------------------------------- login --------------------------------------
    async def login(self, identifier: str, password: str) -> LoginResult:
        if "@" in identifier:
            user = await self.repository.get_by_email(identifier)
        else:
            user = await self.repository.get_by_username(identifier)
        # same message and same bcrypt cost for both failures
        if not user:
            await verify_dummy_async(password, self.settings.bcrypt_rounds)
            raise ApiError.unauthorized(INVALID_CREDENTIALS)
        if not await verify_password_async(password, user.password):
            raise ApiError.unauthorized(INVALID_CREDENTIALS)
        return LoginResult(user_id=user.id)

    # -------------------------------------- lookup --------------------------------------
    async def get_user(self, user_id: str) -> UserProfile:
        if not user_id:
            raise ApiError.not_found("No User ID Found!")
        user = await self.repository.get_by_id(user_id, with_notes=True)
        if not user:
            raise ApiError.not_found(USER_NOT_FOUND)
        notes = [NoteSummary(id=n.id, title=n.title, content=n.content, created_at=n.created_at) for n in user.notes]
        return UserProfile(username=user.username, email=user.email, fname=user.fname, lname=user.lname, notes=notes)

    # -------------------------------------- delete --------------------------------------
    async def delete_user(self, requester_id: str, target_id: str) -> None:
        if requester_id != target_id:
            raise ApiError.forbidden("You don't have the required privileges to delete this user!")
        if not await self.repository.delete(target_id):
            raise ApiError.not_found(USER_NOT_FOUND)
        logger.info("Deleted user %s", target_id)

    # -------------------------------------- updates --------------------------------------
    async def update_username(self, user_id: str, new_username: str) -> None:
        if "@" in new_username:
            raise ApiError.validation(USERNAME_HAS_AT)
        current = await self.repository.get_by_id(user_id)
        if not current:
            raise ApiError.not_found(USER_NOT_FOUND)
        if new_username == current.username:
            raise ApiError.validation("New Username must be different than the Current Username!")
        if await self.repository.id_for_username(new_username):
            raise ApiError.conflict("Username already taken")
        await self._write(user_id, "username", new_username, conflict_message="Username already taken")
        logger.info("User %s changed username", user_id)

    async def update_email(self, user_id: str, new_email: str, current_password: str) -> None:
        current = await self.repository.get_by_id(user_id)
        if not current:
            raise ApiError.not_found(USER_NOT_FOUND)
        if not await verify_password_async(current_password, current.password):
            raise ApiError.unauthorized(INCORRECT_PASSWORD)
        if await self.repository.id_for_email(new_email):
            raise ApiError.conflict("Email already exists.")
        await self._write(user_id, "email", new_email, conflict_message="Email already exists.")
        logger.info("User %s changed email", user_id)

    async def update_password(self, user_id: str, new_password: str, current_password: str) -> None:
        if password_too_long(new_password):
            raise ApiError.validation(PASSWORD_TOO_LONG)
        current = await self.repository.get_by_id(user_id)
        if not current:
            raise ApiError.not_found(USER_NOT_FOUND)
        if not await verify_password_async(current_password, current.password):
            raise ApiError.unauthorized(INCORRECT_PASSWORD)
        # both values are plaintext here, no hash comparison needed
        if new_password == current_password:
            raise ApiError.validation("New Password must not match the Old Password")
        await self._write(user_id, "password", await self._hash(new_password))
        logger.info("User %s changed password", user_id)

    async def _write(self, user_id: str, column: str, value: str, *, conflict_message: str = "") -> None:
        try:
            touched = await self.repository.update_field(user_id, column, value)
        except IntegrityError as exc:
            if not conflict_message:
                raise
            raise ApiError.conflict(conflict_message) from exc
        if not touched:
            # record removed between the read and the write
            raise ApiError.not_found(USER_NOT_FOUND)
