from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, status

from accounts.core.errors import ApiError
from accounts.core.responses import ApiResponse
from accounts.schemas.user import (
    LoginRead,
    LoginRequest,
    ProfileRead,
    RegisterRequest,
    UpdateEmailRequest,
    UpdatePasswordRequest,
    UpdateUsernameRequest,
    UserRead,
)
from accounts.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

REQUESTER_HEADER = "X-User-Id"


def get_user_service(request: Request) -> UserService:
    service = getattr(request.app.state, "user_service", None)
    if service is None:
        raise RuntimeError("UserService is not configured on the application")
    return service


def requester_id(x_user_id: Optional[str] = Header(default=None, alias=REQUESTER_HEADER)) -> str:
    """Identity of the caller, set by the upstream gateway after authentication."""
    value = (x_user_id or "").strip()
    if not value:
        raise ApiError.unauthorized("Authentication required")
    return value


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, service: UserService = Depends(get_user_service)):
    user = await service.register(body.username, body.email, body.password, body.fname, body.lname)
    return ApiResponse("User registered successfully", UserRead.model_validate(user).model_dump()).to_dict()


@router.post("/login")
async def login(body: LoginRequest, service: UserService = Depends(get_user_service)):
    result = await service.login(body.identifier, body.password)
    return ApiResponse("Logged in successfully", LoginRead(userId=result.user_id).model_dump()).to_dict()


@router.get("/me")
async def read_me(user_id: str = Depends(requester_id), service: UserService = Depends(get_user_service)):
    profile = await service.get_user(user_id)
    return ApiResponse("User fetched successfully", ProfileRead.model_validate(profile).model_dump()).to_dict()


@router.delete("/{target_id}")
async def delete_user(
    target_id: str,
    user_id: str = Depends(requester_id),
    service: UserService = Depends(get_user_service),
):
    await service.delete_user(user_id, target_id)
    return ApiResponse("User deleted successfully", None).to_dict()


@router.patch("/me/username")
async def update_username(
    body: UpdateUsernameRequest,
    user_id: str = Depends(requester_id),
    service: UserService = Depends(get_user_service),
):
    await service.update_username(user_id, body.new_username)
    return ApiResponse("Username updated successfully", None).to_dict()


@router.patch("/me/email")
async def update_email(
    body: UpdateEmailRequest,
    user_id: str = Depends(requester_id),
    service: UserService = Depends(get_user_service),
):
    await service.update_email(user_id, body.new_email, body.password)
    return ApiResponse("Email updated successfully", None).to_dict()


@router.patch("/me/password")
async def update_password(
    body: UpdatePasswordRequest,
    user_id: str = Depends(requester_id),
    service: UserService = Depends(get_user_service),
):
    await service.update_password(user_id, body.new_password, body.current_password)
    return ApiResponse("Password updated successfully", None).to_dict()
