import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from format_api.core.database import get_db_session
from format_api.schemas.user_schema import (
    ChangePasswordRequest,
    UserAuthResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
    UserUpdateRequest,
)
from format_api.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["User"])


@router.post(
    "/register",
    response_model=UserAuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
)
async def register(
    req: UserRegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserAuthResponse:
    """
    Create a user account; login and email must both be unused
    """
    user = await UserService(db).register(
        login=req.login,
        email=req.email,
        password=req.password,
        phone=req.phone,
    )
    return UserAuthResponse(
        message="Registration successful",
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=UserAuthResponse, summary="Log in")
async def login(
    req: UserLoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserAuthResponse:
    user = await UserService(db).login(req.login, req.password)
    return UserAuthResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
    )


@router.get("/{user_id}", response_model=UserResponse, summary="Get a user")
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await UserService(db).get_user(user_id)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse, summary="Update a user")
async def update_user(
    user_id: int,
    req: UserUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """
    Update e-mail, phone, avatar or password; omitted fields are kept
    """
    user = await UserService(db).update_user(user_id, **req.model_dump(exclude_unset=True))
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> None:
    """
    Comments, likes and subscriptions are removed; posts stay without an author
    """
    await UserService(db).delete_user(user_id)


@router.post(
    "/{user_id}/change-password",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Change a user's password",
)
async def change_password(
    user_id: int,
    req: ChangePasswordRequest,
    db: AsyncSession = Depends(get_db_session),
) -> None:
    await UserService(db).change_password(user_id, req.old_password, req.new_password)
