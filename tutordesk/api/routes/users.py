# tutordesk/api/routes/users.py
from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from tutordesk.api.dependencies.current_user import get_current_user
from tutordesk.db.session import get_db
from tutordesk.models.user import User
from tutordesk.schemas.user import UserCreate, UserRead, UserSettingsPayload
from tutordesk.services import user_service

router = APIRouter(tags=["Users"])


@router.post(
    "/users",
    response_model=UserRead,
    status_code=HTTPStatus.CREATED,
    summary="Register a tutor account",
    responses={400: {"description": "A user with this email already exists."}},
)
async def register_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db),
) -> UserRead:
    try:
        user = await user_service.create_user(db, payload)
    except ValueError as exc:
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=str(exc))
    return UserRead.model_validate(user)


@router.get("/users/me", response_model=UserRead, summary="Current tutor")
async def read_me(user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(user)


@router.get(
    "/settings",
    response_model=UserSettingsPayload,
    summary="Subject list and subject colours",
    description="Returns the defaults until the tutor saves their own preferences.",
)
async def read_settings(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> UserSettingsPayload:
    return await user_service.get_settings_for(db, user.id)


@router.put(
    "/settings",
    response_model=UserSettingsPayload,
    summary="Replace subject list and subject colours",
)
async def write_settings(
    payload: UserSettingsPayload,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> UserSettingsPayload:
    return await user_service.save_settings_for(db, user.id, payload)
