"""
Authentication API router.

Registration, login and password changes. Every successful call returns a
fresh access token.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.core.config import Config
from carbon_tracker.core.dependencies import (
    get_app_config,
    get_current_user,
    get_db_session,
)
from carbon_tracker.core.security import create_access_token
from carbon_tracker.database.schemas import UserDBModel
from carbon_tracker.pydantic_models.user import (
    LoginRequest,
    PasswordUpdate,
    TokenResponse,
    UserCreate,
    UserPydModel,
)
from carbon_tracker.services.account_service import AccountService

router = APIRouter(
    prefix="/api/v1/auth",
    tags=["Authentication"],
)

logger = logging.getLogger(__name__)


def build_token_response(user: UserDBModel, config: Config) -> TokenResponse:
    token, expires_in = create_access_token(user.id, config.auth)
    return TokenResponse(
        access_token=token,
        expires_in=expires_in,
        user=UserPydModel.model_validate(user),
    )


@router.post(
    "/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    payload: UserCreate,
    config: Config = Depends(get_app_config),
    session: AsyncSession = Depends(get_db_session),
):
    """Create an account and log it in."""
    user = await AccountService(session).register(payload)
    await session.commit()
    return build_token_response(user, config)


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    config: Config = Depends(get_app_config),
    session: AsyncSession = Depends(get_db_session),
):
    """Exchange email and password for an access token."""
    user = await AccountService(session).authenticate(payload)
    await session.commit()
    return build_token_response(user, config)


@router.get("/me", response_model=UserPydModel)
async def me(user: UserDBModel = Depends(get_current_user)):
    """The authenticated account."""
    return user


@router.put("/update-password", response_model=TokenResponse)
async def update_password(
    payload: PasswordUpdate,
    user: UserDBModel = Depends(get_current_user),
    config: Config = Depends(get_app_config),
    session: AsyncSession = Depends(get_db_session),
):
    """Change the password after verifying the current one."""
    user = await AccountService(session).change_password(user, payload)
    await session.commit()
    return build_token_response(user, config)
