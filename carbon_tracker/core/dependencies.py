"""
FastAPI dependencies.
"""
from typing import AsyncGenerator
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.core.config import Config
from carbon_tracker.core.security import decode_access_token
from carbon_tracker.database.repositories import UserRepository
from carbon_tracker.database.schemas import UserDBModel
from carbon_tracker.database.session_manager.db_session import Database
from carbon_tracker.utils.exceptions import AuthenticationFailed

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for the request; rolled back if the handler raises."""
    async with Database() as session:
        yield session


def get_app_config(request: Request) -> Config:
    return request.app.state.config


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    config: Config = Depends(get_app_config),
    session: AsyncSession = Depends(get_db_session),
) -> UserDBModel:
    """
    Resolve the authenticated user from the bearer token.

    Raises:
        AuthenticationFailed: If the token is missing or invalid, or the user
            no longer exists
    """
    if credentials is None:
        raise AuthenticationFailed("You are not logged in. Please log in to get access.")

    user_id = decode_access_token(credentials.credentials, config.auth)
    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise AuthenticationFailed("The user belonging to this token no longer exists.")
    return user


async def get_current_user_id(
    user: UserDBModel = Depends(get_current_user),
) -> UUID:
    return user.id
