"""
User profile API router.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.core.dependencies import get_current_user, get_db_session
from carbon_tracker.database.schemas import UserDBModel
from carbon_tracker.pydantic_models.user import ProfileUpdate, UserPydModel
from carbon_tracker.services.account_service import AccountService

router = APIRouter(
    prefix="/api/v1/users",
    tags=["Users"],
)

logger = logging.getLogger(__name__)


@router.get("/profile", response_model=UserPydModel)
async def get_profile(user: UserDBModel = Depends(get_current_user)):
    """Get the caller's profile."""
    return user


@router.patch("/profile", response_model=UserPydModel)
async def update_profile(
    payload: ProfileUpdate,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Update name and weekly goal."""
    logger.info(f"Updating profile for user {user.id}")
    user = await AccountService(session).update_profile(user, payload)
    await session.commit()
    return user
