"""
Account service.

Registration, login, password change and profile edits.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.core.security import hash_password, verify_password
from carbon_tracker.database.repositories import UserRepository
from carbon_tracker.database.schemas import UserDBModel
from carbon_tracker.pydantic_models.user import (
    LoginRequest,
    PasswordUpdate,
    ProfileUpdate,
    UserCreate,
)
from carbon_tracker.utils.exceptions import AuthenticationFailed, DuplicateIdentity

logger = logging.getLogger(__name__)


class AccountService:
    """Account lifecycle operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = UserRepository(session)

    async def register(self, payload: UserCreate) -> UserDBModel:
        """
        Create an account.

        Raises:
            DuplicateIdentity: If the username or email is already registered
        """
        taken = await self.repository.find_taken_identity(payload.username, payload.email)
        if taken:
            raise DuplicateIdentity(f"{taken} already exists")

        try:
            user = await self.repository.create(
                username=payload.username,
                email=payload.email,
                password_hash=hash_password(payload.password),
                first_name=payload.first_name,
                last_name=payload.last_name,
            )
        except IntegrityError:
            # Lost a race with a concurrent registration
            await self.session.rollback()
            raise DuplicateIdentity("username or email already exists")

        user = await self.repository.touch_last_active(user)
        logger.info(f"Registered user {user.id} ({user.username})")
        return user

    async def authenticate(self, payload: LoginRequest) -> UserDBModel:
        """
        Verify email and password.

        Raises:
            AuthenticationFailed: If the email is unknown or the password is wrong
        """
        user = await self.repository.get_by_email(payload.email)
        if user is None or not verify_password(payload.password, user.password_hash):
            logger.info("Failed login attempt")
            raise AuthenticationFailed("Incorrect email or password")

        return await self.repository.touch_last_active(user)

    async def change_password(
        self, user: UserDBModel, payload: PasswordUpdate
    ) -> UserDBModel:
        """
        Raises:
            AuthenticationFailed: If the current password does not match
        """
        if not verify_password(payload.current_password, user.password_hash):
            raise AuthenticationFailed("Your current password is wrong")

        user = await self.repository.apply_changes(
            user, password_hash=hash_password(payload.new_password)
        )
        logger.info(f"Password changed for user {user.id}")
        return user

    async def update_profile(
        self, user: UserDBModel, payload: ProfileUpdate
    ) -> UserDBModel:
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        return await self.repository.apply_changes(user, **changes)
