"""
Factory for User models.
"""
import uuid
from datetime import datetime
from decimal import Decimal

import factory

from carbon_tracker.core.security import hash_password
from carbon_tracker.database.schemas import UserDBModel
from carbon_tracker.test.factory.base_factory import AsyncSQLAlchemyFactory
from carbon_tracker.test.factory.create_async_session import async_session

DEFAULT_PASSWORD = "password123"


class UserFactory(AsyncSQLAlchemyFactory):
    """Factory for creating User test instances."""

    class Meta:
        model = UserDBModel
        sqlalchemy_session = async_session
        sqlalchemy_session_persistence = "commit"

    id = factory.LazyFunction(uuid.uuid4)
    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    password_hash = factory.LazyFunction(lambda: hash_password(DEFAULT_PASSWORD))
    first_name = "Test"
    last_name = factory.Sequence(lambda n: f"User {n}")
    weekly_goal = Decimal("50")
    created_at = factory.LazyFunction(datetime.utcnow)
    updated_at = factory.LazyFunction(datetime.utcnow)
