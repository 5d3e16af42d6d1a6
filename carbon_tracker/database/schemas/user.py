"""
User account SQLAlchemy model.
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Numeric, String, Uuid

from carbon_tracker.database import Base
from carbon_tracker.utils.constants import DEFAULT_WEEKLY_GOAL


class UserDBModel(Base):
    """
    Registered account.

    Only the password hash is stored; the plaintext never reaches this model.
    """

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    username = Column(
        String(30),
        nullable=False,
        unique=True,
        comment="Public account name",
    )

    email = Column(
        String(255),
        nullable=False,
        unique=True,
        comment="Login identifier, stored lowercase",
    )

    password_hash = Column(String(255), nullable=False)

    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)

    weekly_goal = Column(
        Numeric(10, 2),
        nullable=False,
        default=DEFAULT_WEEKLY_GOAL,
        comment="Weekly CO2e budget in kg",
    )

    last_active = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def __repr__(self):
        return f"<UserDBModel: {self.username} <{self.email}>>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
