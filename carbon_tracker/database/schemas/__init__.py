"""
SQLAlchemy database models (schemas).
"""
from carbon_tracker.database.schemas.emission import EmissionDBModel
from carbon_tracker.database.schemas.user import UserDBModel

__all__ = [
    "EmissionDBModel",
    "UserDBModel",
]
