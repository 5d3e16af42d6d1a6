"""
Database repositories for data access layer.

Provides clean abstraction over database operations following repository pattern.
"""
from carbon_tracker.database.repositories.base import BaseRepository
from carbon_tracker.database.repositories.emission import EmissionRepository
from carbon_tracker.database.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "EmissionRepository",
    "UserRepository",
]
