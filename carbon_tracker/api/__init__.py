"""
API routers module.
"""
from carbon_tracker.api.analytics import router as analytics_router
from carbon_tracker.api.auth import router as auth_router
from carbon_tracker.api.emissions import router as emissions_router
from carbon_tracker.api.users import router as users_router

__all__ = [
    "analytics_router",
    "auth_router",
    "emissions_router",
    "users_router",
]
