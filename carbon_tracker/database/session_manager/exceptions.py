"""
Database exceptions.
"""


class DatabaseNotInitialized(Exception):
    """Raised when the session manager is used before Database.init()."""
    pass
