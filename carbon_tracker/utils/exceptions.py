"""
Application exceptions.

Raised by repositories and services and translated into HTTP responses by the
handlers registered in create_app.
"""


class CarbonTrackerError(Exception):
    """Base class for classified application failures."""

    status_code = 500

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class ValidationFailed(CarbonTrackerError):
    """Raised when input fails structural constraints."""

    status_code = 400


class AuthenticationFailed(CarbonTrackerError):
    """Raised when credentials or tokens cannot be verified."""

    status_code = 401


class NotFound(CarbonTrackerError):
    """Raised when a record does not exist or is not owned by the caller."""

    status_code = 404


class DuplicateIdentity(CarbonTrackerError):
    """Raised when an account identifier is already taken."""

    status_code = 409


class UnknownActivity(CarbonTrackerError):
    """
    Raised when no emission factor exists for a (category, activity) pair.

    Only raised when strict activity lookup is enabled.
    """

    status_code = 400

    def __init__(self, category: str, activity: str, suggestion: str | None = None):
        self.category = category
        self.activity = activity
        self.suggestion = suggestion

        detail = f"No emission factor for activity '{activity}' in category '{category}'"
        if suggestion:
            detail += f" (did you mean '{suggestion}'?)"

        super().__init__(detail)
