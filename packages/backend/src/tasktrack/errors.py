"""Error hierarchy — every failure the service can report to a client.

Each error carries the HTTP status it maps to and a user-facing message.
The app-level handler in main.py renders them as {"error": message};
nothing else about the exception reaches the client.
"""

from typing import Optional


class TaskTrackError(Exception):
    """Base exception for all tasktrack errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)

    def to_response(self) -> dict:
        return {"error": self.message}


# ─── 4xx ─────────────────────────────────────────────────


class Unauthenticated(TaskTrackError):
    """No bearer token, or the token did not verify."""

    status_code = 401
    default_message = "Unauthorized"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class InvalidCredentials(TaskTrackError):
    """Login failed. Same message for unknown email and wrong password."""

    status_code = 401
    default_message = "Invalid email or password"


class Forbidden(TaskTrackError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(TaskTrackError):
    status_code = 404
    default_message = "Not found"


class ValidationError(TaskTrackError):
    status_code = 400
    default_message = "Invalid request"


class InvalidReference(ValidationError):
    """A referenced entity does not exist or belongs to someone else."""

    default_message = "Invalid project ID"


class DuplicateEmail(TaskTrackError):
    status_code = 400
    default_message = "Email already registered"


# ─── 5xx ─────────────────────────────────────────────────


class UnexpectedError(TaskTrackError):
    """Hashing, signing, or anything else that failed outside the domain rules."""

    status_code = 500
