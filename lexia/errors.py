# lexia/errors.py
"""
Error taxonomy shared by the service layer and every surface.

Each error carries the HTTP status it maps to. The HTTP API renders
{"error": message, **extra()}; the MCP server wraps the message in a
ToolError; the CLI prints it.
"""

from typing import Any


class LexiaError(Exception):
    """Base class for expected, user-facing failures."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def extra(self) -> dict[str, Any]:
        """Additional response body fields."""
        return {}

    def headers(self) -> dict[str, str]:
        """Additional response headers."""
        return {}


class AuthenticationError(LexiaError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class InvalidRequestError(LexiaError):
    """Missing or malformed input (400)."""

    status_code = 400

    def __init__(self, message: str, errors: dict[str, str] | None = None):
        super().__init__(message)
        self.errors = errors

    def extra(self) -> dict[str, Any]:
        return {"errors": self.errors} if self.errors else {}


class CreditsExhaustedError(LexiaError):
    status_code = 402

    def __init__(self, remaining: float, limit: float):
        super().__init__("Credits exhausted for this period. Usage resets next month.")
        self.remaining = remaining
        self.limit = limit

    def extra(self) -> dict[str, Any]:
        return {"remaining": self.remaining, "limit": self.limit}


class PermissionDeniedError(LexiaError):
    status_code = 403

    def __init__(self, message: str = "Sin acceso al caso"):
        super().__init__(message)


class NotFoundError(LexiaError):
    status_code = 404


class UnprocessableCaseError(LexiaError):
    """The case exists but lacks the data the analysis needs (422)."""

    status_code = 422


class RateLimitExceededError(LexiaError):
    status_code = 429

    def __init__(
        self, retry_after: int = 60, message: str = "Too many requests. Please try again later."
    ):
        super().__init__(message)
        self.retry_after = retry_after

    def headers(self) -> dict[str, str]:
        return {"Retry-After": str(self.retry_after)}


class AnalysisError(LexiaError):
    """A pipeline stage failed; nothing was persisted."""

    status_code = 500

    def __init__(self, stage: str, message: str):
        super().__init__(f"Analysis failed at stage '{stage}': {message}")
        self.stage = stage


class PersistenceError(LexiaError):
    status_code = 500
