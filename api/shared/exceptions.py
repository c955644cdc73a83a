"""Shared exceptions for the chat API."""
from typing import Any, Dict, Optional


class ChatServiceException(Exception):
    """Base exception for the chat API.

    ``error_code`` is the stable, caller-facing code; ``status_code`` is the
    HTTP status the API layer answers with.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str = "internal_server_error",
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(ChatServiceException):
    """Raised when input validation fails."""

    status_code = 400

    def __init__(
        self,
        message: str,
        error_code: str = "bad_request",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


class NotFoundError(ChatServiceException):
    """Raised when a resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str, error_code: str = "not_found"):
        message = f"{resource} with identifier '{identifier}' not found"
        super().__init__(
            message, error_code, {"resource": resource, "identifier": identifier}
        )


class DatabaseError(ChatServiceException):
    """Raised when database operations fail."""

    def __init__(
        self,
        message: str,
        error_code: str = "db_error",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)
