"""Exceptions for the Chat feature."""
from api.shared.exceptions import NotFoundError, ValidationError


class EmptyMessageError(ValidationError):
    """Raised when a message is blank after trimming."""

    def __init__(self):
        super().__init__("Message must not be empty", "empty_message")


class InvalidSessionError(NotFoundError):
    """Raised when ``send`` references a session that does not exist."""

    def __init__(self, session_id: str):
        super().__init__("Session", session_id, error_code="invalid_session")


class ConversationNotFoundError(NotFoundError):
    """Raised when reading a conversation that does not exist."""

    def __init__(self, session_id: str):
        super().__init__("Conversation", session_id, error_code="not_found")
