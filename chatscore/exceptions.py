"""Exceptions raised by chatscore."""

from .constants import ErrorMessage


class ChatScoreError(Exception):
    """Base class for all chatscore errors."""


class EmptyConversationError(ChatScoreError):
    """Raised when a conversation has no messages to score."""

    def __init__(self, message: str = ErrorMessage.NO_MESSAGES):
        super().__init__(message)


class InvalidTranscriptError(ChatScoreError):
    """Raised when transcript data cannot be parsed into messages."""


class StoreError(ChatScoreError):
    """Raised when the backend store rejects or fails a request.

    Attributes:
        status_code: HTTP status returned by the backend, if any.
    """

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
