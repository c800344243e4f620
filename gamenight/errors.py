"""Domain errors with codes and user-safe messages."""

from __future__ import annotations
from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    TABLE_FULL = "TABLE_FULL"
    MISSING_NAME = "MISSING_NAME"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class GameNightError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(GameNightError):
    """Raised for bad or missing input, including the scheduling window."""
    code = ErrorCode.VALIDATION_ERROR


class SessionNotFoundError(GameNightError):
    """Raised when a session does not exist or has expired."""
    code = ErrorCode.SESSION_NOT_FOUND

    def __init__(self, session_id: str):
        super().__init__("Table not found")
        self.session_id = session_id


class GameNotFoundError(GameNightError):
    """Raised when BoardGameGeek has no usable record for an id."""
    code = ErrorCode.GAME_NOT_FOUND

    def __init__(self, game_id: str):
        super().__init__("Game not found")
        self.game_id = game_id


class CapacityExceededError(GameNightError):
    """Raised when joining a table that is already full."""
    code = ErrorCode.TABLE_FULL

    def __init__(self, session_id: str):
        super().__init__("Table full")
        self.session_id = session_id


class MissingNameError(GameNightError):
    """Raised when joining without a display name."""
    code = ErrorCode.MISSING_NAME

    def __init__(self):
        super().__init__("Missing name")


class UpstreamError(GameNightError):
    """Raised when BoardGameGeek is unreachable or returns unparsable data.

    The message is for logs only; the API replaces it with a generic one.
    """
    code = ErrorCode.UPSTREAM_ERROR
