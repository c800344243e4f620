"""
API Module - HTTP interface for the scheduler client.

The client:
1. Searches games and picks one (or several for a flexible table)
2. Creates a table and shares its link
3. Friends open the link, join or leave

All state lives in the session store and expires after one day.
"""

from .schemas import (
    # Requests
    SingleTableRequest,
    FlexibleTableRequest,
    CreateTableRequest,
    GameSelection,
    ParticipantRequest,
    # Responses
    CreateTableResponse,
    TableResponse,
    GameInfoResponse,
    GameCandidateResponse,
    ErrorResponse,
    HealthResponse,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "SingleTableRequest",
    "FlexibleTableRequest",
    "CreateTableRequest",
    "GameSelection",
    "ParticipantRequest",
    # Responses
    "CreateTableResponse",
    "TableResponse",
    "GameInfoResponse",
    "GameCandidateResponse",
    "ErrorResponse",
    "HealthResponse",
    # Service
    "APIService",
    "create_app",
]
