"""
API Module - Front-end interface.

Exposes the engine to a presentation layer:
1. Create a run
2. Send intents (reaction, end turn, room change, reset)
3. Receive a serializable snapshot after each one

All state is session-scoped and in memory.
"""

from .schemas import (
    # Responses
    GameSnapshot,
    ErrorResponse,
    SessionListResponse,
    EndSessionResponse,
    # Shared
    ResourcesInfo,
    LocksInfo,
    FlagsInfo,
    DerivedInfo,
    RoomView,
    # Enums
    ErrorCode,
    RunStatusValue,
    snapshot_from_state,
)
from .service import GameService

__all__ = [
    # Responses
    "GameSnapshot",
    "ErrorResponse",
    "SessionListResponse",
    "EndSessionResponse",
    # Shared
    "ResourcesInfo",
    "LocksInfo",
    "FlagsInfo",
    "DerivedInfo",
    "RoomView",
    # Enums
    "ErrorCode",
    "RunStatusValue",
    "snapshot_from_state",
    # Service
    "GameService",
]
