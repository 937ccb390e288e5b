"""
Engine errors.

Gameplay mistakes (no actions left, locked gates, missing substrate) are
never exceptions; they come back as log-only outcomes. The errors here
signal a caller/engine contract violation instead.
"""

from __future__ import annotations
from typing import Any


class EngineContractError(ValueError):
    """Base class for malformed intents."""
    error_code = "CONTRACT_VIOLATION"


class UnknownReactionError(EngineContractError):
    """Raised when a reaction kind is not one of the known reactions."""
    error_code = "UNKNOWN_REACTION"

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(f"Unknown reaction kind: {kind!r}")


class UnknownRoomError(EngineContractError):
    """Raised when a room id does not name a compartment."""
    error_code = "UNKNOWN_ROOM"

    def __init__(self, room: Any):
        self.room = room
        super().__init__(f"Unknown room id: {room!r}")
