"""
Engine Core - Deterministic metabolic state and turn rules.

The engine is the runtime that:
1. Holds an immutable GameState
2. Applies reactions via the reducer
3. Evaluates derived gate conditions
4. Runs the end-of-turn regulation pass
5. Draws and applies event cards
"""

from .state import GameState, Locks, Flags, RunStatus, Room, START
from .action import ReactionKind, Outcome
from .errors import EngineContractError, UnknownReactionError, UnknownRoomError
from .derived import Derived, evaluate
from .reducer import Reducer, apply_reaction
from .regulation import regulate, failure_level
from .events import (
    Event,
    EVENT_DECK,
    RandomSource,
    SeededRandom,
    ScriptedRandom,
    apply_event,
    draw_event,
)
from .rooms import ROOMS, RoomInfo, available_reactions, room_locked, room_status

__all__ = [
    "GameState",
    "Locks",
    "Flags",
    "RunStatus",
    "Room",
    "START",
    "ReactionKind",
    "Outcome",
    "EngineContractError",
    "UnknownReactionError",
    "UnknownRoomError",
    "Derived",
    "evaluate",
    "Reducer",
    "apply_reaction",
    "regulate",
    "failure_level",
    "Event",
    "EVENT_DECK",
    "RandomSource",
    "SeededRandom",
    "ScriptedRandom",
    "apply_event",
    "draw_event",
    "ROOMS",
    "RoomInfo",
    "available_reactions",
    "room_locked",
    "room_status",
]
