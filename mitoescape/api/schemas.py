"""
Pydantic Schemas - Snapshot contract between the engine and a front end.

These models define what a presentation layer receives after every
intent: resources, locks, flags, derived conditions, rooms and the log.
They carry no behaviour; build them with snapshot_from_state().

Error Codes:
- RUN_NOT_FOUND: Session does not exist or has been ended
- UNKNOWN_REACTION: Reaction kind is not part of the engine
- UNKNOWN_ROOM: Room id does not name a compartment
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from ..engine_core.state import GameState
from ..engine_core.derived import evaluate
from ..engine_core.rooms import ROOMS, available_reactions, room_locked, room_status


# =============================================================================
# Enums
# =============================================================================

class RunStatusValue(str, Enum):
    """Run status values."""
    IN_PROGRESS = "in_progress"
    ESCAPED = "escaped"
    FAILED = "failed"


class ErrorCode(str, Enum):
    """Structured error codes."""
    RUN_NOT_FOUND = "RUN_NOT_FOUND"
    UNKNOWN_REACTION = "UNKNOWN_REACTION"
    UNKNOWN_ROOM = "UNKNOWN_ROOM"
    CONTRACT_VIOLATION = "CONTRACT_VIOLATION"


# =============================================================================
# Shared Models
# =============================================================================

class ResourcesInfo(BaseModel):
    """Resource pool. ATP may be negative."""
    atp: int
    nad: int = Field(ge=0, le=99)
    nadh: int = Field(ge=0, le=99)
    fadh2: int = Field(ge=0, le=99)
    o2: int = Field(ge=0, le=1)
    lactate: int = Field(ge=0, le=99)
    glucose: int = Field(ge=0, le=99)
    glycogen: int = Field(ge=0, le=99)
    acetyl_coa: int = Field(ge=0, le=99)

    model_config = {"from_attributes": True}


class LocksInfo(BaseModel):
    mito_door: bool
    pdh_gate: bool
    tca_online: bool
    etc_online: bool
    nucleus_exit: bool

    model_config = {"from_attributes": True}


class FlagsInfo(BaseModel):
    hypoxia: bool
    fasting: bool
    exercise: bool
    cyanide: bool
    thiamine_low: bool

    model_config = {"from_attributes": True}


class DerivedInfo(BaseModel):
    """Derived gate conditions, recomputed for every snapshot."""
    etc_blocked: bool
    pdh_blocked: bool
    nad_crisis: bool
    acidosis_risk: bool
    win_ready: bool
    fail_reasons: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class RoomView(BaseModel):
    """A compartment as the map shows it."""
    room_id: str
    name: str
    subtitle: str
    hint: str
    locked: bool
    status_text: str
    is_active: bool = False


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    api_version: str = Field("v1", description="API version")


class GameSnapshot(BaseModel):
    """Everything a front end needs to render one moment of a run."""
    session_id: Optional[str] = None
    turn: int = Field(ge=1)
    max_turns: int
    actions_left: int = Field(ge=0, le=3)
    status: RunStatusValue
    failure_flags: int = Field(ge=0, le=3, description="Severity level, not a count")
    resources: ResourcesInfo
    locks: LocksInfo
    flags: FlagsInfo
    derived: DerivedInfo
    active_room: str
    rooms: list[RoomView] = Field(default_factory=list)
    available_reactions: list[str] = Field(
        default_factory=list, description="Reaction kinds offered in the active room"
    )
    last_event: Optional[str] = None
    log: list[str] = Field(default_factory=list, description="Most recent first")
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active runs."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a run."""
    success: bool
    session_id: str


# =============================================================================
# Builders
# =============================================================================

def room_views(state: GameState) -> list[RoomView]:
    return [
        RoomView(
            room_id=room.value,
            name=info.name,
            subtitle=info.subtitle,
            hint=info.hint,
            locked=room_locked(state, room),
            status_text=room_status(state, room),
            is_active=room is state.active_room,
        )
        for room, info in ROOMS.items()
    ]


def snapshot_from_state(
    state: GameState,
    log: Optional[list[str]] = None,
    session_id: Optional[str] = None,
) -> GameSnapshot:
    """Serialize a GameState (plus its log) into the outbound contract."""
    derived = evaluate(state)
    return GameSnapshot(
        session_id=session_id,
        turn=state.turn,
        max_turns=state.max_turns,
        actions_left=state.actions_left,
        status=RunStatusValue(state.status.value),
        failure_flags=state.failure_flags,
        resources=ResourcesInfo(**state.resources()),
        locks=LocksInfo.model_validate(state.locks),
        flags=FlagsInfo.model_validate(state.flags),
        derived=DerivedInfo(
            etc_blocked=derived.etc_blocked,
            pdh_blocked=derived.pdh_blocked,
            nad_crisis=derived.nad_crisis,
            acidosis_risk=derived.acidosis_risk,
            win_ready=derived.win_ready,
            fail_reasons=derived.fail_reasons,
            warnings=derived.warnings,
        ),
        active_room=state.active_room.value,
        rooms=room_views(state),
        available_reactions=[kind.value for kind in available_reactions(state)],
        last_event=state.last_event,
        log=list(log or []),
    )


__all__ = [
    "RunStatusValue",
    "ErrorCode",
    "ResourcesInfo",
    "LocksInfo",
    "FlagsInfo",
    "DerivedInfo",
    "RoomView",
    "ErrorResponse",
    "GameSnapshot",
    "SessionListResponse",
    "EndSessionResponse",
    "room_views",
    "snapshot_from_state",
]
