"""
Game State - Immutable snapshot of one escape run.

Design principles:
- Immutable: every operation returns a new snapshot
- Flat: resources live directly on the state for cheap comparison
- Derived values are never stored here (see derived.py)
- Locks are only written by the regulation step
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum

from .errors import UnknownRoomError


RESOURCE_MIN = 0
RESOURCE_MAX = 99

# Resources clamped to [RESOURCE_MIN, RESOURCE_MAX]. ATP may go negative.
CLAMPED_RESOURCES = (
    "nad",
    "nadh",
    "fadh2",
    "o2",
    "lactate",
    "glucose",
    "glycogen",
    "acetyl_coa",
)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def identifier_keys(value: str) -> tuple[str, str]:
    """
    Lowercase lookup keys for a user-supplied identifier.

    Returns the plain form first ("PDH" -> "pdh"), then the CamelCase
    split ("OxygenRescue" -> "oxygen_rescue").
    """
    key = value.strip().replace("-", "_").replace(" ", "_")
    snake = "".join(
        f"_{c}" if c.isupper() and i else c for i, c in enumerate(key)
    )
    return key.lower(), snake.lower()


class RunStatus(Enum):
    """Run status. Transitions are one-way out of IN_PROGRESS."""
    IN_PROGRESS = "in_progress"
    ESCAPED = "escaped"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not RunStatus.IN_PROGRESS


class Room(Enum):
    """The four compartments the player can stand in."""
    CYTOSOL = "cytosol"
    MATRIX = "matrix"
    INNER_MEMBRANE = "imm"
    NUCLEUS = "nucleus"

    @classmethod
    def parse(cls, value: Room | str) -> Room:
        """
        Resolve a room from an enum, its value or its name.

        Accepts "InnerMembrane", "inner_membrane", "inner-membrane" and "imm".
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for key in identifier_keys(value):
                for room in cls:
                    if key in (room.value, room.name.lower()):
                        return room
        raise UnknownRoomError(value)


@dataclass(frozen=True)
class Locks:
    """Gates recomputed by every regulation pass."""
    mito_door: bool = False  # Cytosol -> mitochondria access (sticky)
    pdh_gate: bool = False
    tca_online: bool = False
    etc_online: bool = False
    nucleus_exit: bool = False


@dataclass(frozen=True)
class Flags:
    """Physiological conditions set by events."""
    hypoxia: bool = False
    fasting: bool = False
    exercise: bool = False
    cyanide: bool = False
    thiamine_low: bool = False

    def active(self) -> list[str]:
        """Names of the flags currently raised."""
        return [name for name, value in vars(self).items() if value]


@dataclass(frozen=True)
class GameState:
    """
    Complete run state at a point in time.

    This is the canonical snapshot that the engine operates on.
    All state changes go through the reducer, the regulation step
    or an event, each returning a fresh snapshot.
    """
    turn: int = 1
    max_turns: int = 12
    actions_left: int = 2
    status: RunStatus = RunStatus.IN_PROGRESS
    failure_flags: int = 0

    # Resource pool
    atp: int = 2
    nad: int = 10
    nadh: int = 0
    fadh2: int = 0
    o2: int = 1  # 1 = present, 0 = absent
    lactate: int = 0
    glucose: int = 6
    glycogen: int = 6
    acetyl_coa: int = 0

    locks: Locks = field(default_factory=Locks)
    flags: Flags = field(default_factory=Flags)
    active_room: Room = Room.CYTOSOL

    # Id of the event card drawn at the last turn advance
    last_event: str | None = None

    @property
    def is_over(self) -> bool:
        return self.status.is_terminal

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)

    def with_resources(self, **values: int) -> GameState:
        """Return new state with resources set, clamping all but ATP."""
        for name in values:
            if name in CLAMPED_RESOURCES:
                values[name] = clamp(values[name], RESOURCE_MIN, RESOURCE_MAX)
            elif name != "atp":
                raise AttributeError(f"Not a resource: {name}")
        return replace(self, **values)

    def with_locks(self, **values: bool) -> GameState:
        return replace(self, locks=replace(self.locks, **values))

    def with_flags(self, **values: bool) -> GameState:
        return replace(self, flags=replace(self.flags, **values))

    def resources(self) -> dict[str, int]:
        """Resource pool as a plain mapping."""
        return {
            "atp": self.atp,
            **{name: getattr(self, name) for name in CLAMPED_RESOURCES},
        }


# Fixed opening snapshot for every new run
START = GameState()
