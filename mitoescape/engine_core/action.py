"""
Action System - Reaction kinds and outcomes.

Reactions represent the player's per-turn moves. Every transformation
in the engine (reaction, regulation, event) returns an Outcome: the new
snapshot plus the human-readable log lines it produced.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .errors import UnknownReactionError
from .state import GameState, identifier_keys


class ReactionKind(Enum):
    """Reactions the player can spend an action on."""
    GLYCOLYSIS = "glycolysis"
    LACTATE_ROUTE = "lactate_route"
    GLYCOGENOLYSIS = "glycogenolysis"
    PDH = "pdh"
    TCA = "tca"
    ETC = "etc"
    OXYGEN_RESCUE = "oxygen_rescue"
    ATTEMPT_ESCAPE = "attempt_escape"

    @classmethod
    def parse(cls, value: ReactionKind | str) -> ReactionKind:
        """
        Resolve a reaction from an enum, its value or its name.

        Accepts "LactateRoute", "lactate_route" and "lactate-route" alike.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for candidate in identifier_keys(value):
                for kind in cls:
                    if candidate == kind.value:
                        return kind
        raise UnknownReactionError(value)

    @property
    def label(self) -> str:
        return REACTION_LABELS[self]


REACTION_LABELS = {
    ReactionKind.GLYCOLYSIS: "Run Glycolysis",
    ReactionKind.LACTATE_ROUTE: "Lactate Route",
    ReactionKind.GLYCOGENOLYSIS: "Glycogenolysis",
    ReactionKind.PDH: "Run PDH",
    ReactionKind.TCA: "Run TCA Lap",
    ReactionKind.ETC: "Run ETC",
    ReactionKind.OXYGEN_RESCUE: "Oxygen Rescue",
    ReactionKind.ATTEMPT_ESCAPE: "Attempt Escape",
}


@dataclass
class Outcome:
    """
    Result of a state transformation.

    Contains:
    - The new snapshot (identical to the input for a no-op)
    - Log lines in the order they were produced
    - Whether an action token was spent
    """
    state: GameState
    messages: list[str] = field(default_factory=list)
    action_spent: bool = False

    @classmethod
    def unchanged(cls, state: GameState) -> Outcome:
        """A silent no-op."""
        return cls(state=state)

    @classmethod
    def note(cls, state: GameState, message: str, spent: bool = False) -> Outcome:
        """A single-line outcome."""
        return cls(state=state, messages=[message], action_spent=spent)
