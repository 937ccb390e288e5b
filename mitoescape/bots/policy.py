"""
Bot Policy - Autoplay for simulations and demos.

A Policy looks at a snapshot and returns one Decision:
- spend an action on a reaction offered in the active room
- move to another (unlocked) room, which costs nothing
- end the turn

run_episode() drives a TurnController with a policy until the run ends.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
import random

from ..engine_core.state import GameState, Room, RunStatus
from ..engine_core.action import ReactionKind
from ..engine_core.rooms import ROOMS, available_reactions, room_locked
from ..session.controller import TurnController


class DecisionType(Enum):
    REACTION = "reaction"
    MOVE = "move"
    END_TURN = "end_turn"


@dataclass
class Decision:
    """
    A decision made by a policy.

    Contains the intent to send and a short explanation for debugging.
    """
    decision_type: DecisionType
    reaction: ReactionKind | None = None
    room: Room | None = None
    explanation: str = ""

    @classmethod
    def react(cls, kind: ReactionKind, explanation: str = "") -> Decision:
        return cls(DecisionType.REACTION, reaction=kind, explanation=explanation)

    @classmethod
    def move(cls, room: Room, explanation: str = "") -> Decision:
        return cls(DecisionType.MOVE, room=room, explanation=explanation)

    @classmethod
    def end_turn(cls, explanation: str = "") -> Decision:
        return cls(DecisionType.END_TURN, explanation=explanation)


class Policy(ABC):
    """
    Abstract base class for autoplay policies.

    Implementations range from uniform random play to simple
    pipeline heuristics.
    """

    @abstractmethod
    def select(self, state: GameState) -> Decision:
        """
        Select the next intent.

        Args:
            state: Current snapshot (never terminal)

        Returns:
            Decision to apply
        """
        pass

    def get_name(self) -> str:
        """Get the policy's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(Policy):
    """
    Random policy - picks uniformly among offered intents.

    Used for:
    - Baseline comparison
    - Fuzzing the engine
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select(self, state: GameState) -> Decision:
        options = [Decision.end_turn("Selected randomly")]
        if state.actions_left > 0:
            options.extend(
                Decision.react(kind, "Selected randomly")
                for kind in available_reactions(state)
            )
        options.extend(
            Decision.move(room, "Selected randomly")
            for room in Room
            if room is not state.active_room and not room_locked(state, room)
        )
        return self.rng.choice(options)


class GreedyPolicy(Policy):
    """
    Greedy policy - pushes substrate down the pipeline toward the exit.

    Prefers, in order: escaping, oxidative phosphorylation, oxygen
    rescue, TCA, PDH, glycolysis, glycogenolysis, then the lactate route
    when NAD⁺ runs dry.
    """

    def select(self, state: GameState) -> Decision:
        if state.locks.nucleus_exit:
            return self._in_room(state, Room.NUCLEUS, ReactionKind.ATTEMPT_ESCAPE, "Exit is open")

        if state.actions_left <= 0:
            return Decision.end_turn("No actions left")

        locks, flags = state.locks, state.flags
        if locks.etc_online and (state.nadh > 0 or state.fadh2 > 0):
            return self._in_room(state, Room.INNER_MEMBRANE, ReactionKind.ETC, "Burn reducing equivalents")
        if flags.hypoxia and not flags.cyanide and locks.mito_door:
            return self._in_room(state, Room.INNER_MEMBRANE, ReactionKind.OXYGEN_RESCUE, "Restore oxygen")
        if locks.tca_online and state.nad >= 2:
            return self._in_room(state, Room.MATRIX, ReactionKind.TCA, "Run a TCA lap")
        if locks.pdh_gate and state.nad > 0 and state.acetyl_coa == 0:
            return self._in_room(state, Room.MATRIX, ReactionKind.PDH, "Feed acetyl-CoA")
        if state.glucose > 0 and state.nad > 0:
            return self._in_room(state, Room.CYTOSOL, ReactionKind.GLYCOLYSIS, "Quick ATP")
        if state.glucose == 0 and state.glycogen > 0:
            return self._in_room(state, Room.CYTOSOL, ReactionKind.GLYCOGENOLYSIS, "Release glucose")
        if state.nad <= 1 and state.nadh > 0 and state.lactate < 6:
            return self._in_room(state, Room.CYTOSOL, ReactionKind.LACTATE_ROUTE, "Regenerate NAD⁺")

        return Decision.end_turn("Nothing useful to do")

    def _in_room(
        self, state: GameState, room: Room, kind: ReactionKind, why: str
    ) -> Decision:
        if state.active_room is not room:
            return Decision.move(room, f"{why}: go to {ROOMS[room].name}")
        if kind is ReactionKind.ATTEMPT_ESCAPE and state.actions_left <= 0:
            # Standing in the Nucleus with the exit open escapes at end of turn
            return Decision.end_turn(why)
        return Decision.react(kind, why)


@dataclass
class EpisodeResult:
    status: RunStatus
    turns: int
    steps: int
    final_state: GameState

    @property
    def escaped(self) -> bool:
        return self.status is RunStatus.ESCAPED


def apply_decision(controller: TurnController, decision: Decision) -> GameState:
    """Send a decision to the controller as the matching intent."""
    if decision.decision_type is DecisionType.REACTION:
        return controller.perform_reaction(decision.reaction)
    if decision.decision_type is DecisionType.MOVE:
        return controller.select_room(decision.room)
    return controller.advance_turn()


def run_episode(
    controller: TurnController,
    policy: Policy,
    max_steps: int = 500,
) -> EpisodeResult:
    """
    Play until the run ends or max_steps intents have been sent.

    Room moves cost no action, so the step limit guards against a
    policy that only wanders.
    """
    steps = 0
    while not controller.state.is_over and steps < max_steps:
        apply_decision(controller, policy.select(controller.state))
        steps += 1

    state = controller.state
    return EpisodeResult(
        status=state.status,
        turns=state.turn,
        steps=steps,
        final_state=state,
    )
