"""
Turn Controller - Owns one run and turns player intents into snapshots.

The controller:
1. Holds the current GameState and the game log
2. Spends actions through the reducer
3. Advances turns: regulation, status log, one event card
4. Gates room changes on the mitochondrial door
5. Resets to the opening snapshot

Every intent runs to completion before returning. The log is
most-recent-first and capped.
"""

from __future__ import annotations
from dataclasses import replace
import logging

from ..config import GameConfig
from ..engine_core.state import GameState, Room, RunStatus, START
from ..engine_core.action import ReactionKind, Outcome
from ..engine_core.derived import evaluate
from ..engine_core.reducer import Reducer
from ..engine_core.regulation import regulate
from ..engine_core.events import RandomSource, SeededRandom, Event, draw_event, apply_event
from ..engine_core.rooms import ROOMS, room_locked


logger = logging.getLogger(__name__)

OPENING_MESSAGE = (
    "You awaken inside a cell with failing energy balance. "
    "Restore ATP and reach the nuclear exit."
)
ROOM_LOCKED_MESSAGE = (
    "This compartment is currently inaccessible (unlock requirements not met)."
)
RUN_OVER_MESSAGE = "The run is over. Reset to start a new one."


class TurnController:
    """
    The main turn driver for a single run.

    Usage:
        controller = TurnController(random_source=SeededRandom(7))

        controller.perform_reaction(ReactionKind.GLYCOLYSIS)
        controller.select_room("nucleus")
        controller.advance_turn()

        render(controller.state, controller.log)
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        random_source: RandomSource | None = None,
    ):
        self.config = config or GameConfig()
        self.random_source = random_source or SeededRandom(self.config.seed)
        self.reducer = Reducer()
        self.current_event: Event | None = None
        self._state = self.initial_state()
        self._log: list[str] = [OPENING_MESSAGE]
        self._entries_written = 1

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def log(self) -> list[str]:
        """Log lines, most recent first."""
        return list(self._log)

    @property
    def entries_written(self) -> int:
        """Lines logged since the run started, including those dropped by the cap."""
        return self._entries_written

    def initial_state(self) -> GameState:
        """The opening snapshot for this configuration."""
        if (
            self.config.max_turns == START.max_turns
            and self.config.actions_per_turn == START.actions_left
        ):
            return START
        return replace(
            START,
            max_turns=self.config.max_turns,
            actions_left=self.config.actions_per_turn,
        )

    def perform_reaction(self, kind: ReactionKind | str) -> GameState:
        """Spend one action on a reaction."""
        kind = ReactionKind.parse(kind)
        outcome = self.reducer.apply(self._state, kind)
        logger.debug(
            "reaction %s on turn %d: spent=%s", kind.value, self._state.turn, outcome.action_spent
        )
        self._commit(outcome)
        return self._state

    def advance_turn(self) -> GameState:
        """
        End the turn.

        Runs regulation, logs the resulting status, then draws one event
        and applies it to the regulated snapshot.
        """
        if self._state.is_over:
            self._push(RUN_OVER_MESSAGE)
            return self._state

        outcome = regulate(self._state, actions_per_turn=self.config.actions_per_turn)
        outcome.messages.append(self._status_message(outcome.state))
        self._commit(outcome)

        event = draw_event(self.random_source)
        self.current_event = event
        logger.debug("turn %d event: %s", self._state.turn, event.id)
        self._commit(apply_event(self._state, event))
        return self._state

    def select_room(self, room: Room | str) -> GameState:
        """Move to a compartment unless it is still locked."""
        room = Room.parse(room)
        if room_locked(self._state, room):
            self._push(ROOM_LOCKED_MESSAGE)
            return self._state

        self._state = self._state._copy_with(active_room=room)
        self._push(f"Moved to: {ROOMS[room].name}.")
        return self._state

    def reset(self) -> GameState:
        """Start a new run from the opening snapshot."""
        logger.info("run reset at turn %d (%s)", self._state.turn, self._state.status.value)
        self._state = self.initial_state()
        self._log = [OPENING_MESSAGE]
        self._entries_written = 1
        self.current_event = None
        return self._state

    def _status_message(self, state: GameState) -> str:
        if state.status is RunStatus.ESCAPED:
            return "✅ You reached the nuclear exit with energy to spare. Escaped!"
        if state.status is RunStatus.FAILED:
            reasons = evaluate(state).fail_reasons
            detail = f" {' '.join(reasons)}" if reasons else ""
            return f"❌ Run failed on turn {state.turn - 1}.{detail}"
        return f"Turn {state.turn} of {state.max_turns} begins."

    def _commit(self, outcome: Outcome):
        previous = self._state.status
        self._state = outcome.state
        for message in outcome.messages:
            self._push(message)
        if previous is RunStatus.IN_PROGRESS and self._state.is_over:
            logger.info(
                "run ended: %s on turn %d", self._state.status.value, self._state.turn
            )

    def _push(self, message: str):
        self._log.insert(0, message)
        del self._log[self.config.log_limit:]
        self._entries_written += 1
