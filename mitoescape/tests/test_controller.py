"""
Tests for the turn controller.

Tests:
- Opening snapshot and log
- Reactions, turn advance and event draws
- Room gating
- Terminal runs and reset
"""

import pytest

from ..config import GameConfig
from ..engine_core.state import GameState, Room, RunStatus, START
from ..engine_core.action import ReactionKind
from ..engine_core.errors import UnknownRoomError, UnknownReactionError
from ..engine_core.events import ScriptedRandom, get_event
from ..engine_core.reducer import GAME_OVER_MESSAGE
from ..session.controller import (
    TurnController,
    OPENING_MESSAGE,
    ROOM_LOCKED_MESSAGE,
    RUN_OVER_MESSAGE,
)
from .conftest import scripted_controller, FED, EXERCISE, CYANIDE


class TestOpening:
    """Tests for a fresh controller."""

    def test_initial_state_is_start(self, fed_controller):
        assert fed_controller.state is START
        assert fed_controller.log == [OPENING_MESSAGE]
        assert fed_controller.entries_written == 1
        assert fed_controller.current_event is None

    def test_custom_config(self):
        controller = TurnController(
            config=GameConfig(max_turns=5, actions_per_turn=3),
            random_source=ScriptedRandom([]),
        )

        assert controller.state.max_turns == 5
        assert controller.state.actions_left == 3
        assert controller.state.atp == START.atp

    def test_log_is_a_copy(self, fed_controller):
        fed_controller.log.append("tampered")
        assert fed_controller.log == [OPENING_MESSAGE]


class TestReactions:
    """Tests for perform_reaction."""

    def test_glycolysis_twice(self, fed_controller):
        fed_controller.perform_reaction(ReactionKind.GLYCOLYSIS)
        state = fed_controller.perform_reaction("glycolysis")

        assert state.glucose == 4
        assert state.atp == 6
        assert state.nad == 6
        assert state.nadh == 4
        assert state.actions_left == 0
        assert len(fed_controller.log) == 3

    def test_no_actions_is_silent(self, fed_controller):
        fed_controller.perform_reaction("glycolysis")
        fed_controller.perform_reaction("glycolysis")
        before = fed_controller.state
        state = fed_controller.perform_reaction("glycolysis")

        assert state is before
        assert fed_controller.entries_written == 3

    def test_unknown_reaction(self, fed_controller):
        with pytest.raises(UnknownReactionError):
            fed_controller.perform_reaction("photosynthesis")
        assert fed_controller.state is START

    def test_terminal_run_rejects_reactions(self, fed_controller):
        fed_controller._state = START._copy_with(status=RunStatus.FAILED)
        fed_controller.perform_reaction("glycolysis")

        assert fed_controller.log[0] == GAME_OVER_MESSAGE
        assert fed_controller.state.glucose == START.glucose


class TestAdvanceTurn:
    """Tests for advance_turn."""

    def test_advance_logs_status_then_event(self, fed_controller):
        state = fed_controller.advance_turn()

        assert state.turn == 2
        assert state.actions_left == 2
        assert state.last_event == "fed"
        assert fed_controller.current_event is get_event("fed")
        assert fed_controller.log == [
            get_event("fed").log_line,
            "Turn 2 of 12 begins.",
            OPENING_MESSAGE,
        ]

    def test_door_unlock_logged_before_status(self, fed_controller):
        fed_controller.perform_reaction("glycolysis")
        fed_controller.advance_turn()

        assert fed_controller.state.locks.mito_door
        assert fed_controller.log[1] == "Turn 2 of 12 begins."
        assert fed_controller.log[2].startswith("🔓 Mitochondrial access unlocked")

    def test_exercise_grants_extra_action(self):
        controller = scripted_controller(EXERCISE)
        state = controller.advance_turn()

        assert state.flags.exercise
        assert state.actions_left == 3

    def test_draws_follow_source(self):
        controller = scripted_controller(FED, CYANIDE)
        controller.advance_turn()
        controller.advance_turn()

        assert controller.state.last_event == "cyanide"
        assert controller.state.flags.cyanide

    def test_escape_on_turn_advance(self, fed_controller, nucleus_ready_state):
        fed_controller._state = nucleus_ready_state
        state = fed_controller.advance_turn()

        assert state.status is RunStatus.ESCAPED
        assert fed_controller.log[1] == (
            "✅ You reached the nuclear exit with energy to spare. Escaped!"
        )

    def test_failure_message(self, fed_controller):
        fed_controller._state = START.with_resources(atp=-1)
        state = fed_controller.advance_turn()

        assert state.status is RunStatus.FAILED
        assert fed_controller.log[1] == "❌ Run failed on turn 1. ATP debt: energy collapse."

    def test_fails_when_atp_goes_negative(self, fed_controller):
        """NAD⁺ depletion alone keeps the run going; ATP debt ends it."""
        fed_controller._state = START.with_resources(nad=0)
        state = fed_controller.advance_turn()
        assert state.failure_flags == 1
        assert state.status is RunStatus.IN_PROGRESS

        fed_controller._state = state.with_resources(atp=-1)
        state = fed_controller.advance_turn()
        assert state.failure_flags == 3
        assert state.status is RunStatus.FAILED

    def test_terminal_advance_draws_nothing(self):
        controller = TurnController(random_source=ScriptedRandom([]))
        controller._state = START._copy_with(status=RunStatus.ESCAPED)
        state = controller.advance_turn()

        assert state.turn == 1
        assert state.last_event is None
        assert controller.log[0] == RUN_OVER_MESSAGE

    def test_timeout_after_last_turn(self, fed_controller):
        for _ in range(12):
            fed_controller.advance_turn()

        assert fed_controller.state.status is RunStatus.FAILED
        assert fed_controller.state.turn == 13
        assert any(line.startswith("⏳ Time ran out") for line in fed_controller.log)


class TestCyanide:
    """Cyanide keeps the ETC offline regardless of oxygen."""

    def test_cyanide_then_etc(self):
        controller = scripted_controller(CYANIDE, FED)
        controller.advance_turn()
        before = controller.state

        controller.perform_reaction("etc")
        assert controller.log[0] == "ETC offline: cyanide inhibits Complex IV."
        assert controller.state.resources() == before.resources()

        controller.perform_reaction("oxygen_rescue")
        assert not controller.state.locks.etc_online

        controller.advance_turn()
        assert not controller.state.locks.etc_online

    def test_cyanide_after_door_opens(self, open_mito_state):
        """The ETC lock only drops at the regulation after exposure."""
        controller = scripted_controller(CYANIDE, FED, FED)
        controller._state = open_mito_state
        controller.advance_turn()
        assert controller.state.flags.cyanide

        controller.advance_turn()
        assert not controller.state.locks.etc_online

        controller.perform_reaction("oxygen_rescue")
        controller.advance_turn()
        assert not controller.state.locks.etc_online


class TestRooms:
    """Tests for select_room."""

    def test_matrix_locked_at_start(self, fed_controller):
        state = fed_controller.select_room("matrix")

        assert state.active_room is Room.CYTOSOL
        assert fed_controller.log[0] == ROOM_LOCKED_MESSAGE

    def test_nucleus_always_open(self, fed_controller):
        state = fed_controller.select_room(Room.NUCLEUS)

        assert state.active_room is Room.NUCLEUS
        assert fed_controller.log[0] == "Moved to: Nucleus Exit."

    def test_inner_membrane_after_unlock(self, fed_controller):
        fed_controller.perform_reaction("glycolysis")
        fed_controller.advance_turn()
        state = fed_controller.select_room("imm")

        assert state.active_room is Room.INNER_MEMBRANE

    def test_moving_costs_nothing(self, fed_controller):
        state = fed_controller.select_room("nucleus")
        assert state.actions_left == 2

    def test_unknown_room(self, fed_controller):
        with pytest.raises(UnknownRoomError):
            fed_controller.select_room("golgi")


class TestLogAndReset:
    """Tests for log capping and reset."""

    def test_log_is_capped(self, fed_controller):
        for _ in range(70):
            fed_controller.select_room("cytosol")

        assert len(fed_controller.log) == 60
        assert fed_controller.entries_written == 71
        assert OPENING_MESSAGE not in fed_controller.log

    def test_reset_restores_start(self, fed_controller):
        fed_controller.perform_reaction("glycolysis")
        fed_controller.advance_turn()
        fed_controller.select_room("matrix")
        state = fed_controller.reset()

        assert state is START
        assert fed_controller.log == [OPENING_MESSAGE]
        assert fed_controller.entries_written == 1
        assert fed_controller.current_event is None

    def test_reset_after_failure(self, fed_controller):
        fed_controller._state = GameState(status=RunStatus.FAILED, atp=-4)
        assert fed_controller.reset() is START
