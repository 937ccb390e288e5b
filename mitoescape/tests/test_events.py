"""
Tests for the event deck and random sources.
"""

import pytest

from ..engine_core.state import START
from ..engine_core.events import (
    EVENT_DECK,
    MAX_ACTIONS,
    SeededRandom,
    ScriptedRandom,
    apply_event,
    draw_event,
    get_event,
)


class TestDeck:
    """Tests for deck contents."""

    def test_deck_order(self):
        assert [e.id for e in EVENT_DECK] == [
            "fed",
            "fasting",
            "exercise",
            "hypoxia",
            "cyanide",
            "thiamine",
        ]

    def test_get_event(self):
        assert get_event("cyanide").title == "Cyanide exposure"

    def test_get_unknown_event(self):
        with pytest.raises(ValueError):
            get_event("plague")

    def test_log_line(self):
        line = get_event("hypoxia").log_line
        assert line.startswith("🃏 Event: Hypoxia — ")


class TestEventEffects:
    """Tests for what each card does to a snapshot."""

    def test_fed_clears_conditions(self, start_state):
        state = start_state.with_flags(
            fasting=True, exercise=True, hypoxia=True, cyanide=True
        ).with_resources(o2=0)
        result = apply_event(state, "fed").state

        assert not result.flags.fasting
        assert not result.flags.exercise
        assert not result.flags.hypoxia
        assert result.o2 == 1
        # Cyanide is not cleared by feeding
        assert result.flags.cyanide

    def test_fasting(self, start_state):
        result = apply_event(start_state.with_flags(exercise=True), "fasting").state

        assert result.flags.fasting
        assert not result.flags.exercise
        assert result.glucose == start_state.glucose - 1

    def test_fasting_floors_glucose(self, start_state):
        result = apply_event(start_state.with_resources(glucose=0), "fasting").state
        assert result.glucose == 0

    def test_exercise_adds_action(self, start_state):
        result = apply_event(start_state, "exercise").state

        assert result.flags.exercise
        assert result.actions_left == 3

    def test_exercise_caps_actions(self, start_state):
        state = start_state._copy_with(actions_left=MAX_ACTIONS)
        assert apply_event(state, "exercise").state.actions_left == MAX_ACTIONS

    def test_hypoxia(self, start_state):
        result = apply_event(start_state, "hypoxia").state

        assert result.flags.hypoxia
        assert result.o2 == 0

    def test_cyanide(self, start_state):
        result = apply_event(start_state, "cyanide").state

        assert result.flags.cyanide
        assert result.o2 == 1

    def test_thiamine(self, start_state):
        assert apply_event(start_state, "thiamine").state.flags.thiamine_low

    def test_last_event_recorded(self, start_state):
        outcome = apply_event(start_state, get_event("fasting"))

        assert outcome.state.last_event == "fasting"
        assert outcome.messages == [get_event("fasting").log_line]
        assert not outcome.action_spent

    def test_events_do_not_touch_locks_or_status(self, start_state):
        for event in EVENT_DECK:
            result = apply_event(start_state, event).state
            assert result.locks == START.locks
            assert result.status is START.status
            assert result.turn == START.turn


class TestRandomSources:
    """Tests for deterministic draws."""

    def test_scripted_draws_in_order(self):
        source = ScriptedRandom([4, 0, 2])

        assert draw_event(source).id == "cyanide"
        assert draw_event(source).id == "fed"
        assert draw_event(source).id == "exercise"

    def test_scripted_exhausted(self):
        source = ScriptedRandom([1])
        draw_event(source)

        with pytest.raises(ValueError):
            draw_event(source)

    def test_scripted_out_of_range(self):
        with pytest.raises(ValueError):
            draw_event(ScriptedRandom([6]))

    def test_seeded_is_reproducible(self):
        a = SeededRandom(42)
        b = SeededRandom(42)

        assert [a.pick(6) for _ in range(20)] == [b.pick(6) for _ in range(20)]
        assert draw_event(SeededRandom(7)) is draw_event(SeededRandom(7))

    def test_seeded_picks_in_range(self):
        source = SeededRandom(3)
        assert all(0 <= source.pick(6) < 6 for _ in range(100))

    def test_seeded_rejects_empty_range(self):
        with pytest.raises(ValueError):
            SeededRandom(1).pick(0)
