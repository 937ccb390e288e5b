"""
Pytest fixtures for Mitoescape tests.
"""

import pytest

from ..engine_core.state import GameState, Room, START
from ..engine_core.events import ScriptedRandom
from ..session.controller import TurnController


# Deck order: fed, fasting, exercise, hypoxia, cyanide, thiamine
FED, FASTING, EXERCISE, HYPOXIA, CYANIDE, THIAMINE = range(6)


@pytest.fixture
def start_state() -> GameState:
    """The opening snapshot."""
    return START


@pytest.fixture
def open_mito_state() -> GameState:
    """Mitochondria unlocked with PDH and ETC available."""
    return START.with_resources(nad=6, nadh=2).with_locks(
        mito_door=True,
        pdh_gate=True,
        etc_online=True,
    )


@pytest.fixture
def nucleus_ready_state() -> GameState:
    """Enough ATP to leave, standing in the Nucleus."""
    return START.with_resources(atp=32, lactate=0, nad=5)._copy_with(
        active_room=Room.NUCLEUS,
    )


def scripted_controller(*picks: int) -> TurnController:
    """Controller whose event draws follow ``picks``."""
    return TurnController(random_source=ScriptedRandom(picks))


@pytest.fixture
def fed_controller() -> TurnController:
    """Controller that always draws the fed event (neutral for most tests)."""
    return scripted_controller(*([FED] * 20))
