"""
Regulation - End-of-turn pass over the metabolic state.

Runs once per turn advance. The order of steps matters: later steps
read the outputs of earlier ones, except for the ETC block, which is
evaluated once from the snapshot the pass started with.

1. Redox pressure
2. Fasting adaptation
3. Lock recomputation
4. Failure flags, turn counter, action reset
5. Turn limit
6. Automatic escape when standing in the Nucleus
"""

from __future__ import annotations

from .state import GameState, RunStatus, Room
from .action import Outcome
from .derived import etc_blocked, win_ready, ACIDOSIS_LACTATE, MAX_FAILURE_FLAGS, WIN_ATP


DOOR_UNLOCKED_MESSAGE = (
    "🔓 Mitochondrial access unlocked "
    "(you've generated reducing equivalents / entry substrate)."
)
FASTING_MESSAGE = (
    "Fasting adaptation: liver glycogen supports glucose (+1 glucose, -1 glycogen)."
)
TIMEOUT_MESSAGE = "⏳ Time ran out: the cell decompensated before you could escape."

ACTIONS_PER_TURN = 2


def failure_level(state: GameState) -> int:
    """
    Severity of the current state, as the max of the triggered levels.

    NAD⁺ depletion is level 1, acidosis level 2, ATP debt level 3.
    Only ATP debt can reach the failing level on its own.
    """
    level = 0
    if state.nad <= 0:
        level = max(level, 1)
    if state.lactate >= ACIDOSIS_LACTATE:
        level = max(level, 2)
    if state.atp < 0:
        level = max(level, 3)
    return level


def accumulate_failure_flags(state: GameState) -> GameState:
    """Raise failure_flags to the current severity and fail at the maximum."""
    flags = max(state.failure_flags, failure_level(state))
    new_state = state._copy_with(failure_flags=flags)
    if flags >= MAX_FAILURE_FLAGS and not state.is_over:
        new_state = new_state._copy_with(status=RunStatus.FAILED)
    return new_state


def recompute_locks(state: GameState, blocked: bool) -> GameState:
    """Derive all locks from the state; ``blocked`` is the entry ETC block."""
    mito_door = state.locks.mito_door or state.nadh >= 2 or state.acetyl_coa > 0
    nadh_ceiling = 4 if state.flags.thiamine_low else 6
    pdh_gate = mito_door and state.nadh <= nadh_ceiling and state.nad >= 2
    return state.with_locks(
        mito_door=mito_door,
        pdh_gate=pdh_gate,
        tca_online=pdh_gate and state.acetyl_coa > 0,
        etc_online=mito_door and not blocked,
        nucleus_exit=(
            state.atp >= WIN_ATP and state.lactate < ACIDOSIS_LACTATE and state.nad > 0
        ),
    )


def regulate(
    state: GameState,
    actions_per_turn: int = ACTIONS_PER_TURN,
) -> Outcome:
    """
    Run the end-of-turn regulation pass.

    Returns an Outcome whose messages are the passive changes that
    happened (door unlock, fasting, timeout).
    """
    messages: list[str] = []
    blocked = etc_blocked(state)
    ns = state

    # 1. Redox: a stalled ETC jams NAD⁺, a running one slowly regenerates it
    if blocked:
        if ns.nadh >= 8:
            ns = ns.with_resources(nad=max(ns.nad - 1, 0))
    elif ns.locks.etc_online and ns.nadh > 0:
        regen = min(1, ns.nadh)
        ns = ns.with_resources(nad=ns.nad + regen, nadh=ns.nadh - regen)

    # 2. Fasting adaptation
    if ns.flags.fasting and ns.glycogen > 0 and ns.glucose < 3:
        ns = ns.with_resources(glycogen=ns.glycogen - 1, glucose=ns.glucose + 1)
        messages.append(FASTING_MESSAGE)

    # 3. Locks
    door_was_open = ns.locks.mito_door
    ns = recompute_locks(ns, blocked)
    if ns.locks.mito_door and not door_was_open:
        messages.append(DOOR_UNLOCKED_MESSAGE)

    # 4. Failure flags, next turn
    ns = accumulate_failure_flags(ns)
    ns = ns._copy_with(turn=ns.turn + 1, actions_left=actions_per_turn)

    # 5. Turn limit
    if ns.turn > ns.max_turns and ns.status is not RunStatus.ESCAPED:
        ns = ns._copy_with(status=RunStatus.FAILED)
        messages.append(TIMEOUT_MESSAGE)

    # 6. Standing in the Nucleus with the exit ready escapes automatically
    if not ns.is_over and win_ready(ns) and ns.active_room is Room.NUCLEUS:
        ns = ns._copy_with(status=RunStatus.ESCAPED)

    return Outcome(state=ns, messages=messages)
