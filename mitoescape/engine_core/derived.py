"""
Derived conditions - gate and warning values computed from a snapshot.

Nothing here is stored on the state; callers re-evaluate whenever they
need a decision or a render.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .state import GameState


WIN_ATP = 32
ACIDOSIS_LACTATE = 8
MAX_FAILURE_FLAGS = 3

FAIL_NAD_CRISIS = "NAD⁺ depletion halted glycolysis and many dehydrogenases."
FAIL_ATP_DEBT = "ATP debt: energy collapse."
FAIL_ACIDOSIS = "Severe lactic acidosis."
FAIL_NO_FUEL = "No fuel left (glucose + glycogen exhausted)."

WARN_ETC_BLOCKED = "ETC is blocked (hypoxia/cyanide/O₂=0) → NADH may pile up."
WARN_PDH_BLOCKED = "PDH is struggling (thiamine low + high NADH) → consider lactate/ETC."


@dataclass(frozen=True)
class Derived:
    etc_blocked: bool
    pdh_blocked: bool
    nad_crisis: bool
    acidosis_risk: bool
    win_ready: bool
    fail_reasons: list[str] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        """Advisory lines shown next to the lock panel."""
        lines = []
        if self.etc_blocked:
            lines.append(WARN_ETC_BLOCKED)
        if self.pdh_blocked:
            lines.append(WARN_PDH_BLOCKED)
        return lines


def etc_blocked(state: GameState) -> bool:
    return state.flags.hypoxia or state.flags.cyanide or state.o2 == 0


def win_ready(state: GameState) -> bool:
    return (
        state.atp >= WIN_ATP
        and state.failure_flags < MAX_FAILURE_FLAGS
        and state.locks.nucleus_exit
    )


def evaluate(state: GameState) -> Derived:
    """Compute every derived condition for a snapshot."""
    nad_crisis = state.nad <= 0
    acidosis_risk = state.lactate >= ACIDOSIS_LACTATE

    # Fixed order
    fail_reasons = []
    if nad_crisis:
        fail_reasons.append(FAIL_NAD_CRISIS)
    if state.atp < 0:
        fail_reasons.append(FAIL_ATP_DEBT)
    if acidosis_risk:
        fail_reasons.append(FAIL_ACIDOSIS)
    if state.glucose == 0 and state.glycogen == 0:
        fail_reasons.append(FAIL_NO_FUEL)

    return Derived(
        etc_blocked=etc_blocked(state),
        pdh_blocked=state.flags.thiamine_low and state.nadh > 6,
        nad_crisis=nad_crisis,
        acidosis_risk=acidosis_risk,
        win_ready=win_ready(state),
        fail_reasons=fail_reasons,
    )
