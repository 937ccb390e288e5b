"""
Room catalogue - what each compartment looks like and offers.

The engine does not restrict reactions by room (only escape cares where
the player stands); the offered lists drive what a front end shows.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import GameState, Room
from .action import ReactionKind


@dataclass(frozen=True)
class RoomInfo:
    room: Room
    name: str
    subtitle: str
    hint: str
    reactions: tuple[ReactionKind, ...]


ROOMS: dict[Room, RoomInfo] = {
    Room.CYTOSOL: RoomInfo(
        room=Room.CYTOSOL,
        name="Cytosol",
        subtitle="Glycolysis + Glycogen",
        hint="Make ATP fast; manage NAD⁺. Unlock the mitochondrial door.",
        reactions=(
            ReactionKind.GLYCOLYSIS,
            ReactionKind.LACTATE_ROUTE,
            ReactionKind.GLYCOGENOLYSIS,
        ),
    ),
    Room.MATRIX: RoomInfo(
        room=Room.MATRIX,
        name="Mito Matrix",
        subtitle="PDH + TCA",
        hint="Convert pyruvate to acetyl-CoA (PDH), then run TCA to charge NADH/FADH₂.",
        reactions=(
            ReactionKind.PDH,
            ReactionKind.TCA,
            ReactionKind.LACTATE_ROUTE,
        ),
    ),
    Room.INNER_MEMBRANE: RoomInfo(
        room=Room.INNER_MEMBRANE,
        name="Inner Membrane",
        subtitle="ETC / OxPhos",
        hint="Use NADH/FADH₂ + O₂ to generate lots of ATP. Beware hypoxia/cyanide.",
        reactions=(
            ReactionKind.ETC,
            ReactionKind.OXYGEN_RESCUE,
            ReactionKind.LACTATE_ROUTE,
        ),
    ),
    Room.NUCLEUS: RoomInfo(
        room=Room.NUCLEUS,
        name="Nucleus Exit",
        subtitle="Final Lock",
        hint="Escape requires ATP + stable metabolism (no collapse).",
        reactions=(ReactionKind.ATTEMPT_ESCAPE,),
    ),
}


def room_locked(state: GameState, room: Room) -> bool:
    """Matrix and inner membrane stay closed until the mitochondrial door opens."""
    if room in (Room.MATRIX, Room.INNER_MEMBRANE):
        return not state.locks.mito_door
    return False


def room_status(state: GameState, room: Room) -> str:
    locks = state.locks
    if room is Room.CYTOSOL:
        return "Door open" if locks.mito_door else "Door locked"
    if room is Room.MATRIX:
        return "PDH ready" if locks.pdh_gate else "PDH gated"
    if room is Room.INNER_MEMBRANE:
        return "ETC online" if locks.etc_online else "ETC stalled"
    return "Exit ready" if locks.nucleus_exit else "Exit locked"


def available_reactions(state: GameState) -> list[ReactionKind]:
    """Reactions offered in the active room; none once the run is over."""
    if state.is_over:
        return []
    return list(ROOMS[state.active_room].reactions)
