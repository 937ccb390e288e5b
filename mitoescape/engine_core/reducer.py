"""
Reducer - Applies reactions to game state.

The reducer is the single point where player actions change state.
All reactions go through apply_reaction().

Design principles:
- Pure function: (state, reaction) -> Outcome
- Spends the action token before checking reaction preconditions
- A failed precondition is a log-only outcome, never an exception
- Never touches locks; those belong to the regulation step
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable

from .state import GameState, RunStatus, Room
from .action import ReactionKind, Outcome


Handler = Callable[[GameState], Outcome]

GAME_OVER_MESSAGE = "The run is over. Reset to play again."


@dataclass
class Reducer:
    """
    Reducer applies reactions to game state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, kind: ReactionKind | str) -> Outcome:
        """
        Apply a reaction to the game state.

        Returns an Outcome with the new state and exactly one log line,
        or a silent no-op when no actions are left.
        """
        kind = ReactionKind.parse(kind)
        handler = self._get_handler(kind)

        if state.is_over:
            return Outcome.note(state, GAME_OVER_MESSAGE)
        if state.actions_left <= 0:
            return Outcome.unchanged(state)

        spent = state._copy_with(actions_left=state.actions_left - 1)
        result = handler(spent)
        result.action_spent = True
        return result

    def _get_handler(self, kind: ReactionKind) -> Handler:
        """Get the handler function for a reaction kind."""
        handlers = {
            ReactionKind.GLYCOLYSIS: self._handle_glycolysis,
            ReactionKind.LACTATE_ROUTE: self._handle_lactate_route,
            ReactionKind.GLYCOGENOLYSIS: self._handle_glycogenolysis,
            ReactionKind.PDH: self._handle_pdh,
            ReactionKind.TCA: self._handle_tca,
            ReactionKind.ETC: self._handle_etc,
            ReactionKind.OXYGEN_RESCUE: self._handle_oxygen_rescue,
            ReactionKind.ATTEMPT_ESCAPE: self._handle_attempt_escape,
        }
        return handlers[kind]

    def _handle_glycolysis(self, state: GameState) -> Outcome:
        """Glucose -> 2 ATP, reducing up to 2 NAD⁺."""
        if state.glucose <= 0:
            return Outcome.note(state, "No glucose available for glycolysis.")
        if state.nad <= 0:
            return Outcome.note(
                state,
                "Glycolysis stalled: NAD⁺ is depleted. "
                "Consider lactate route to regenerate NAD⁺.",
            )

        used = min(2, state.nad)
        new_state = state.with_resources(
            glucose=state.glucose - 1,
            atp=state.atp + 2,
            nad=state.nad - used,
            nadh=state.nadh + used,
        )
        return Outcome.note(
            new_state,
            f"Ran glycolysis: -1 glucose, +2 ATP, +{used} NADH (consumed {used} NAD⁺).",
        )

    def _handle_lactate_route(self, state: GameState) -> Outcome:
        """Reoxidize up to 2 NADH by dumping pyruvate into lactate."""
        if state.nadh <= 0:
            return Outcome.note(state, "No NADH to reoxidize via lactate.")

        k = min(2, state.nadh)
        new_state = state.with_resources(
            nadh=state.nadh - k,
            nad=state.nad + k,
            lactate=state.lactate + k,
        )
        return Outcome.note(
            new_state,
            f"Converted pyruvate → lactate: regenerated {k} NAD⁺ (+{k} lactate).",
        )

    def _handle_glycogenolysis(self, state: GameState) -> Outcome:
        if state.glycogen <= 0:
            return Outcome.note(state, "No glycogen left to break down.")

        new_state = state.with_resources(
            glycogen=state.glycogen - 1,
            glucose=state.glucose + 1,
        )
        return Outcome.note(new_state, "Glycogenolysis: -1 glycogen, +1 glucose.")

    def _handle_pdh(self, state: GameState) -> Outcome:
        """Pyruvate -> acetyl-CoA."""
        if not state.locks.mito_door:
            return Outcome.note(
                state, "PDH not accessible: mitochondrial door is locked."
            )
        if not state.locks.pdh_gate:
            return Outcome.note(
                state,
                "PDH gate is closed (high NADH / low NAD⁺ / thiamine risk). "
                "Consider ETC or lactate route.",
            )
        if state.nad <= 0:
            return Outcome.note(state, "PDH requires NAD⁺; you have none.")

        new_state = state.with_resources(
            nad=state.nad - 1,
            nadh=state.nadh + 1,
            acetyl_coa=state.acetyl_coa + 1,
        )
        return Outcome.note(
            new_state,
            "PDH: pyruvate → acetyl-CoA (+1 acetyl-CoA, +1 NADH, -1 NAD⁺).",
        )

    def _handle_tca(self, state: GameState) -> Outcome:
        """One lap of the cycle per acetyl-CoA."""
        if not state.locks.tca_online:
            return Outcome.note(
                state, "TCA not ready: need acetyl-CoA and an open PDH gate."
            )
        if state.nad < 2:
            return Outcome.note(
                state,
                "TCA slowed: insufficient NAD⁺ to run key dehydrogenases.",
            )

        atp_gain = 2 if state.flags.exercise else 1
        new_state = state.with_resources(
            acetyl_coa=state.acetyl_coa - 1,
            nad=state.nad - 2,
            nadh=state.nadh + 2,
            fadh2=state.fadh2 + 1,
            atp=state.atp + atp_gain,
        )
        message = "TCA lap: -1 acetyl-CoA, +1 ATP, +2 NADH, +1 FADH₂ (consumed NAD⁺)."
        if state.flags.exercise:
            message = (
                "TCA lap with exercise activation: -1 acetyl-CoA, +2 ATP, "
                "+2 NADH, +1 FADH₂ (consumed NAD⁺)."
            )
        return Outcome.note(new_state, message)

    def _handle_etc(self, state: GameState) -> Outcome:
        """Oxidative phosphorylation: NADH -> 2 ATP, FADH₂ -> 1 ATP."""
        if not state.locks.etc_online:
            if state.flags.cyanide:
                message = "ETC offline: cyanide inhibits Complex IV."
            elif state.o2 == 0:
                message = "ETC offline: no oxygen (hypoxia)."
            else:
                message = "ETC not accessible yet (unlock mitochondrial access first)."
            return Outcome.note(state, message)

        n = min(3, state.nadh)
        f = min(2, state.fadh2)
        if n + f == 0:
            return Outcome.note(state, "No NADH/FADH₂ available to feed ETC.")

        gain = 2 * n + f
        new_state = state.with_resources(
            nadh=state.nadh - n,
            fadh2=state.fadh2 - f,
            atp=state.atp + gain,
            nad=state.nad + n,
            o2=1,
        )
        return Outcome.note(
            new_state,
            f"ETC ran: used {n} NADH & {f} FADH₂ → +{gain} ATP, regenerated NAD⁺.",
        )

    def _handle_oxygen_rescue(self, state: GameState) -> Outcome:
        if state.flags.cyanide:
            # Cyanide keeps the hypoxia flag and the ETC lock in place
            return Outcome.note(
                state.with_resources(o2=1),
                "Oxygen restored, but cyanide still blocks Complex IV. "
                "Avoid relying on the ETC.",
            )

        new_state = state.with_resources(o2=1).with_flags(hypoxia=False)
        return Outcome.note(
            new_state,
            "Oxygenation improved: hypoxia resolved "
            "(ETC can resume if not otherwise blocked).",
        )

    def _handle_attempt_escape(self, state: GameState) -> Outcome:
        if state.active_room is not Room.NUCLEUS:
            return Outcome.note(
                state, "You can only attempt escape from the Nucleus Exit room."
            )
        if not state.locks.nucleus_exit:
            return Outcome.note(
                state,
                "Exit lock holds: need ATP ≥ 32 and metabolic stability "
                "(NAD⁺ present, lactate not severe).",
            )

        new_state = state._copy_with(status=RunStatus.ESCAPED)
        return Outcome.note(
            new_state,
            "✅ Escape successful! Energy balance restored and exit unlocked.",
        )


def apply_reaction(state: GameState, kind: ReactionKind | str) -> Outcome:
    """
    Convenience function to apply a reaction.

    Creates a Reducer and applies the reaction.
    """
    reducer = Reducer()
    return reducer.apply(state, kind)
