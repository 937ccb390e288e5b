"""
Event Deck - Random physiological perturbations.

One card is drawn and applied after every turn advance. Selection goes
through a RandomSource so tests can script the draw order.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol
import random

from .state import GameState
from .action import Outcome


MAX_ACTIONS = 3


class RandomSource(Protocol):
    """Anything that can pick one of N options."""

    def pick(self, n: int) -> int:
        """Return an index in [0, n)."""
        ...


class SeededRandom:
    """Uniform picks from a seedable random.Random."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self.rng = random.Random(seed)

    def pick(self, n: int) -> int:
        if n <= 0:
            raise ValueError("Cannot pick from an empty range")
        return self.rng.randrange(n)


class ScriptedRandom:
    """
    Replays a fixed sequence of indices.

    Used for deterministic tests. Raises once the script is exhausted.
    """

    def __init__(self, picks: Iterable[int]):
        self._picks = list(picks)
        self._position = 0

    def pick(self, n: int) -> int:
        if self._position >= len(self._picks):
            raise ValueError("Scripted random source exhausted")
        index = self._picks[self._position]
        self._position += 1
        if not 0 <= index < n:
            raise ValueError(f"Scripted pick {index} outside [0, {n})")
        return index


@dataclass(frozen=True)
class Event:
    """A card of the event deck."""
    id: str
    title: str
    description: str
    apply: Callable[[GameState], GameState]

    @property
    def log_line(self) -> str:
        return f"🃏 Event: {self.title} — {self.description}"


def _fed(s: GameState) -> GameState:
    return s.with_flags(fasting=False, exercise=False, hypoxia=False).with_resources(o2=1)


def _fasting(s: GameState) -> GameState:
    return s.with_flags(fasting=True, exercise=False).with_resources(
        glucose=max(s.glucose - 1, 0)
    )


def _exercise(s: GameState) -> GameState:
    return s.with_flags(exercise=True)._copy_with(
        actions_left=min(s.actions_left + 1, MAX_ACTIONS)
    )


def _hypoxia(s: GameState) -> GameState:
    return s.with_flags(hypoxia=True).with_resources(o2=0)


def _cyanide(s: GameState) -> GameState:
    return s.with_flags(cyanide=True)


def _thiamine(s: GameState) -> GameState:
    return s.with_flags(thiamine_low=True)


EVENT_DECK: tuple[Event, ...] = (
    Event(
        id="fed",
        title="Fed state",
        description="High insulin: glycolysis and glycogen synthesis favored. O₂ normal.",
        apply=_fed,
    ),
    Event(
        id="fasting",
        title="Fasting (24h)",
        description="Low insulin, high glucagon: glycogen use favored.",
        apply=_fasting,
    ),
    Event(
        id="exercise",
        title="Exercise burst",
        description=(
            "↑AMP and ↑Ca²⁺: PFK-1 + isocitrate DH activation. "
            "You gain +1 action this turn."
        ),
        apply=_exercise,
    ),
    Event(
        id="hypoxia",
        title="Hypoxia",
        description="O₂ limited → ETC stalls, NADH accumulates, NAD⁺ becomes precious.",
        apply=_hypoxia,
    ),
    Event(
        id="cyanide",
        title="Cyanide exposure",
        description="Complex IV inhibited → ETC offline even if O₂ present.",
        apply=_cyanide,
    ),
    Event(
        id="thiamine",
        title="Thiamine deficiency risk",
        description=(
            "PDH becomes unreliable. PDH gate may lock unless you compensate "
            "(via lactate route)."
        ),
        apply=_thiamine,
    ),
)

EVENTS_BY_ID = {event.id: event for event in EVENT_DECK}


def get_event(event_id: str) -> Event:
    """Look up an event by id."""
    try:
        return EVENTS_BY_ID[event_id]
    except KeyError:
        raise ValueError(f"Unknown event: {event_id}") from None


def draw_event(source: RandomSource) -> Event:
    """Draw one event uniformly from the deck."""
    return EVENT_DECK[source.pick(len(EVENT_DECK))]


def apply_event(state: GameState, event: Event | str) -> Outcome:
    """Apply an event card and record it as the last drawn event."""
    if isinstance(event, str):
        event = get_event(event)
    new_state = event.apply(state)._copy_with(last_event=event.id)
    return Outcome.note(new_state, event.log_line)
