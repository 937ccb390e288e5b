"""
Configuration - run parameters, overridable from the environment.

    MITOESCAPE_SEED       Seed for the event deck (unset = nondeterministic)
    MITOESCAPE_MAX_TURNS  Turn limit of a run
    MITOESCAPE_LOG_LEVEL  Python logging level for the CLI
"""

from __future__ import annotations
from dataclasses import dataclass
import os

from .engine_core.events import MAX_ACTIONS


@dataclass(frozen=True)
class GameConfig:
    max_turns: int = 12
    actions_per_turn: int = 2
    log_limit: int = 60
    seed: int | None = None
    log_level: str = "WARNING"

    def __post_init__(self):
        if not 1 <= self.actions_per_turn <= MAX_ACTIONS:
            raise ValueError(
                f"actions_per_turn must be between 1 and {MAX_ACTIONS}, "
                f"got {self.actions_per_turn}"
            )


def _int_env(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_config(**overrides) -> GameConfig:
    """Build a GameConfig from MITOESCAPE_* variables plus explicit overrides."""
    values = {
        "seed": _int_env("MITOESCAPE_SEED", None),
        "max_turns": _int_env("MITOESCAPE_MAX_TURNS", GameConfig.max_turns),
        "log_level": os.getenv("MITOESCAPE_LOG_LEVEL", GameConfig.log_level).upper(),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return GameConfig(**values)
