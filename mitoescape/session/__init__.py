"""
Session Module - Owns runs of the game.

A session represents one play-through:
- Created when the player starts a run
- Holds the current snapshot and log through its controller
- Dropped when the front end is done with it

Sessions are EPHEMERAL: nothing is persisted.
"""

from .controller import TurnController
from .manager import SessionManager, Session

__all__ = [
    "TurnController",
    "SessionManager",
    "Session",
]
