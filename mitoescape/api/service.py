"""
API Service - Intent facade between a front end and the engine.

The service:
1. Translates intents to controller calls
2. Manages runs through the SessionManager
3. Formats every result as a GameSnapshot

This layer is framework-agnostic; any UI can call it directly.
Contract violations (unknown run, reaction or room) come back as
ErrorResponse objects instead of propagating.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Union

from .schemas import (
    ErrorCode,
    ErrorResponse,
    GameSnapshot,
    SessionListResponse,
    EndSessionResponse,
    snapshot_from_state,
)
from ..engine_core.errors import EngineContractError
from ..engine_core.events import RandomSource
from ..session import SessionManager, Session, TurnController


SnapshotOrError = Union[GameSnapshot, ErrorResponse]


@dataclass
class GameService:
    """
    Main service for front ends.

    Usage:
        service = GameService()

        snapshot = service.create_session(seed=7)
        snapshot = service.perform_reaction(snapshot.session_id, "glycolysis")
        snapshot = service.advance_turn(snapshot.session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(
        self,
        seed: int | None = None,
        random_source: RandomSource | None = None,
    ) -> GameSnapshot:
        """Start a new run and return its opening snapshot."""
        session = self.session_manager.create_session(
            seed=seed, random_source=random_source
        )
        return self._snapshot(session)

    def get_snapshot(self, session_id: str) -> SnapshotOrError:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._snapshot(session)

    def perform_reaction(self, session_id: str, kind: str) -> SnapshotOrError:
        return self._dispatch(session_id, lambda c: c.perform_reaction(kind))

    def advance_turn(self, session_id: str) -> SnapshotOrError:
        return self._dispatch(session_id, lambda c: c.advance_turn())

    def select_room(self, session_id: str, room_id: str) -> SnapshotOrError:
        return self._dispatch(session_id, lambda c: c.select_room(room_id))

    def reset(self, session_id: str) -> SnapshotOrError:
        return self._dispatch(session_id, lambda c: c.reset())

    def end_session(self, session_id: str) -> EndSessionResponse:
        """End a run and drop its state."""
        success = self.session_manager.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    def list_sessions(self) -> SessionListResponse:
        """List runs still in progress."""
        sessions = self.session_manager.list_active_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _dispatch(
        self,
        session_id: str,
        intent: Callable[[TurnController], object],
    ) -> SnapshotOrError:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        try:
            intent(session.controller)
        except EngineContractError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode(e.error_code))

        return self._snapshot(session)

    def _snapshot(self, session: Session) -> GameSnapshot:
        controller = session.controller
        return snapshot_from_state(
            controller.state,
            log=controller.log,
            session_id=session.session_id,
        )

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Run not found: {session_id}",
            error_code=ErrorCode.RUN_NOT_FOUND,
        )
