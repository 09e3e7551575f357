"""In-process implementation of SessionRepository."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, List, Optional

from gazette.domain.entities.pipeline_session import PipelineSession
from gazette.domain.repositories.session_repository import SessionRepository

logger = logging.getLogger(__name__)


class InMemorySessionRepository(SessionRepository):
    """Keeps sessions in a dict guarded by a lock. Contents are lost on exit."""

    def __init__(self) -> None:
        self._sessions: Dict[str, PipelineSession] = {}
        self._lock = Lock()

    def save(self, session: PipelineSession) -> None:
        with self._lock:
            self._sessions[session.session_id] = session
        logger.debug("Saved session %s (stage=%s)", session.session_id, session.current_stage.value)

    def find_by_id(self, session_id: str) -> Optional[PipelineSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def find_all(self, limit: Optional[int] = None, offset: int = 0) -> List[PipelineSession]:
        with self._lock:
            sessions = list(self._sessions.values())
        sessions.sort(key=lambda session: session.created_at, reverse=True)
        end = None if limit is None else offset + limit
        return sessions[offset:end]

    def delete(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.info("Deleted session %s", session_id)
        return removed is not None

    def exists(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions
