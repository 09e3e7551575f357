"""
GetSessionStatus Query - reports how far a session has progressed.

Read-only: the session is fetched from the repository and never modified.
"""
from dataclasses import dataclass

from gazette.application.dto.session_dto import SessionStatusDTO
from gazette.domain.exceptions import EntityNotFoundError
from gazette.domain.repositories.session_repository import SessionRepository


@dataclass(frozen=True)
class GetSessionStatusQuery:
    """Query to get status of a specific session."""

    session_id: str


class GetSessionStatusHandler:
    """Handles GetSessionStatus queries."""

    def __init__(self, session_repository: SessionRepository):
        self._sessions = session_repository

    def handle(self, query: GetSessionStatusQuery) -> SessionStatusDTO:
        """
        Raises:
            EntityNotFoundError: If session not found
        """
        session = self._sessions.find_by_id(query.session_id)
        if session is None:
            raise EntityNotFoundError(
                "PipelineSession", query.session_id, message=f"Session with ID '{query.session_id}' not found"
            )
        return SessionStatusDTO.from_session(session)
