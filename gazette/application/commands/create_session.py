"""CreateSession Command - opens a pipeline session for one document."""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from gazette.domain.entities.pipeline_session import PipelineSession
from gazette.domain.exceptions import EntityValidationError
from gazette.domain.repositories.session_repository import SessionRepository


@dataclass(frozen=True)
class CreateSessionCommand:
    document_name: str
    session_id: Optional[str] = None


class CreateSessionHandler:
    """Handles CreateSession commands."""

    def __init__(self, session_repository: SessionRepository):
        self._sessions = session_repository

    def handle(self, command: CreateSessionCommand) -> Dict[str, Any]:
        if not command.document_name or not command.document_name.strip():
            raise EntityValidationError("PipelineSession", {"document_name": "Document name is required"})
        if command.session_id and self._sessions.exists(command.session_id):
            raise EntityValidationError(
                "PipelineSession",
                {"session_id": f"Session '{command.session_id}' already exists"},
            )

        session = PipelineSession.create(command.document_name.strip(), session_id=command.session_id)
        self._sessions.save(session)
        return {
            "session_id": session.session_id,
            "document_name": session.document_name,
            "current_stage": session.current_stage.value,
        }
