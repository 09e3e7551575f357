"""Session repository interface (Abstract Base Class)."""

from abc import ABC, abstractmethod
from typing import List, Optional

from gazette.domain.entities.pipeline_session import PipelineSession


class SessionRepository(ABC):
    """Abstract repository for PipelineSession aggregates."""

    @abstractmethod
    def save(self, session: PipelineSession) -> None:
        """Persist the given session aggregate."""

    @abstractmethod
    def find_by_id(self, session_id: str) -> Optional[PipelineSession]:
        """Return the session with the provided identifier, if it exists."""

    @abstractmethod
    def find_all(self, limit: Optional[int] = None, offset: int = 0) -> List[PipelineSession]:
        """Return sessions ordered by creation time, newest first."""

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Delete the session; return True if removed."""

    @abstractmethod
    def exists(self, session_id: str) -> bool:
        """Return True when the session is stored."""
