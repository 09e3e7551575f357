"""Query handler for retrieving low-confidence mapped fields."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from gazette.application.dto.session_dto import LowConfidenceFieldDTO
from gazette.domain.repositories.session_repository import SessionRepository
from gazette.domain.services.confidence_calculator import ConfidenceCalculator


@dataclass(frozen=True)
class ListLowConfidenceFieldsQuery:
    """Query parameters for low-confidence field retrieval."""

    limit: Optional[int] = 50
    session_id: Optional[str] = None


class ListLowConfidenceFieldsHandler:
    """Collects mapped fields needing review across sessions."""

    def __init__(self, session_repository: SessionRepository, confidence_calculator: ConfidenceCalculator | None = None):
        self._sessions = session_repository
        self._confidence = confidence_calculator or ConfidenceCalculator()

    def handle(self, query: ListLowConfidenceFieldsQuery) -> List[LowConfidenceFieldDTO]:
        limit = query.limit
        if limit is not None and limit <= 0:
            return []

        results: List[LowConfidenceFieldDTO] = []
        for session in self._sessions.find_all():
            if query.session_id and session.session_id != query.session_id:
                continue
            if session.mapping is None:
                continue

            for entry in self._confidence.extract_low_confidence_fields(session.mapping):
                results.append(
                    LowConfidenceFieldDTO(
                        session_id=session.session_id,
                        document_name=session.document_name,
                        page=entry["page"],
                        name=entry["name"],
                        label=entry["label"],
                        value=entry["value"],
                        confidence=float(entry["confidence"]),
                    )
                )

        results.sort(key=lambda item: (item.confidence, item.session_id, item.name))
        if limit is None:
            return results
        return results[:limit]
