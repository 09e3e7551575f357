"""RunExtraction Command - first pipeline stage.

Runs page geometry, OCR and entity extraction over the document rasters and
stores the ExtractionResult on the session. Failures are recorded on the
session and re-raised; the previous extraction result, if any, is kept.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Sequence

import numpy as np

from gazette.domain.entities.extraction_result import ExtractionResult
from gazette.domain.exceptions import EntityNotFoundError
from gazette.domain.repositories.session_repository import SessionRepository
from gazette.domain.value_objects.pipeline_stage import PipelineStage


class Extractor(Protocol):
    def extract(self, rasters: Sequence[np.ndarray], document_id: Optional[str] = None) -> ExtractionResult: ...


@dataclass(frozen=True)
class RunExtractionCommand:
    session_id: str
    rasters: Sequence[np.ndarray]


class RunExtractionHandler:
    """Handles RunExtraction commands."""

    def __init__(self, session_repository: SessionRepository, extractor: Extractor):
        self._sessions = session_repository
        self._extractor = extractor

    def handle(self, command: RunExtractionCommand) -> Dict[str, Any]:
        session = self._sessions.find_by_id(command.session_id)
        if session is None:
            raise EntityNotFoundError("PipelineSession", command.session_id)

        session.enter(PipelineStage.EXTRACTION)
        try:
            result = self._extractor.extract(list(command.rasters), document_id=session.session_id)
        except Exception as exc:  # noqa: BLE001
            session.fail(PipelineStage.EXTRACTION, str(exc))
            self._sessions.save(session)
            raise

        session.complete(PipelineStage.EXTRACTION, result)
        self._sessions.save(session)
        return {
            "session_id": session.session_id,
            "stage": PipelineStage.EXTRACTION.value,
            "pages": len(result.pages),
            "failed_pages": result.failed_pages,
            "entities": len(result.entities),
            "tables": len(result.tables),
            "confidence": result.confidence.value,
        }
