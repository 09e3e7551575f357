"""RunMapping Command - maps extracted entities onto a target form."""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from gazette.domain.exceptions import EntityNotFoundError
from gazette.domain.repositories.session_repository import SessionRepository
from gazette.domain.services.field_mapper import FieldMapper
from gazette.domain.value_objects.pipeline_stage import PipelineStage


@dataclass(frozen=True)
class RunMappingCommand:
    session_id: str
    form_type: str


class RunMappingHandler:
    """Handles RunMapping commands."""

    def __init__(self, session_repository: SessionRepository, field_mapper: Optional[FieldMapper] = None):
        self._sessions = session_repository
        self._mapper = field_mapper or FieldMapper()

    def handle(self, command: RunMappingCommand) -> Dict[str, Any]:
        session = self._sessions.find_by_id(command.session_id)
        if session is None:
            raise EntityNotFoundError("PipelineSession", command.session_id)

        session.enter(PipelineStage.MAPPING)
        try:
            # UnknownFormType leaves no partial mapping behind.
            mapping = self._mapper.map(session.extraction.entities, command.form_type)
        except Exception as exc:  # noqa: BLE001
            session.fail(PipelineStage.MAPPING, str(exc))
            self._sessions.save(session)
            raise

        session.complete(PipelineStage.MAPPING, mapping)
        self._sessions.save(session)
        return {
            "session_id": session.session_id,
            "stage": PipelineStage.MAPPING.value,
            "form_type": mapping.form_type.value,
            "mapped_fields": [item.field_name for item in mapping.mapped_fields],
            "unmapped_fields": list(mapping.unmapped_fields),
            "overall_confidence": mapping.overall_confidence.value,
        }
