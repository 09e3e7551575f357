"""RunValidation Command - checks the mapping result against its form schema."""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from gazette.config import get_settings
from gazette.domain.entities.validation_report import Severity
from gazette.domain.exceptions import EntityNotFoundError
from gazette.domain.repositories.session_repository import SessionRepository
from gazette.domain.services.schema_validator import MappingValidator, SchemaValidator
from gazette.domain.value_objects.pipeline_stage import PipelineStage


@dataclass(frozen=True)
class RunValidationCommand:
    session_id: str
    target_id: Optional[str] = None


class RunValidationHandler:
    """Handles RunValidation commands."""

    def __init__(self, session_repository: SessionRepository, validator: Optional[MappingValidator] = None):
        self._sessions = session_repository
        self._validator = validator or SchemaValidator(get_settings().confidence_low_threshold)

    def handle(self, command: RunValidationCommand) -> Dict[str, Any]:
        session = self._sessions.find_by_id(command.session_id)
        if session is None:
            raise EntityNotFoundError("PipelineSession", command.session_id)

        session.enter(PipelineStage.VALIDATION)
        try:
            report = self._validator.validate(session.mapping, command.target_id or session.session_id)
        except Exception as exc:  # noqa: BLE001
            session.fail(PipelineStage.VALIDATION, str(exc))
            self._sessions.save(session)
            raise

        session.complete(PipelineStage.VALIDATION, report)
        self._sessions.save(session)
        return {
            "session_id": session.session_id,
            "stage": PipelineStage.VALIDATION.value,
            "passed": report.passed,
            "diagnostics": {severity.value: len(report.by_severity(severity)) for severity in Severity},
        }
