"""
PipelineSession Entity - aggregate root for one in-flight document.

Holds the result of each stage and gates entry into the next one:
a stage is accessible only when every earlier stage has a result, and it is
completed once its own result exists. Entering or redoing a stage leaves the
results of later stages in place. The session performs no retries.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from gazette.domain.exceptions import StageOrderViolation

from ..value_objects.pipeline_stage import PipelineStage
from .extraction_result import ExtractionResult
from .mapping_result import MappingResult
from .validation_report import ValidationReport
from .workflow_decision import WorkflowDecision

logger = logging.getLogger(__name__)

_RESULT_TYPES = {
    PipelineStage.EXTRACTION: ExtractionResult,
    PipelineStage.MAPPING: MappingResult,
    PipelineStage.VALIDATION: ValidationReport,
    PipelineStage.WORKFLOW: WorkflowDecision,
}


@dataclass
class PipelineSession:
    session_id: str
    document_name: str
    current_stage: PipelineStage = PipelineStage.EXTRACTION
    results: Dict[PipelineStage, Any] = field(default_factory=dict)
    errors: Dict[PipelineStage, str] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, document_name: str, session_id: str | None = None) -> PipelineSession:
        return cls(session_id=session_id or str(uuid4()), document_name=document_name)

    # ==================== Gating ====================

    def result(self, stage: PipelineStage) -> Any:
        return self.results.get(stage)

    def is_completed(self, stage: PipelineStage) -> bool:
        return self.results.get(stage) is not None

    def can_access(self, stage: PipelineStage) -> bool:
        return all(self.is_completed(previous) for previous in stage.prerequisites())

    def require_access(self, stage: PipelineStage) -> None:
        """Raise StageOrderViolation, without touching the session, if ``stage`` is gated."""
        for previous in stage.prerequisites():
            if not self.is_completed(previous):
                raise StageOrderViolation(stage.value, previous.value)

    def enter(self, stage: PipelineStage) -> None:
        self.require_access(stage)
        if stage != self.current_stage:
            logger.info("Session %s entering stage %s", self.session_id, stage.value)
        self.current_stage = stage
        self.updated_at = datetime.now(timezone.utc)

    # ==================== Outcomes ====================

    def complete(self, stage: PipelineStage, result: Any) -> None:
        """Store the stage result; later stages keep theirs."""
        if result is None:
            raise ValueError(f"Stage '{stage.value}' cannot complete without a result")
        expected = _RESULT_TYPES[stage]
        if not isinstance(result, expected):
            raise TypeError(f"Stage '{stage.value}' expects {expected.__name__}, got {type(result).__name__}")
        self.require_access(stage)
        self.results[stage] = result
        self.errors.pop(stage, None)
        self.current_stage = stage
        self.updated_at = datetime.now(timezone.utc)
        logger.info("Session %s completed stage %s", self.session_id, stage.value)

    def fail(self, stage: PipelineStage, error: str) -> None:
        """Record a stage failure. Any earlier successful result of the stage is kept."""
        self.errors[stage] = error
        self.updated_at = datetime.now(timezone.utc)
        logger.warning("Session %s stage %s failed: %s", self.session_id, stage.value, error)

    @property
    def next_stage(self) -> Optional[PipelineStage]:
        """First stage without a result, or None once the workflow is decided."""
        for stage in PipelineStage.ordered():
            if not self.is_completed(stage):
                return stage
        return None

    @property
    def extraction(self) -> Optional[ExtractionResult]:
        return self.results.get(PipelineStage.EXTRACTION)

    @property
    def mapping(self) -> Optional[MappingResult]:
        return self.results.get(PipelineStage.MAPPING)

    @property
    def validation(self) -> Optional[ValidationReport]:
        return self.results.get(PipelineStage.VALIDATION)

    @property
    def workflow(self) -> Optional[WorkflowDecision]:
        return self.results.get(PipelineStage.WORKFLOW)

    # ==================== Serialization ====================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "document_name": self.document_name,
            "current_stage": self.current_stage.value,
            "results": {stage.value: value.to_dict() for stage, value in self.results.items()},
            "errors": {stage.value: message for stage, message in self.errors.items()},
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PipelineSession:
        results = {}
        for key, payload in (data.get("results") or {}).items():
            stage = PipelineStage(key)
            results[stage] = _RESULT_TYPES[stage].from_dict(payload)
        return cls(
            session_id=data["session_id"],
            document_name=data.get("document_name", ""),
            current_stage=PipelineStage(data.get("current_stage", PipelineStage.EXTRACTION.value)),
            results=results,
            errors={PipelineStage(key): value for key, value in (data.get("errors") or {}).items()},
            created_at=datetime.fromisoformat(data["created_at"]) if data.get("created_at") else datetime.now(timezone.utc),
            updated_at=datetime.fromisoformat(data["updated_at"]) if data.get("updated_at") else datetime.now(timezone.utc),
        )
