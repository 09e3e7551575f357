"""
Data Transfer Objects for pipeline session queries.

Plain serializable views of a session for callers outside the domain layer.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from gazette.domain.entities.pipeline_session import PipelineSession
from gazette.domain.value_objects.pipeline_stage import PipelineStage


@dataclass(frozen=True)
class SessionStatusDTO:
    """DTO for session progress through the pipeline."""

    session_id: str
    document_name: str
    current_stage: str
    next_stage: Optional[str]
    completed_stages: List[str]
    created_at: datetime
    updated_at: datetime
    errors: Dict[str, str] = field(default_factory=dict)
    extraction_confidence: Optional[float] = None
    failed_pages: List[int] = field(default_factory=list)
    mapping_confidence: Optional[float] = None
    mapped_count: Optional[int] = None
    total_fields: Optional[int] = None
    validation_passed: Optional[bool] = None
    workflow_status: Optional[str] = None

    @classmethod
    def from_session(cls, session: PipelineSession) -> "SessionStatusDTO":
        extraction = session.extraction
        mapping = session.mapping
        validation = session.validation
        workflow = session.workflow
        next_stage = session.next_stage
        return cls(
            session_id=session.session_id,
            document_name=session.document_name,
            current_stage=session.current_stage.value,
            next_stage=next_stage.value if next_stage else None,
            completed_stages=[stage.value for stage in PipelineStage.ordered() if session.is_completed(stage)],
            created_at=session.created_at,
            updated_at=session.updated_at,
            errors={stage.value: message for stage, message in session.errors.items()},
            extraction_confidence=extraction.confidence.value if extraction else None,
            failed_pages=list(extraction.failed_pages) if extraction else [],
            mapping_confidence=mapping.overall_confidence.value if mapping else None,
            mapped_count=mapping.mapped_count if mapping else None,
            total_fields=mapping.total_fields if mapping else None,
            validation_passed=validation.passed if validation else None,
            workflow_status=workflow.status.value if workflow else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert DTO to dictionary."""
        return {
            "session_id": self.session_id,
            "document_name": self.document_name,
            "current_stage": self.current_stage,
            "next_stage": self.next_stage,
            "completed_stages": list(self.completed_stages),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "errors": dict(self.errors),
            "extraction_confidence": self.extraction_confidence,
            "failed_pages": list(self.failed_pages),
            "mapping_confidence": self.mapping_confidence,
            "mapped_count": self.mapped_count,
            "total_fields": self.total_fields,
            "validation_passed": self.validation_passed,
            "workflow_status": self.workflow_status,
        }


@dataclass(frozen=True)
class LowConfidenceFieldDTO:
    session_id: str
    document_name: str
    page: Optional[int]
    name: str
    label: str
    value: Optional[str]
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "document_name": self.document_name,
            "page": self.page,
            "name": self.name,
            "label": self.label,
            "value": self.value,
            "confidence": self.confidence,
        }
