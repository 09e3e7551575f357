"""SubmitWorkflow Command - records the final decision on a session."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from gazette.domain.entities.workflow_decision import WorkflowDecision, WorkflowStatus
from gazette.domain.exceptions import EntityNotFoundError
from gazette.domain.repositories.session_repository import SessionRepository
from gazette.domain.value_objects.pipeline_stage import PipelineStage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmitWorkflowCommand:
    session_id: str
    status: WorkflowStatus
    reviewer: Optional[str] = None
    comments: str = ""

    def __post_init__(self):
        if not isinstance(self.status, WorkflowStatus):
            object.__setattr__(self, 'status', WorkflowStatus(self.status))


class SubmitWorkflowHandler:
    """Handles SubmitWorkflow commands."""

    def __init__(self, session_repository: SessionRepository):
        self._sessions = session_repository

    def handle(self, command: SubmitWorkflowCommand) -> Dict[str, Any]:
        session = self._sessions.find_by_id(command.session_id)
        if session is None:
            raise EntityNotFoundError("PipelineSession", command.session_id)

        session.enter(PipelineStage.WORKFLOW)
        decision = WorkflowDecision(
            status=command.status,
            reviewer=command.reviewer,
            comments=command.comments,
            final_data=session.mapping.final_data(),
        )
        if decision.status == WorkflowStatus.APPROVED and not session.validation.passed:
            logger.warning("Session %s approved with critical validation diagnostics", session.session_id)

        session.complete(PipelineStage.WORKFLOW, decision)
        self._sessions.save(session)
        return {"session_id": session.session_id, **decision.to_dict()}
