"""ReviewField Command - accept, edit or reject one mapped field.

Review happens on the stored mapping result and does not move the session
between stages. The handler answers with a Notification for the reviewer.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from gazette.domain.entities.mapped_field import MappingActionType
from gazette.domain.exceptions import EntityNotFoundError, EntityValidationError
from gazette.domain.repositories.session_repository import SessionRepository
from gazette.domain.value_objects.notification import Notification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewFieldCommand:
    session_id: str
    field_name: str
    action: MappingActionType
    new_value: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.action, MappingActionType):
            object.__setattr__(self, 'action', MappingActionType(self.action))


class ReviewFieldHandler:
    """Handles ReviewField commands."""

    def __init__(self, session_repository: SessionRepository):
        self._sessions = session_repository

    def handle(self, command: ReviewFieldCommand) -> Notification:
        session = self._sessions.find_by_id(command.session_id)
        if session is None:
            raise EntityNotFoundError("PipelineSession", command.session_id)
        mapping = session.mapping
        if mapping is None:
            raise EntityValidationError("PipelineSession", {"mapping": "No mapping result to review"})

        if command.action == MappingActionType.ACCEPT:
            target = mapping.accept(command.field_name)
            notification = Notification.success(
                f"Accepted {target.label} (confidence {target.confidence})", target.field_name
            )
        elif command.action == MappingActionType.EDIT:
            if command.new_value is None or not command.new_value.strip():
                raise EntityValidationError("MappedField", {"new_value": "An edit needs a non-empty value"})
            target = mapping.edit(command.field_name, command.new_value.strip())
            notification = Notification.success(
                f"Updated {target.label} (confidence {target.confidence})", target.field_name
            )
        else:
            target = mapping.reject(command.field_name)
            notification = Notification.info(f"Rejected {target.label}", target.field_name)

        self._sessions.save(session)
        logger.info(
            "Session %s: %s %s, %d/%d fields confirmed",
            session.session_id, command.action.value, command.field_name,
            mapping.mapped_count, mapping.total_fields,
        )
        if target.confidence.is_low():
            return Notification.warning(f"{notification.message}; confidence is still low", target.field_name)
        return notification
