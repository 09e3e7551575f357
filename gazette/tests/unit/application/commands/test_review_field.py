"""Unit tests for ReviewFieldHandler."""
import pytest

from gazette.application.commands.review_field import ReviewFieldCommand, ReviewFieldHandler
from gazette.application.commands.run_mapping import RunMappingCommand, RunMappingHandler
from gazette.domain.entities.mapped_field import MappingActionType
from gazette.domain.exceptions import EntityNotFoundError, EntityValidationError
from gazette.domain.value_objects.confidence import Confidence
from gazette.domain.value_objects.notification import NotificationLevel


@pytest.fixture
def handler(session_repository, extracted_session):
    RunMappingHandler(session_repository).handle(RunMappingCommand("session-fr", "decree"))
    return ReviewFieldHandler(session_repository)


def test_accept(handler, session_repository):
    notification = handler.handle(ReviewFieldCommand("session-fr", "number", "accept"))

    assert notification.level == NotificationLevel.SUCCESS
    assert notification.field_name == "number"
    mapping = session_repository.find_by_id("session-fr").mapping
    assert mapping.get_field("number").mapped_value == "20-123"
    assert mapping.mapped_count == 1


def test_edit(handler, session_repository):
    notification = handler.handle(
        ReviewFieldCommand("session-fr", "signatory", MappingActionType.EDIT, new_value=" Abdelaziz Djerad ")
    )

    assert notification.level == NotificationLevel.SUCCESS
    field = session_repository.find_by_id("session-fr").mapping.get_field("signatory")
    assert field.mapped_value == "Abdelaziz Djerad"
    assert field.is_edited


@pytest.mark.parametrize("value", [None, "", "   "])
def test_edit_needs_a_value(handler, session_repository, value):
    with pytest.raises(EntityValidationError):
        handler.handle(ReviewFieldCommand("session-fr", "signatory", "edit", new_value=value))
    assert session_repository.find_by_id("session-fr").mapping.manual_interventions == 0


def test_reject(handler):
    notification = handler.handle(ReviewFieldCommand("session-fr", "references", "reject"))
    assert notification.level == NotificationLevel.INFO


def test_low_confidence_field_warns(handler, session_repository):
    mapping = session_repository.find_by_id("session-fr").mapping
    mapping.get_field("institution").confidence = Confidence(0.2)

    notification = handler.handle(ReviewFieldCommand("session-fr", "institution", "accept"))

    assert notification.level == NotificationLevel.WARNING


def test_unknown_field(handler):
    with pytest.raises(EntityNotFoundError):
        handler.handle(ReviewFieldCommand("session-fr", "annexe", "accept"))


def test_review_without_mapping(session_repository, extracted_session):
    with pytest.raises(EntityValidationError):
        ReviewFieldHandler(session_repository).handle(ReviewFieldCommand("session-fr", "title", "accept"))


def test_unknown_action():
    with pytest.raises(ValueError):
        ReviewFieldCommand("session-fr", "title", "approve")
