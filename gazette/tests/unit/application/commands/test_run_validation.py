"""Unit tests for RunValidationHandler."""
from unittest.mock import Mock

import pytest

from gazette.application.commands.run_mapping import RunMappingCommand, RunMappingHandler
from gazette.application.commands.run_validation import RunValidationCommand, RunValidationHandler
from gazette.domain.exceptions import StageOrderViolation
from gazette.domain.services.schema_validator import SchemaValidator
from gazette.domain.value_objects.pipeline_stage import PipelineStage


@pytest.fixture
def mapped_session(session_repository, extracted_session):
    RunMappingHandler(session_repository).handle(RunMappingCommand("session-fr", "decree"))
    return session_repository.find_by_id("session-fr")


def test_reports_diagnostics_per_severity(session_repository, mapped_session):
    handler = RunValidationHandler(session_repository, SchemaValidator())

    result = handler.handle(RunValidationCommand("session-fr"))

    assert result["passed"] is True
    assert result["diagnostics"] == {"low": 1, "medium": 0, "high": 4, "critical": 0}
    report = session_repository.find_by_id("session-fr").validation
    assert report.target_id == "session-fr"


def test_validation_requires_mapping(session_repository, extracted_session):
    with pytest.raises(StageOrderViolation):
        RunValidationHandler(session_repository, SchemaValidator()).handle(RunValidationCommand("session-fr"))


def test_validator_failure_is_recorded(session_repository, mapped_session):
    validator = Mock()
    validator.validate.side_effect = RuntimeError("schema service down")

    with pytest.raises(RuntimeError):
        RunValidationHandler(session_repository, validator).handle(RunValidationCommand("session-fr", target_id="t-1"))

    stored = session_repository.find_by_id("session-fr")
    assert stored.validation is None
    assert stored.errors[PipelineStage.VALIDATION] == "schema service down"
    validator.validate.assert_called_once_with(stored.mapping, "t-1")
