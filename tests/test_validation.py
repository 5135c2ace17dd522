"""Tests for validation helpers in `stackpos.validation` and diagnostics records."""

import pytest
from pydantic import ValidationError

from stackpos.diagnostics import Diagnostic, DiagnosticLog, RemovedMissingWarning, StackingWarning
from stackpos.validation import PBase, PositionSpec, StackParams, hard_validate


def test_position_spec_defaults() -> None:
    """An empty spec describes a plain stack with labels on top."""
    spec = hard_validate({})
    assert spec == PositionSpec(position="stack", vjust=1.0, var=None)


def test_position_spec_rejects_unknown() -> None:
    with pytest.raises(ValidationError):
        hard_validate({"position": "stack", "reverse": True})
    with pytest.raises(ValidationError):
        hard_validate({"vjust": 2})
    with pytest.raises(ValidationError):
        hard_validate({"var": "x"})


def test_models_are_strict() -> None:
    """Unknown fields are rejected and only plain field types are allowed."""
    assert PBase.model_config["extra"] == "forbid"
    assert not PBase.model_config.get("arbitrary_types_allowed", False)
    with pytest.raises(ValidationError):
        StackParams(var="y", reverse=True)


def test_stack_params_frozen() -> None:
    params = StackParams(var="y")
    with pytest.raises(ValidationError):
        params.fill = True


def test_diagnostic_log() -> None:
    log = DiagnosticLog()
    with pytest.warns(RemovedMissingWarning, match="Removed 3 rows"):
        d = log.add("removed_missing", "Removed 3 rows containing missing values (position_stack).")
    assert d == Diagnostic("removed_missing", "Removed 3 rows containing missing values (position_stack).")
    assert str(d).startswith("removed_missing: ")
    assert log.categories() == ["removed_missing"]
    assert issubclass(RemovedMissingWarning, StackingWarning)

    quiet = DiagnosticLog(emit_warnings=False)
    quiet.add("unanchored", "not anchored")
    assert len(quiet) == 1
