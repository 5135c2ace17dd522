"""Diagnostics
-----------

Position adjustments never abort a rendering pass. Conditions a caller should
know about are recorded as ``Diagnostic`` entries in a ``DiagnosticLog`` that
is returned with the result, and are also emitted as warnings so they show up
in notebooks and logs:

- ``unanchored``: an existing interval is not anchored on the axis
- ``no_stack_var``: there is neither an interval nor a single value to stack
- ``removed_missing``: rows with missing positional values were dropped

Each category has its own ``StackingWarning`` subclass, which makes it easy to
filter or assert on a single condition.
"""

from __future__ import annotations

__all__ = [
    "DiagnosticCategory",
    "Diagnostic",
    "DiagnosticLog",
    "StackingWarning",
    "UnanchoredStackWarning",
    "NoStackVarWarning",
    "RemovedMissingWarning",
]

from dataclasses import dataclass
from typing import Dict, List, Literal

from stackpos import utils

DiagnosticCategory = Literal["unanchored", "no_stack_var", "removed_missing"]


class StackingWarning(UserWarning):
    """Base class for all advisory warnings raised by position adjustments."""


class UnanchoredStackWarning(StackingWarning):
    pass


class NoStackVarWarning(StackingWarning):
    pass


class RemovedMissingWarning(StackingWarning):
    pass


warning_classes: Dict[str, type[StackingWarning]] = {
    "unanchored": UnanchoredStackWarning,
    "no_stack_var": NoStackVarWarning,
    "removed_missing": RemovedMissingWarning,
}


@dataclass(frozen=True)
class Diagnostic:
    """A single advisory record."""

    category: DiagnosticCategory  # Stable identifier of the condition
    message: str  # Human readable description

    def __str__(self) -> str:
        return f"{self.category}: {self.message}"


class DiagnosticLog(List[Diagnostic]):
    """List of diagnostics collected over one call, with an emitting ``add``."""

    def __init__(self, emit_warnings: bool = True) -> None:
        super().__init__()
        self.emit_warnings = emit_warnings

    def add(self, category: DiagnosticCategory, message: str) -> Diagnostic:
        """Record a diagnostic and (unless disabled) emit the matching warning."""

        d = Diagnostic(category, message)
        self.append(d)
        if self.emit_warnings:
            utils.warn(message, warning_classes[category])
        return d

    def categories(self) -> List[str]:
        """Categories of the recorded diagnostics, in the order they fired."""

        return [d.category for d in self]
