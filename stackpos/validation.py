"""Validation Models
------------------

Pydantic models for position configuration:

- ``StackParams``: the resolved per-call parameters handed from
  ``setup_params`` to ``setup_data`` / ``compute_panel``
- ``PositionSpec``: the serialisable description of a position adjustment
  (what a YAML/JSON spec file or the CLI produces)
- ``hard_validate``, the strict entry point for spec dictionaries

The immutable ``StackPosition`` configuration itself lives in
``stackpos.position`` next to the algorithm that consumes it.
"""

from __future__ import annotations

__all__ = [
    "PBase",
    "StackVar",
    "PositionType",
    "Fraction",
    "StackParams",
    "PositionSpec",
    "hard_validate",
]

from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

StackVar = Literal["y", "ymax"]
PositionType = Literal["stack", "fill"]

Fraction = Annotated[float, Field(ge=0.0, le=1.0)]


# Define a new base that is more strict towards unknown inputs
class PBase(BaseModel):
    model_config = ConfigDict(extra="forbid", protected_namespaces=())


class StackParams(PBase):
    """Parameters resolved once per rendering pass."""

    model_config = ConfigDict(frozen=True)

    var: Optional[StackVar] = None  # Column to stack on; None turns stacking into a no-op
    fill: bool = False  # Normalise every stack to unit height
    vjust: Fraction = 1.0  # Where inside its interval the representative y is placed


class PositionSpec(PBase):
    """Serialisable description of a stacking position (``position: stack`` in a spec file)."""

    position: PositionType = "stack"  # 'fill' additionally normalises each stack
    vjust: Fraction = 1.0  # 0 = bottom, 0.5 = middle, 1 = top of each segment
    var: Optional[StackVar] = None  # Force the stacking column instead of detecting it


def hard_validate(m: dict[str, object] | PositionSpec) -> PositionSpec:
    """Validate a position spec, raising errors on failure.

    Args:
        m: Dictionary or PositionSpec object to validate.

    Returns:
        The validated PositionSpec.

    Raises:
        ValueError: If validation fails.
    """
    return PositionSpec.model_validate(m)

