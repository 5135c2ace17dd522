"""Stacking Positions
-------------------

Stack overlapping elements on top of one another.

``position_stack`` stacks bars, areas, points and labels that share an
x-position; ``position_fill`` additionally standardises each stack to have unit
height. Both build an immutable ``StackPosition`` and only differ in its
``fill`` flag.

Elements are stacked so their order follows the decreasing sort order of the
``group`` column. With an externally sorted categorical scale this makes the
stack order match the legend order.

Positive and negative values are stacked separately so that positive values
grow upwards from the x-axis and negative values grow downwards. Parity with
legend order cannot be ensured when positive and negative values are mixed.

The transform runs in three steps, mirroring the rest of the rendering
pipeline:

- ``setup_params``: pick the column to stack (``stack_var``)
- ``setup_data``: copy it into a working ``ymax`` and drop unusable rows
- ``compute_panel``: split by sign and run ``pos_stack`` per x-position

``StackPosition.apply`` chains them and returns the new table together with
the diagnostics that fired.
"""

from __future__ import annotations

__all__ = [
    "StackPosition",
    "StackResult",
    "position_stack",
    "position_fill",
    "stack_var",
    "pos_stack",
]

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

import numpy as np
import pandas as pd
from pydantic import ConfigDict

from stackpos import utils
from stackpos.diagnostics import DiagnosticLog
from stackpos.validation import Fraction, PBase, PositionSpec, StackParams, StackVar

logger = logging.getLogger(__name__)

# Columns that must be present for an element to be placed
required_vars = ("x", "xmin", "xmax", "y")


def stack_var(data: pd.DataFrame, log: DiagnosticLog) -> Optional[StackVar]:
    """Decide which column holds the height to stack.

    Args:
        data: Element table.
        log: Collector for diagnostics.

    Returns:
        ``"ymax"`` for interval elements, ``"y"`` for single value elements, or ``None``
        when neither is available (stacking is then skipped).
    """

    if "ymax" in data.columns:
        if "ymin" in data.columns:
            ymin, ymax = data["ymin"], data["ymax"]
            unanchored = ymin.notna() & ymax.notna() & (ymin != 0) & (ymax != 0)
            if unanchored.any():
                log.add("unanchored", "Stacking not well defined when not anchored on the axis")
        return "ymax"
    elif "y" in data.columns:
        return "y"
    else:
        log.add(
            "no_stack_var",
            "Stacking requires either ymin & ymax or y aesthetics. Maybe you want position = 'identity'?",
        )
        return None


def pos_stack(df: pd.DataFrame, vjust: float = 1.0, fill: bool = False) -> pd.DataFrame:
    """Stack all rows of one x-position on top of each other.

    Rows are expected in stacking order (decreasing group). Missing heights count as
    zero. With ``fill`` the boundaries are divided by the absolute total, so a stack
    with a zero total comes out as inf/NaN.

    Args:
        df: Rows sharing an x-position, with the height in ``ymax``.
        vjust: Fraction of the way from ``ymin`` to ``ymax`` where ``y`` is placed.
        fill: Whether to normalise the stack to unit height.

    Returns:
        Copy of ``df`` with ``ymin``, ``ymax`` and ``y`` replaced.
    """

    heights = np.concatenate([[0.0], np.cumsum(utils.na_to_zero(df["ymax"]))])

    if fill:
        with np.errstate(divide="ignore", invalid="ignore"):
            heights = heights / abs(heights[-1])

    # min/max as individual negative heights can flip a segment
    df = df.copy()
    df["ymin"] = np.minimum(heights[:-1], heights[1:])
    df["ymax"] = np.maximum(heights[:-1], heights[1:])
    with np.errstate(invalid="ignore"):
        df["y"] = (1 - vjust) * df["ymin"] + vjust * df["ymax"]
    return df


@dataclass
class StackResult:
    """Output of ``StackPosition.apply``."""

    data: pd.DataFrame  # Element table with ymin/ymax/y replaced (or the input itself on a no-op)
    params: StackParams
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    @property
    def is_noop(self) -> bool:
        return self.params.var is None


class StackPosition(PBase):
    """Immutable configuration of a stacking position adjustment."""

    model_config = ConfigDict(frozen=True)

    vjust: Fraction = 1.0  # 0 = bottom, 0.5 = middle, 1 = top of each segment
    fill: bool = False  # Normalise every stack to unit height
    var: Optional[StackVar] = None  # Force the stacking column instead of detecting it

    @classmethod
    def from_spec(cls, spec: PositionSpec | dict[str, object]) -> "StackPosition":
        """Build a position from a (possibly unvalidated) ``PositionSpec``."""

        spec = PositionSpec.model_validate(spec)
        return position_constructors[spec.position](vjust=spec.vjust, var=spec.var)

    def setup_params(self, data: pd.DataFrame, log: DiagnosticLog) -> StackParams:
        # A forced column the table doesn't have falls back to detection
        var = self.var if self.var in data.columns else stack_var(data, log)
        return StackParams(
            var=var,
            fill=self.fill,
            vjust=self.vjust,
        )

    def setup_data(self, data: pd.DataFrame, params: StackParams, log: DiagnosticLog) -> pd.DataFrame:
        """Copy the stacking column into ``ymax`` and drop rows that can't be placed."""

        if params.var is None:
            return data

        data = data.copy()
        if params.var == "y":
            data["ymax"] = data["y"]
        elif "ymin" in data.columns:
            # Elements whose value sits on the lower bound
            data["ymax"] = data["ymax"].where(data["ymax"] != 0, data["ymin"])

        data, n_removed = utils.remove_missing(data, required_vars, name="position_stack")
        if n_removed:
            log.add("removed_missing", f"Removed {n_removed} rows containing missing values (position_stack).")
        return data

    def compute_panel(self, data: pd.DataFrame, params: StackParams) -> pd.DataFrame:
        """Stack negative and non-negative rows separately, per x-position."""

        if params.var is None or len(data) == 0:
            return data

        key = utils.group_sort_key(data["group"]) if "group" in data.columns else np.zeros(len(data))
        negative = (pd.to_numeric(data["ymax"], errors="coerce") < 0).to_numpy(dtype=bool)
        logger.debug(f"Stacking {int(negative.sum())} negative and {int((~negative).sum())} non-negative rows")

        parts = []
        if negative.any():
            # Negate group so sorting order is consistent across the x-axis
            parts.append(
                utils.collide(
                    data[negative], pos_stack, key=-key[negative], vjust=params.vjust, fill=params.fill
                )
            )
        if (~negative).any():
            parts.append(
                utils.collide(
                    data[~negative], pos_stack, key=key[~negative], vjust=params.vjust, fill=params.fill
                )
            )

        return pd.concat(parts) if len(parts) > 1 else parts[0]

    def apply(self, data: pd.DataFrame, emit_warnings: bool = True) -> StackResult:
        """Run the full adjustment on one element table.

        Args:
            data: Element table with ``x``, ``group`` and ``y`` or ``ymin``/``ymax`` columns.
            emit_warnings: Whether diagnostics are also emitted as warnings.

        Returns:
            ``StackResult`` with the adjusted table and collected diagnostics. When no
            stacking column is available the input table is returned unchanged.
        """

        log = DiagnosticLog(emit_warnings=emit_warnings)
        params = self.setup_params(data, log)
        data = self.setup_data(data, params, log)
        data = self.compute_panel(data, params)
        return StackResult(data=data, params=params, diagnostics=log)


def position_stack(vjust: float = 1.0, var: Optional[StackVar] = None) -> StackPosition:
    """Stack overlapping elements on top of one another."""

    return StackPosition(vjust=vjust, fill=False, var=var)


def position_fill(vjust: float = 1.0, var: Optional[StackVar] = None) -> StackPosition:
    """Stack overlapping elements and standardise each stack to unit height."""

    return StackPosition(vjust=vjust, fill=True, var=var)


position_constructors: Dict[str, Callable[..., StackPosition]] = {
    "stack": position_stack,
    "fill": position_fill,
}
