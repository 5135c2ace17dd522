"""Utilities
---------

Cross-cutting helpers used by the position adjustments, IO and CLI layers:

- ``warn`` for diagnostics that point at the caller instead of this module
- dataframe helpers for missing values (``na_to_zero``, ``remove_missing``)
- ``collide``, the per-x-position dispatcher that hands each subset of rows
  to a pluggable strategy function
- small file readers for position spec files

If you need a generic helper, check this file before adding another bespoke
version elsewhere.
"""

from __future__ import annotations

__all__ = [
    "warn",
    "na_to_zero",
    "remove_missing",
    "group_sort_key",
    "collide",
    "read_json",
    "read_yaml",
]

import json
import logging
import warnings
from typing import Callable, Sequence

import numpy as np
import pandas as pd
import yaml

logger = logging.getLogger(__name__)

JSONValue = str | int | float | bool | None | dict[str, "JSONValue"] | list["JSONValue"]

# Strategy applied to all rows sharing one x-position
Strategy = Callable[..., pd.DataFrame]


# convenience for warnings that gives a more useful stack frame (fn calling the warning, not warning fn itself)
def warn(msg: str, *args: object) -> None:
    """Emit a warning while pointing at the caller instead of this helper.

    Args:
        msg: Warning message to display.
        *args: Additional positional arguments forwarded to `warnings.warn`.
    """
    # mypy doesn't handle *args well with warn overloads
    warnings.warn(msg, *args, stacklevel=3)  # type: ignore[call-overload]


def na_to_zero(s: pd.Series | Sequence[float]) -> np.ndarray:
    """Map missing values to ``0.0`` so they contribute nothing to a cumulative sum.

    Args:
        s: Series or sequence of (possibly missing) numeric values.

    Returns:
        Float numpy array of the same length with every missing value replaced by zero.
    """

    arr = pd.to_numeric(pd.Series(s), errors="coerce").to_numpy(dtype="float", na_value=np.nan)
    return np.where(np.isnan(arr), 0.0, arr)


def remove_missing(
    df: pd.DataFrame,
    vars: Sequence[str],
    name: str = "",
) -> tuple[pd.DataFrame, int]:
    """Drop rows that have a missing value in any of ``vars``.

    Only the columns in ``vars`` that are actually present are considered.

    Args:
        df: Input dataframe.
        vars: Columns that must not be missing.
        name: Name of the caller, used in the log line.

    Returns:
        Tuple of the filtered dataframe (a copy) and the number of removed rows.
    """

    cols = [c for c in vars if c in df.columns]
    if not cols:
        return df.copy(), 0

    keep = df[cols].notna().all(axis=1)
    n_removed = int((~keep).sum())
    if n_removed:
        logger.debug(f"{name or 'remove_missing'}: dropping {n_removed} rows with missing {cols}")
    return df.loc[keep].copy(), n_removed


def group_sort_key(s: pd.Series) -> np.ndarray:
    """Return a numeric key that orders rows by their group identifier.

    Numeric groups are used as-is, anything else is replaced by its sorted factor code
    (categoricals keep their category order).
    """

    if pd.api.types.is_bool_dtype(s):
        return s.to_numpy(dtype="float")
    if pd.api.types.is_numeric_dtype(s):
        return s.to_numpy(dtype="float", na_value=np.nan)
    if isinstance(s.dtype, pd.CategoricalDtype):
        codes = s.cat.codes.to_numpy(dtype="float")
    else:
        codes, _ = pd.factorize(s, sort=True)
        codes = codes.astype("float")
    codes[codes < 0] = np.nan  # Missing groups
    return codes


def _x_column(df: pd.DataFrame) -> str:
    if "xmin" in df.columns:
        return "xmin"
    if "x" in df.columns:
        return "x"
    raise ValueError("collide requires either an x or an xmin column")


def _x_rank(s: pd.Series) -> np.ndarray:
    """Rank of each row's x-position; categoricals follow their category order."""

    codes, uniques = pd.factorize(s, use_na_sentinel=False)
    if isinstance(uniques, pd.Categorical):
        order = np.argsort(uniques.codes, kind="stable")
    else:
        try:
            order = np.argsort(np.asarray(uniques), kind="stable")
        except TypeError:
            # Mixed types (e.g. strings and numbers) have no total order, keep first appearance
            order = np.arange(len(uniques))
    rank = np.empty(len(uniques), dtype="int")
    rank[order] = np.arange(len(uniques))
    return rank[codes]


def collide(
    df: pd.DataFrame,
    strategy: Strategy,
    by: str | None = None,
    key: np.ndarray | None = None,
    **params: object,
) -> pd.DataFrame:
    """Apply ``strategy`` to each set of rows sharing an x-position.

    Rows are stably sorted by x-position and then by decreasing ``key`` (ties keep the
    original row order) before being split, so the strategy always receives rows in
    stacking order.

    Args:
        df: Rows to process.
        strategy: Function called as ``strategy(subset, **params)`` for each x-position.
        by: Column holding the x-position. Defaults to ``xmin`` if present, else ``x``.
        key: Per-row ordering key. Defaults to ``group_sort_key(df["group"])`` and to
            the original order when there is no ``group`` column.
        **params: Extra keyword arguments forwarded to ``strategy``.

    Returns:
        Concatenation of the strategy outputs in x order.
    """

    if len(df) == 0:
        return df

    by = by or _x_column(df)
    if key is None:
        key = group_sort_key(df["group"]) if "group" in df.columns else np.zeros(len(df))

    # Missing keys go last, as in a decreasing sort
    neg_key = np.where(np.isnan(key), np.inf, -np.asarray(key, dtype="float"))
    sdf = df.iloc[np.lexsort((neg_key, _x_rank(df[by])))]

    # Groups come out in order of first appearance, which is x order after the sort
    groups = sdf.groupby(by, sort=False, observed=True, dropna=False)
    pieces = [strategy(g, **params) for _, g in groups]
    return pd.concat(pieces) if len(pieces) > 1 else pieces[0]


def read_json(fname: str) -> JSONValue:
    """Load JSON file with extension sanity checks."""

    if ".json" not in fname:
        raise FileNotFoundError(f"Expecting {fname} to have a .json extension")
    with open(fname, "r") as jf:
        meta = json.load(jf)
    return meta


def read_yaml(fname: str) -> JSONValue:
    """Load YAML file with extension sanity checks."""

    if ".yaml" not in fname and ".yml" not in fname:
        raise FileNotFoundError(f"Expecting {fname} to have a .yaml extension")
    with open(fname) as stream:
        return yaml.safe_load(stream)
