"""Input and Output
----------------

File helpers used by the command line tool and by notebooks:

- ``read_elements`` / ``write_elements`` move element tables between pandas
  and ``.csv``, ``.parquet`` or record-oriented ``.json`` files
- ``read_position_spec`` loads a YAML or JSON position spec and validates it
  into a ``PositionSpec``
"""

from __future__ import annotations

__all__ = [
    "read_elements",
    "write_elements",
    "read_position_spec",
]

import logging
import os

import pandas as pd

from stackpos.utils import read_json, read_yaml
from stackpos.validation import PositionSpec, hard_validate

logger = logging.getLogger(__name__)


def _extension(fname: str) -> str:
    return os.path.splitext(fname)[1].lower()


def read_elements(fname: str) -> pd.DataFrame:
    """Read an element table from disk.

    Args:
        fname: Path to a ``.csv``, ``.parquet`` or ``.json`` (list of records) file.

    Returns:
        The element table.

    Raises:
        FileNotFoundError: If the extension is not supported.
    """

    ext = _extension(fname)
    if ext == ".csv":
        df = pd.read_csv(fname, low_memory=False)
    elif ext == ".parquet":
        df = pd.read_parquet(fname)
    elif ext == ".json":
        df = pd.read_json(fname, orient="records")
    else:
        raise FileNotFoundError(f"Unsupported element table format for {fname}")

    logger.info(f"Read {len(df)} rows from {fname}")
    return df


def write_elements(df: pd.DataFrame, fname: str) -> None:
    """Write an element table; the format follows the extension of ``fname``."""

    ext = _extension(fname)
    if ext == ".csv":
        df.to_csv(fname, index=False)
    elif ext == ".parquet":
        df.to_parquet(fname, index=False)
    elif ext == ".json":
        df.to_json(fname, orient="records")
    else:
        raise FileNotFoundError(f"Unsupported element table format for {fname}")

    logger.info(f"Wrote {len(df)} rows to {fname}")


def read_position_spec(fname: str) -> PositionSpec:
    """Load a position spec from a ``.yaml``/``.yml`` or ``.json`` file.

    Raises:
        ValueError: If the content does not describe a valid position.
    """

    raw = read_json(fname) if _extension(fname) == ".json" else read_yaml(fname)
    return hard_validate(raw or {})
