"""Tests for reading and writing element tables and position specs."""

import json

import pandas as pd
import pytest
from pandas.testing import assert_frame_equal
from pydantic import ValidationError

from stackpos.io import read_elements, read_position_spec, write_elements


@pytest.fixture
def elements():
    return pd.DataFrame({"x": ["a", "a", "b"], "y": [1.5, 2.5, 3.25], "group": [1, 2, 1]})


@pytest.mark.parametrize("ext", [".csv", ".parquet", ".json"])
def test_roundtrip(tmp_path, elements, ext):
    fname = str(tmp_path / f"elements{ext}")
    write_elements(elements, fname)
    assert_frame_equal(read_elements(fname), elements)


def test_unsupported_extension(tmp_path, elements):
    with pytest.raises(FileNotFoundError):
        write_elements(elements, str(tmp_path / "elements.xlsx"))
    with pytest.raises(FileNotFoundError):
        read_elements(str(tmp_path / "elements.txt"))


def test_read_position_spec(tmp_path):
    yf = tmp_path / "position.yaml"
    yf.write_text("position: fill\nvjust: 0.5\n")
    spec = read_position_spec(str(yf))
    assert spec.position == "fill"
    assert spec.vjust == 0.5

    jf = tmp_path / "position.json"
    jf.write_text(json.dumps({"var": "ymax"}))
    assert read_position_spec(str(jf)).var == "ymax"

    empty = tmp_path / "empty.yml"
    empty.write_text("")
    assert read_position_spec(str(empty)).position == "stack"

    bad = tmp_path / "bad.yaml"
    bad.write_text("position: dodge\n")
    with pytest.raises(ValidationError):
        read_position_spec(str(bad))
