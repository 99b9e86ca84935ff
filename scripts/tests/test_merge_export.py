"""
This script runs tests that the merged CSV is formatted and written as expected
"""

import os

import pandas as pd
import pytest

from merge_errors import WriteError
from merge_export import format_merged, write_merged_csv

COLUMNS = ["t", "danshui", "yelizovo"]


@pytest.fixture
def merged():
    return pd.DataFrame(
        {
            "t": pd.to_datetime(["2020-01-01", "2020-01-03"]),
            "danshui": [15.0, 0.1 + 0.2],
            "yelizovo": [-0.5555555555555556, 3.0],
        }
    )


def test_formatting(merged):
    """Test shortest round-trip formatting and the one-decimal field"""
    text = format_merged(merged, COLUMNS, ["yelizovo"])
    assert list(text["t"]) == ["2020-01-01", "2020-01-03"]
    assert list(text["danshui"]) == ["15", "0.30000000000000004"]
    assert list(text["yelizovo"]) == ["-0.6", "3.0"]


def test_write_merged_csv(merged, tmp_path, logger):
    """Test that the header and rows are written with newline line endings"""
    dst = tmp_path / "data.csv"
    write_merged_csv(merged, str(dst), COLUMNS, ["yelizovo"], logger)
    assert dst.read_bytes() == (
        b"t,danshui,yelizovo\n"
        b"2020-01-01,15,-0.6\n"
        b"2020-01-03,0.30000000000000004,3.0\n"
    )
    # No temporary file left behind
    assert os.listdir(tmp_path) == ["data.csv"]


def test_write_empty_merge(tmp_path, logger):
    """Test that an empty merge still writes the header"""
    empty = pd.DataFrame(
        {"t": pd.to_datetime([]), "danshui": [], "yelizovo": []}
    )
    dst = tmp_path / "data.csv"
    write_merged_csv(empty, str(dst), COLUMNS, ["yelizovo"], logger)
    assert dst.read_text() == "t,danshui,yelizovo\n"


def test_unwritable_destination(merged, tmp_path, logger):
    """Test that a destination in a missing directory raises WriteError and writes nothing"""
    dst = tmp_path / "missing_dir" / "data.csv"
    with pytest.raises(WriteError):
        write_merged_csv(merged, str(dst), COLUMNS, ["yelizovo"], logger)
    assert not dst.parent.exists()


def test_failed_replace_keeps_previous_file(merged, tmp_path, logger, monkeypatch):
    """Test that a failure before the final replace leaves the old output intact and cleans up"""
    dst = tmp_path / "data.csv"
    dst.write_text("previous\n")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", broken_replace)
    with pytest.raises(WriteError):
        write_merged_csv(merged, str(dst), COLUMNS, ["yelizovo"], logger)
    assert dst.read_text() == "previous\n"
    assert os.listdir(tmp_path) == ["data.csv"]


def test_unexpected_failure_cleans_up(merged, tmp_path, logger, monkeypatch):
    """Test that an error other than OSError while writing propagates and removes the temporary file"""
    dst = tmp_path / "data.csv"

    def broken_to_csv(self, *args, **kwargs):
        raise ValueError("bad frame")

    monkeypatch.setattr(pd.DataFrame, "to_csv", broken_to_csv)
    with pytest.raises(ValueError):
        write_merged_csv(merged, str(dst), COLUMNS, ["yelizovo"], logger)
    assert os.listdir(tmp_path) == []
