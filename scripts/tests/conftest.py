"""
Shared fixtures for the clean and merge tests.

To run: type "pytest" from the repository root.
"""
import logging
import textwrap

import pytest


@pytest.fixture
def logger():
    """Logger handed to the cleaning and merge functions"""
    return logging.getLogger("test_merge")


@pytest.fixture
def write_csv(tmp_path):
    """Writes a dedented CSV body into tmp_path and returns its path as a string"""

    def _write(name, body):
        fpath = tmp_path / name
        fpath.parent.mkdir(parents=True, exist_ok=True)
        fpath.write_text(textwrap.dedent(body).lstrip("\n"), encoding="utf-8")
        return str(fpath)

    return _write
