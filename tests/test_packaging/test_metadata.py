"""Tests for the project metadata in pyproject.toml."""

import sys
import tarfile
import tomllib
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def test_requires_python_supports_tar_data_filter():
    project = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))["project"]
    # extractall(filter="data") first shipped in 3.11.4
    assert project["requires-python"] == ">=3.11.4"
    assert sys.version_info >= (3, 11, 4)
    assert hasattr(tarfile, "data_filter")
