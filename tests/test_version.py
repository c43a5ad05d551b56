"""Tests for version resolution."""

import re
from pathlib import Path

from ecs_cli_session.version import get_version


def get_pyproject_version():
    """Get version from pyproject.toml in the repo root."""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    with open(pyproject_path) as f:
        content = f.read()
        match = re.search(r'^version\s*=\s*"([^"]+)"', content, re.MULTILINE)
        if match:
            return match.group(1)
        raise ValueError("Could not find version in pyproject.toml")


def test_version_matches_pyproject():
    assert get_version() == get_pyproject_version()


def test_build_version_takes_precedence(monkeypatch):
    monkeypatch.setenv("BUILD_VERSION", "9.9.9-dev.1")

    assert get_version() == "9.9.9-dev.1"
