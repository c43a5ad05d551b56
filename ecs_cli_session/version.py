"""Version utility to read from environment or pyproject.toml"""

import os
import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as distribution_version
from pathlib import Path

DISTRIBUTION_NAME = "ecs-cli-session"


def get_version() -> str:
    """
    Read version from BUILD_VERSION environment variable, pyproject.toml or
    the installed distribution metadata.

    Priority:
    1. BUILD_VERSION environment variable (set by release builds from the git tag)
    2. pyproject.toml project.version (source checkout / editable install)
    3. installed distribution metadata
    4. "unknown" as fallback

    Returns:
        str: Version string (e.g., "0.3.0" or "0.3.1-dev.1")
    """
    if build_version := os.getenv("BUILD_VERSION"):
        return build_version

    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
        return data.get("project", {}).get("version", "unknown")
    except (OSError, tomllib.TOMLDecodeError):
        pass

    try:
        return distribution_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "unknown"


__version__ = get_version()
