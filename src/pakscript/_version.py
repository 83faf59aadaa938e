"""
Version lookup for pakscript.

A source checkout reads ``[project] version`` from the repository's
pyproject.toml so that ``pakscript --version`` tracks edits without a
reinstall. An installed package reports its distribution metadata.
"""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

DISTRIBUTION_NAME = "pakscript"
UNKNOWN_VERSION = "0.0.0"

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _checkout_version() -> str | None:
    if not _PYPROJECT.is_file():
        return None
    try:
        data = tomllib.loads(_PYPROJECT.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError:
        return None
    project = data.get("project", {})
    if project.get("name") != DISTRIBUTION_NAME:
        return None
    version = project.get("version")
    return version if isinstance(version, str) else None


def get_version() -> str:
    """Version of the running pakscript, or "0.0.0" when it cannot be determined."""
    checkout = _checkout_version()
    if checkout is not None:
        return checkout
    try:
        return _metadata_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
