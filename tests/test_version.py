"""Package version metadata."""

import re
import tomllib
from pathlib import Path

import deckchart

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def test_version_matches_project_metadata() -> None:
    """Test the runtime version is the one the build declares."""
    with PYPROJECT.open("rb") as f:
        declared = tomllib.load(f)["project"]["version"]

    assert deckchart.__version__ == declared


def test_version_is_release_number() -> None:
    """Test the version is a plain MAJOR.MINOR.PATCH release."""
    assert re.fullmatch(r"\d+\.\d+\.\d+", deckchart.__version__)
