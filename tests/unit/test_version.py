"""Tests for the version module."""

import re
from importlib.metadata import PackageNotFoundError
from unittest.mock import patch

from beeswax_client.version import get_version


def test_get_version_returns_valid_semver():
    """get_version should return a valid semantic version string."""
    version = get_version()

    assert isinstance(version, str)
    assert re.match(r"^\d+\.\d+\.\d+", version), f"Version '{version}' doesn't match semver pattern"


@patch("beeswax_client.version.version", side_effect=PackageNotFoundError("beeswax-client"))
def test_get_version_fallback_when_not_installed(mock_version):
    assert get_version() == "0.0.0"


def test_user_agent_carries_version(client):
    assert client._http.headers["User-Agent"] == f"beeswax-client/{get_version()}"
