"""Shared fixtures for Beeswax client tests."""

import pytest

from beeswax_client.client import BeeswaxClient
from tests.helpers.fake_beeswax import PASSWORD, FakeBeeswax


@pytest.fixture
def fake_api():
    """In-memory Beeswax API."""
    return FakeBeeswax()


@pytest.fixture
def client(fake_api):
    """Beeswax client wired to the fake API."""
    return BeeswaxClient(
        email="user@example.com",
        password=PASSWORD,
        transport=fake_api.transport(),
    )
