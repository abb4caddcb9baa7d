"""
Pytest configuration and shared fixtures for smartcast_client tests.
"""

import pytest
import pytest_asyncio

from smartcast_client import SmartcastClient, SmartcastClientConfig
from smartcast_client.emulator import SmartcastEmulator

from fakes import FakeTransport


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep SMARTCAST_* variables from the developer's shell out of the tests."""
    for name in ("SMARTCAST_HOST", "SMARTCAST_PORT", "SMARTCAST_AUTH_TOKEN", "SMARTCAST_CONFIG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def client(fake_transport):
    """A client over the fake transport, already holding an auth token."""
    return SmartcastClient(fake_transport, auth_token="test-token", config=SmartcastClientConfig())


@pytest.fixture
def unpaired_client(fake_transport):
    return SmartcastClient(fake_transport, config=SmartcastClientConfig())


@pytest_asyncio.fixture
async def emulator():
    async with SmartcastEmulator(pin="4321") as emu:
        yield emu


@pytest_asyncio.fixture
async def emulator_client(emulator):
    client = SmartcastClient.create(emulator.host_string, auth_token="")
    yield client
    await client.aclose()
