"""Test configuration and fixtures."""

import asyncio
import os
import socket

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestServer

from registry_blob_client import BlobClient, check_registry_connectivity
from tests.helpers import FakeRegistry


def is_port_open(host, port):
    """Check if a port is open."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.settimeout(1)
            result = sock.connect_ex((host, port))
            return result == 0
    except OSError:
        return False


@pytest_asyncio.fixture
async def fake_registry():
    """Serve a fake registry on a local port."""
    registry = FakeRegistry()
    server = TestServer(registry.app)
    await server.start_server()
    registry.url = f"http://{server.host}:{server.port}"
    try:
        yield registry
    finally:
        # Let stalled handlers finish so the server can shut down
        registry.release.set()
        await server.close()


@pytest_asyncio.fixture
async def blob_client(fake_registry):
    """Blob client connected to the fake registry."""
    async with BlobClient(fake_registry.url) as client:
        yield client


@pytest.fixture
def registry_port():
    """Get registry port for testing."""
    return int(os.getenv("REGISTRY_PORT", "15000"))


@pytest_asyncio.fixture
async def registry_url(registry_port):
    """Get real registry URL and ensure it's available."""
    url = f"http://localhost:{registry_port}"

    # Wait for registry to be available (for CI)
    max_attempts = 30
    for attempt in range(max_attempts):
        if is_port_open("localhost", registry_port):
            if await check_registry_connectivity(url):
                return url

        if attempt < max_attempts - 1:
            await asyncio.sleep(1)

    pytest.skip(f"Registry not available at {url}")


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless a registry is available."""
    skip_integration = pytest.mark.skip(reason="Registry not available")

    for item in items:
        if (
            "integration" in item.keywords
            and os.getenv("REGISTRY_AVAILABLE", "false").lower() != "true"
        ):
            item.add_marker(skip_integration)
