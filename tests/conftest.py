"""
mintmedia Test Configuration

Shared fixtures and configuration for all tests.
"""

import sys
import tempfile
from pathlib import Path
from typing import Generator

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mintmedia.config import MintMediaConfig
from mintmedia.context import MediaContext
from mintmedia.main import create_app
from mintmedia.playback.coordinator import PlaybackCoordinator
from mintmedia.resolution.arweave import ArweaveResolver
from mintmedia.resolution.gateway import GatewayResolver
from mintmedia.resolution.peer import UnavailablePeerFetcher
from mintmedia.resolution.url_resolver import MediaURLResolver
from tests.fixtures import FakeAudio, RecordingListener, failing_handler, fast_coordinator


# ============ HTTP Fixtures ============


@pytest.fixture
def offline_arweave() -> ArweaveResolver:
    """Arweave resolver whose every request fails at the transport."""
    return ArweaveResolver(transport=httpx.MockTransport(failing_handler))


@pytest.fixture
def offline_resolver(offline_arweave: ArweaveResolver) -> MediaURLResolver:
    """Resolver with no peer capability and an unreachable Arweave API."""
    return MediaURLResolver(
        peer_fetcher=UnavailablePeerFetcher(),
        arweave=offline_arweave,
        gateways=GatewayResolver(),
        timeout=1.0,
    )


# ============ Playback Fixtures ============


@pytest.fixture
def coordinator() -> PlaybackCoordinator:
    """Coordinator with a millisecond-scale fade envelope."""
    return fast_coordinator()


@pytest.fixture
def audio_a() -> FakeAudio:
    return FakeAudio("a")


@pytest.fixture
def audio_b() -> FakeAudio:
    return FakeAudio("b")


@pytest.fixture
def listener_a() -> RecordingListener:
    return RecordingListener("a")


@pytest.fixture
def listener_b() -> RecordingListener:
    return RecordingListener("b")


# ============ FastAPI Test Client Fixtures ============


@pytest.fixture(scope="function")
def media_context(offline_resolver: MediaURLResolver) -> MediaContext:
    """Media context built from defaults with an offline resolver."""
    config = MintMediaConfig()
    return MediaContext(
        config=config,
        resolver=offline_resolver,
        playback=fast_coordinator(),
    )


@pytest.fixture(scope="function")
def app(media_context: MediaContext) -> FastAPI:
    """Create a test FastAPI application."""
    return create_app(context=media_context)


@pytest.fixture(scope="function")
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Create a synchronous test client."""
    with TestClient(app) as client:
        yield client


# ============ Temporary File Fixtures ============


@pytest.fixture(scope="function")
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(scope="function")
def temp_config_file(temp_dir: Path) -> Path:
    """Create a temporary config file."""
    config_file = temp_dir / "config.yaml"
    config_content = """
server:
  host: "127.0.0.1"
  port: 8500
  debug: true

gateways:
  ipfs_host: "dweb.link"

ipfs:
  peer_fetch_enabled: true
  node_url: "http://10.0.0.5:5001"

resolution:
  timeout_seconds: 12.5

logging:
  level: "DEBUG"
"""
    config_file.write_text(config_content)
    return config_file
