"""
Test Fixtures

Shared fakes, builders and mock HTTP responses.
"""

from .factories import (
    CID_V0,
    CID_V1,
    TX_ID,
    FakeAudio,
    RecordingListener,
    StaticPeerFetcher,
    arweave_handler,
    b64url,
    capability_error,
    failing_handler,
    fast_coordinator,
    make_tag,
    network_error,
)

__all__ = [
    "CID_V0",
    "CID_V1",
    "TX_ID",
    "FakeAudio",
    "RecordingListener",
    "StaticPeerFetcher",
    "arweave_handler",
    "b64url",
    "capability_error",
    "failing_handler",
    "fast_coordinator",
    "make_tag",
    "network_error",
]
