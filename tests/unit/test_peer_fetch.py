"""
Unit tests for peer fetching of content-addressed bytes.
"""

import httpx
import pytest

from mintmedia.resolution import (
    ArweaveResolver,
    CapabilityError,
    KuboPeerFetcher,
    MediaURLResolver,
    NetworkError,
    ParseError,
    UnavailablePeerFetcher,
    select_peer_fetcher,
)
from tests.fixtures import CID_V1, failing_handler


def node_transport(
    body: bytes = b"",
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v0/cat"
        assert request.method == "POST"
        if status_code != 200:
            return httpx.Response(status_code, json={"Message": "block not found"})
        return httpx.Response(200, content=body, headers=headers)

    return httpx.MockTransport(handler)


@pytest.mark.unit
class TestUnavailablePeerFetcher:
    """Tests for the fail-fast implementation."""

    @pytest.mark.asyncio
    async def test_fails_fast_with_capability_error(self):
        fetcher = UnavailablePeerFetcher()

        with pytest.raises(CapabilityError) as exc_info:
            await fetcher.fetch(CID_V1)

        assert exc_info.value.is_retryable is False
        assert fetcher.available is False


@pytest.mark.unit
class TestKuboPeerFetcher:
    """Tests for the node-backed implementation."""

    @pytest.mark.asyncio
    async def test_accumulates_chunks_in_order(self):
        body = bytes(range(256)) * 10
        fetcher = KuboPeerFetcher(chunk_size=100, transport=node_transport(body))

        data = await fetcher.fetch(CID_V1)

        assert data == body
        await fetcher.close()

    @pytest.mark.asyncio
    async def test_node_is_created_once_and_reused(self):
        fetcher = KuboPeerFetcher(transport=node_transport(b"abc"))

        await fetcher.fetch(CID_V1)
        node = fetcher._node
        await fetcher.fetch(CID_V1)

        assert node is not None
        assert fetcher._node is node
        await fetcher.close()
        assert fetcher._node is None

    @pytest.mark.asyncio
    async def test_node_error_status_is_network_error(self):
        fetcher = KuboPeerFetcher(transport=node_transport(status_code=500))

        with pytest.raises(NetworkError) as exc_info:
            await fetcher.fetch(CID_V1)

        assert "500" in str(exc_info.value)
        await fetcher.close()

    @pytest.mark.asyncio
    async def test_unreachable_node_is_network_error(self):
        fetcher = KuboPeerFetcher(transport=httpx.MockTransport(failing_handler))

        with pytest.raises(NetworkError):
            await fetcher.fetch(CID_V1)
        await fetcher.close()

    @pytest.mark.asyncio
    async def test_short_stream_is_network_error(self):
        transport = node_transport(b"partial", headers={"X-Content-Length": "1000"})
        fetcher = KuboPeerFetcher(transport=transport)

        with pytest.raises(NetworkError) as exc_info:
            await fetcher.fetch(CID_V1)

        assert "7 of 1000" in str(exc_info.value)
        await fetcher.close()

    @pytest.mark.asyncio
    async def test_announced_length_matching_body_is_accepted(self):
        transport = node_transport(b"complete", headers={"X-Content-Length": "8"})
        fetcher = KuboPeerFetcher(transport=transport)

        assert await fetcher.fetch(CID_V1) == b"complete"
        await fetcher.close()

    @pytest.mark.asyncio
    async def test_short_stream_resolves_to_gateway(self):
        transport = node_transport(b"partial", headers={"X-Content-Length": "1000"})
        resolver = MediaURLResolver(
            peer_fetcher=KuboPeerFetcher(transport=transport),
            arweave=ArweaveResolver(transport=httpx.MockTransport(failing_handler)),
        )

        resolved = await resolver.resolve_content(CID_V1)

        assert resolved.fallback is True
        assert resolved.source_url == f"https://ipfs.io/ipfs/{CID_V1}"
        assert resolved.data is None
        await resolver.close()

    @pytest.mark.asyncio
    async def test_empty_cid_is_parse_error(self):
        fetcher = KuboPeerFetcher(transport=node_transport(b"abc"))

        with pytest.raises(ParseError):
            await fetcher.fetch("")


@pytest.mark.unit
class TestSelectPeerFetcher:
    """Tests for choosing the implementation at composition time."""

    def test_disabled_selects_unavailable(self):
        assert isinstance(select_peer_fetcher(enabled=False), UnavailablePeerFetcher)

    def test_enabled_selects_node_fetcher(self):
        fetcher = select_peer_fetcher(enabled=True, node_url="http://10.0.0.5:5001", timeout=3.0)

        assert isinstance(fetcher, KuboPeerFetcher)
        assert fetcher.available is True
        assert fetcher.node_url == "http://10.0.0.5:5001"
        assert fetcher.timeout == 3.0
        assert fetcher._node is None
