"""
Peer fetch of content-addressed bytes.

Two implementations sit behind the PeerFetcher interface and one of them is
chosen once, when the application is composed:

- KuboPeerFetcher streams content from an IPFS node the process can reach
  (the node RPC ``/api/v0/cat`` endpoint).
- UnavailablePeerFetcher fails fast with CapabilityError, for environments
  that cannot open peer sessions.

Known limitation: fetched content is buffered in memory with no size cap.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Optional

import httpx

from mintmedia.resolution.base import (
    CapabilityError,
    NetworkError,
    ParseError,
    SourceType,
)

logger = logging.getLogger(__name__)


class PeerFetcher(ABC):
    """Capability interface for retrieving bytes by CID."""

    available: bool = False

    @abstractmethod
    async def fetch(self, cid: str) -> bytes:
        """
        Retrieve the complete content for a CID.

        Args:
            cid: Content identifier, optionally followed by a path

        Returns:
            The content bytes, in order

        Raises:
            CapabilityError: If this environment cannot fetch from peers
            NetworkError: On any transport failure (partial data is discarded)
        """
        pass

    async def close(self) -> None:
        """Release any node resources."""
        return None


class UnavailablePeerFetcher(PeerFetcher):
    """Peer fetcher for environments without peer connectivity."""

    available = False

    async def fetch(self, cid: str) -> bytes:
        raise CapabilityError("Peer fetch is not available in this environment")


class _PeerNode:
    """Session with an IPFS node; expensive, so one per fetcher."""

    def __init__(
        self,
        node_url: str,
        timeout: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.node_url = node_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.node_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def cat(self, cid: str, chunk_size: int) -> AsyncIterator[bytes]:
        """
        Sequential read of a CID's content.

        The node answers 200 before streaming, so a stream cut short only
        shows up as a byte count below the announced X-Content-Length.
        """
        async with self._client.stream("POST", "/api/v0/cat", params={"arg": cid}) as response:
            response.raise_for_status()
            expected = _content_length(response)
            received = 0
            async for chunk in response.aiter_bytes(chunk_size):
                received += len(chunk)
                yield chunk

        if expected is not None and received != expected:
            raise NetworkError(
                f"IPFS fetch error: received {received} of {expected} bytes for {cid}",
                source_type=SourceType.IPFS,
            )

    async def aclose(self) -> None:
        await self._client.aclose()


class KuboPeerFetcher(PeerFetcher):
    """
    Peer fetcher backed by an IPFS node.

    The node session is created lazily on first fetch and reused for the
    lifetime of the fetcher.
    """

    available = True

    def __init__(
        self,
        node_url: str = "http://127.0.0.1:5001",
        chunk_size: int = 65536,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.node_url = node_url
        self.chunk_size = chunk_size
        self.timeout = timeout
        self._transport = transport
        self._node: Optional[_PeerNode] = None

    def _get_node(self) -> _PeerNode:
        # No await between check and assignment, so concurrent first fetches share one node
        if self._node is None:
            self._node = _PeerNode(self.node_url, self.timeout, transport=self._transport)
            logger.info(f"Peer node session opened: {self.node_url}")
        return self._node

    async def fetch(self, cid: str) -> bytes:
        if not cid:
            raise ParseError("Empty CID", source_type=SourceType.IPFS)

        node = self._get_node()
        chunks: list[bytes] = []
        try:
            async for chunk in node.cat(cid, self.chunk_size):
                chunks.append(chunk)
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                f"IPFS fetch error: node returned {e.response.status_code} for {cid}",
                source_type=SourceType.IPFS,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(
                f"IPFS fetch error: {e}",
                source_type=SourceType.IPFS,
                original_error=e,
            ) from e

        data = b"".join(chunks)
        logger.debug(f"Fetched {len(data)} bytes for {cid} in {len(chunks)} chunks")
        return data

    async def close(self) -> None:
        if self._node is not None:
            await self._node.aclose()
            self._node = None


def select_peer_fetcher(
    enabled: bool,
    node_url: str = "http://127.0.0.1:5001",
    chunk_size: int = 65536,
    timeout: float = 10.0,
) -> PeerFetcher:
    """Pick the peer fetcher implementation for this process."""
    if enabled:
        logger.info(f"Peer fetch enabled via {node_url}")
        return KuboPeerFetcher(node_url=node_url, chunk_size=chunk_size, timeout=timeout)
    logger.info("Peer fetch disabled; IPFS references resolve through the gateway")
    return UnavailablePeerFetcher()


def _content_length(response: httpx.Response) -> Optional[int]:
    """Full content size announced by the node, if any."""
    value = response.headers.get("X-Content-Length")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        logger.debug(f"Ignoring malformed X-Content-Length: {value!r}")
        return None
