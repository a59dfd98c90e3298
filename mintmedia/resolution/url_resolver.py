"""
Central Media URL Resolver.

Routes metadata references to the direct-fetch resolver for their kind and
degrades to a public gateway URL whenever direct fetching is impossible or
fails. Resolution never raises.
"""

import asyncio
import logging
from collections.abc import Awaitable, Iterable
from typing import Any, Optional, TypeVar

from mintmedia.resolution.arweave import ArweaveResolver
from mintmedia.resolution.base import (
    CapabilityError,
    ClassifiedReference,
    NetworkError,
    ReferenceKind,
    ResolvedContent,
    ResolverError,
    SourceType,
)
from mintmedia.resolution.classifier import classify_reference
from mintmedia.resolution.data_url import DEFAULT_MIME_TYPE, to_data_url
from mintmedia.resolution.gateway import GatewayResolver
from mintmedia.resolution.peer import PeerFetcher, UnavailablePeerFetcher
from mintmedia.utils.logging_setup import log_exception

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MediaURLResolver:
    """
    Central reference resolution hub.

    IPFS references are fetched through the peer fetcher and embedded as a
    data URL; Arweave references are fetched from the Arweave API and
    embedded with their declared content type; everything else passes
    through. No caching: each call repeats the full network path.

    Usage:
        resolver = MediaURLResolver(peer_fetcher=select_peer_fetcher(False))
        url = await resolver.resolve("ipfs://bafy...")
    """

    def __init__(
        self,
        peer_fetcher: Optional[PeerFetcher] = None,
        arweave: Optional[ArweaveResolver] = None,
        gateways: Optional[GatewayResolver] = None,
        timeout: float = 10.0,
        fallback_mime_type: str = DEFAULT_MIME_TYPE,
    ):
        self.peer_fetcher = peer_fetcher or UnavailablePeerFetcher()
        self.arweave = arweave or ArweaveResolver(timeout=timeout)
        self.gateways = gateways or GatewayResolver()
        self.timeout = timeout
        self.fallback_mime_type = fallback_mime_type

    async def resolve(self, reference: Any) -> str:
        """
        Resolve a reference to a string usable as a media source.

        Returns a ``data:`` URL, a gateway URL, or the input unchanged;
        ``""`` for empty or non-string input.
        """
        resolved = await self.resolve_content(reference)
        return resolved.source_url

    async def resolve_content(self, reference: Any) -> ResolvedContent:
        """Resolve a reference and report how it was resolved."""
        classified = classify_reference(reference)

        try:
            if classified.is_content_addressed:
                return await self._resolve_ipfs(classified)
            if classified.kind == ReferenceKind.ARWEAVE_URI:
                return await self._resolve_arweave(classified)
        except Exception as e:
            # Expected failures are handled in the per-kind helpers
            log_exception(logger, e, f"Unexpected error resolving {classified.original!r}")
            return self._fallback(classified)

        return ResolvedContent(source_url=classified.value, kind=classified.kind)

    async def resolve_many(self, references: Iterable[Any]) -> list[str]:
        """Resolve independent references concurrently, preserving order."""
        return list(await asyncio.gather(*(self.resolve(ref) for ref in references)))

    async def _resolve_ipfs(self, classified: ClassifiedReference) -> ResolvedContent:
        try:
            data = await self._with_timeout(
                self.peer_fetcher.fetch(classified.value), SourceType.IPFS
            )
        except CapabilityError as e:
            logger.debug(f"Peer fetch unavailable for {classified.value}: {e}")
            return self._fallback(classified)
        except ResolverError as e:
            logger.warning(f"IPFS direct fetch failed for {classified.value}: {e}")
            return self._fallback(classified)

        logger.info(f"Fetched {classified.value} from peers ({len(data)} bytes)")
        return ResolvedContent(
            source_url=to_data_url(data, self.fallback_mime_type),
            content_type=self.fallback_mime_type,
            data=data,
            kind=classified.kind,
        )

    async def _resolve_arweave(self, classified: ClassifiedReference) -> ResolvedContent:
        try:
            fetched = await self._with_timeout(
                self.arweave.fetch(classified.value), SourceType.ARWEAVE
            )
        except ResolverError as e:
            logger.warning(f"Arweave direct fetch failed for {classified.value}: {e}")
            return self._fallback(classified)

        if fetched.is_text:
            return ResolvedContent(
                source_url=fetched.content,
                content_type=fetched.content_type,
                kind=classified.kind,
            )

        content_type = fetched.content_type or self.fallback_mime_type
        return ResolvedContent(
            source_url=to_data_url(fetched.content, content_type),
            content_type=content_type,
            data=fetched.content,
            kind=classified.kind,
        )

    async def _with_timeout(self, operation: Awaitable[T], source_type: SourceType) -> T:
        try:
            return await asyncio.wait_for(operation, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise NetworkError(
                f"Timed out after {self.timeout}s",
                source_type=source_type,
                original_error=e,
            ) from e

    def _fallback(self, classified: ClassifiedReference) -> ResolvedContent:
        return ResolvedContent(
            source_url=self.gateways.url_for(classified),
            kind=classified.kind,
            fallback=True,
        )

    async def close(self) -> None:
        """Close network sessions held by the resolvers."""
        await self.peer_fetcher.close()
        await self.arweave.close()
