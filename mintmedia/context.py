"""
Application composition root.

Builds the resolver and the playback coordinator once, from configuration,
and hands them out through a single MediaContext owned by the application.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from mintmedia.config import MintMediaConfig, get_config
from mintmedia.playback.coordinator import PlaybackCoordinator
from mintmedia.resolution.arweave import ArweaveResolver
from mintmedia.resolution.gateway import GatewayResolver
from mintmedia.resolution.peer import select_peer_fetcher
from mintmedia.resolution.url_resolver import MediaURLResolver

logger = logging.getLogger(__name__)


@dataclass
class MediaContext:
    """Services shared by every consumer of resolution and playback."""

    config: MintMediaConfig
    resolver: MediaURLResolver
    playback: PlaybackCoordinator

    async def close(self) -> None:
        self.playback.close()
        await self.resolver.close()


def build_resolver(config: MintMediaConfig) -> MediaURLResolver:
    """Compose the resolution pipeline; the peer fetcher is chosen here, once."""
    timeout = config.resolution.timeout_seconds
    peer_fetcher = select_peer_fetcher(
        enabled=config.ipfs.peer_fetch_enabled,
        node_url=config.ipfs.node_url,
        chunk_size=config.ipfs.chunk_size,
        timeout=timeout,
    )
    return MediaURLResolver(
        peer_fetcher=peer_fetcher,
        arweave=ArweaveResolver(api_url=config.arweave.api_url, timeout=timeout),
        gateways=GatewayResolver(
            ipfs_host=config.gateways.ipfs_host,
            arweave_host=config.gateways.arweave_host,
        ),
        timeout=timeout,
        fallback_mime_type=config.resolution.fallback_mime_type,
    )


def build_context(config: Optional[MintMediaConfig] = None) -> MediaContext:
    """Build the shared services from configuration."""
    config = config or get_config()
    context = MediaContext(
        config=config,
        resolver=build_resolver(config),
        playback=PlaybackCoordinator.from_config(config.playback),
    )
    logger.info(
        f"Media context ready (peer fetch: {context.resolver.peer_fetcher.available}, "
        f"gateway: {context.resolver.gateways.ipfs_host})"
    )
    return context
