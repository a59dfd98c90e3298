"""
Gateway fallback URL construction.

Builds public HTTP gateway URLs for content-addressed and Arweave
references. No network access; reachability is the caller's concern.
"""

from typing import Any, Optional

from mintmedia.resolution.base import ClassifiedReference, ReferenceKind
from mintmedia.resolution.classifier import classify_reference


class GatewayResolver:
    """
    Deterministic gateway URL builder.

    Usage:
        gateways = GatewayResolver()
        gateways.ipfs_url("bafy...")   # https://ipfs.io/ipfs/bafy...
        gateways.arweave_url("abc123") # https://arweave.net/abc123
    """

    def __init__(self, ipfs_host: str = "ipfs.io", arweave_host: str = "arweave.net"):
        self.ipfs_host = _strip_host(ipfs_host)
        self.arweave_host = _strip_host(arweave_host)

    def ipfs_url(self, cid: str) -> str:
        """Gateway URL for a CID."""
        return f"https://{self.ipfs_host}/ipfs/{cid}"

    def arweave_url(self, tx_id: str) -> str:
        """Gateway URL for an Arweave transaction id."""
        return f"https://{self.arweave_host}/{tx_id}"

    def url_for(self, classified: ClassifiedReference) -> str:
        """Gateway URL for an already classified reference; passthrough is returned as is."""
        if classified.is_content_addressed:
            return self.ipfs_url(classified.value)
        if classified.kind == ReferenceKind.ARWEAVE_URI:
            return self.arweave_url(classified.value)
        return classified.value


def _strip_host(host: str) -> str:
    """Accept either a bare host or a full origin in config."""
    for scheme in ("https://", "http://"):
        if host.startswith(scheme):
            host = host[len(scheme):]
    return host.rstrip("/")


def get_gateway_url(reference: Any, gateways: Optional[GatewayResolver] = None) -> str:
    """
    Convert a reference straight to a gateway URL without fetching anything.

    Useful for rendering a source immediately while the async resolution
    is still in flight.
    """
    gateways = gateways or GatewayResolver()
    return gateways.url_for(classify_reference(reference))
