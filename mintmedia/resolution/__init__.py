"""
Media reference resolution.

Turns IPFS, Arweave and plain references from token metadata into URLs a
player or image element can load directly.
"""

from mintmedia.resolution.arweave import ArweaveContent, ArweaveResolver
from mintmedia.resolution.base import (
    CapabilityError,
    ClassifiedReference,
    NetworkError,
    ParseError,
    ReferenceKind,
    ResolvedContent,
    ResolverError,
    SourceType,
)
from mintmedia.resolution.classifier import classify_reference, is_cid
from mintmedia.resolution.data_url import to_data_url
from mintmedia.resolution.gateway import GatewayResolver, get_gateway_url
from mintmedia.resolution.peer import (
    KuboPeerFetcher,
    PeerFetcher,
    UnavailablePeerFetcher,
    select_peer_fetcher,
)
from mintmedia.resolution.url_resolver import MediaURLResolver

__all__ = [
    # Base
    "CapabilityError",
    "ClassifiedReference",
    "NetworkError",
    "ParseError",
    "ReferenceKind",
    "ResolvedContent",
    "ResolverError",
    "SourceType",
    # Classification and URL building
    "classify_reference",
    "is_cid",
    "to_data_url",
    "GatewayResolver",
    "get_gateway_url",
    # Resolvers
    "ArweaveContent",
    "ArweaveResolver",
    "KuboPeerFetcher",
    "PeerFetcher",
    "UnavailablePeerFetcher",
    "select_peer_fetcher",
    "MediaURLResolver",
]
