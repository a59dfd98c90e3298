"""
Shared types for media reference resolution.

Provides the classified reference variants, the resolved content record and
the resolver error hierarchy.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class ReferenceKind(str, Enum):
    """Variants a reference string classifies into."""

    IPFS_URI = "ipfs_uri"
    RAW_CID = "raw_cid"
    ARWEAVE_URI = "arweave_uri"
    PASSTHROUGH = "passthrough"


class SourceType(str, Enum):
    """Backends that can fail during resolution."""

    IPFS = "ipfs"
    ARWEAVE = "arweave"
    GATEWAY = "gateway"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ClassifiedReference:
    """
    A reference string after classification.

    Attributes:
        kind: Which variant the input matched
        value: The CID, transaction id, or the original string for passthrough
        original: The input as given
    """

    kind: ReferenceKind
    value: str
    original: str = ""

    @property
    def is_content_addressed(self) -> bool:
        """True for references resolvable through the IPFS network."""
        return self.kind in (ReferenceKind.IPFS_URI, ReferenceKind.RAW_CID)


@dataclass
class ResolvedContent:
    """
    Result of resolving one reference.

    At least one of ``data`` or ``source_url`` is populated.

    Attributes:
        source_url: A string usable directly as a media source
        content_type: Declared or assumed mime type
        data: Fetched bytes when the content was retrieved directly
        kind: Classification of the input
        fallback: Whether a direct fetch failed and a gateway URL was used
    """

    source_url: str
    content_type: str = "application/octet-stream"
    data: Optional[bytes] = None
    kind: ReferenceKind = ReferenceKind.PASSTHROUGH
    fallback: bool = False


class ResolverError(Exception):
    """Error during reference resolution."""

    def __init__(
        self,
        message: str,
        source_type: SourceType = SourceType.UNKNOWN,
        is_retryable: bool = True,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.source_type = source_type
        self.is_retryable = is_retryable
        self.original_error = original_error


class CapabilityError(ResolverError):
    """Direct fetch attempted where the environment cannot perform it."""

    def __init__(self, message: str, source_type: SourceType = SourceType.IPFS):
        super().__init__(message, source_type=source_type, is_retryable=False)


class NetworkError(ResolverError):
    """Fetch or transaction lookup failed on the wire."""


class ParseError(ResolverError):
    """A response could not be decoded."""

    def __init__(
        self,
        message: str,
        source_type: SourceType = SourceType.UNKNOWN,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            source_type=source_type,
            is_retryable=False,
            original_error=original_error,
        )
