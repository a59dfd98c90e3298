"""
Mock API Responses

Pre-defined mock responses for external service testing.
"""

from .arweave_responses import (
    ARWEAVE_AUDIO_BODY,
    ARWEAVE_AUDIO_TRANSACTION,
    ARWEAVE_MALFORMED_TAG_TRANSACTION,
    ARWEAVE_UNTAGGED_TRANSACTION,
)
from .metadata_responses import (
    IMAGE_ONLY_METADATA,
    SINGLE_METADATA,
)

__all__ = [
    "ARWEAVE_AUDIO_BODY",
    "ARWEAVE_AUDIO_TRANSACTION",
    "ARWEAVE_MALFORMED_TAG_TRANSACTION",
    "ARWEAVE_UNTAGGED_TRANSACTION",
    "IMAGE_ONLY_METADATA",
    "SINGLE_METADATA",
]
