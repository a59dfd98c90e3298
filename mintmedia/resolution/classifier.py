"""
Reference classification.

Partitions a metadata reference string into one of the ReferenceKind
variants. Classification is pure and total: every input maps to exactly one
variant and nothing is ever raised.
"""

import re
from typing import Any

from mintmedia.resolution.base import ClassifiedReference, ReferenceKind

IPFS_SCHEME = "ipfs://"
ARWEAVE_SCHEME = "ar://"

# Prefix matches; trailing path segments after the CID are tolerated
CID_V0_PATTERN = re.compile(r"^Qm[1-9A-HJ-NP-Za-km-z]{44,}")
CID_V1_PATTERN = re.compile(r"^bafy[a-zA-Z0-9]{44,}")


def is_cid(value: str) -> bool:
    """Check whether a string starts with a CIDv0 or CIDv1 (base32 dag-pb) identifier."""
    return bool(CID_V0_PATTERN.match(value) or CID_V1_PATTERN.match(value))


def classify_reference(reference: Any) -> ClassifiedReference:
    """
    Classify a reference string.

    Rules, in priority order:
    1. empty or non-string -> passthrough of ""
    2. ``ipfs://<cid>`` -> IPFS_URI(cid)
    3. bare CIDv0 (``Qm...``) or CIDv1 (``bafy...``) -> RAW_CID(cid)
    4. ``ar://<txId>`` -> ARWEAVE_URI(txId)
    5. anything else -> passthrough of the original

    Args:
        reference: Value taken from token metadata

    Returns:
        ClassifiedReference for the input
    """
    if not reference or not isinstance(reference, str):
        return ClassifiedReference(ReferenceKind.PASSTHROUGH, "", "")

    if reference.startswith(IPFS_SCHEME):
        return ClassifiedReference(
            ReferenceKind.IPFS_URI, reference[len(IPFS_SCHEME):], reference
        )

    if is_cid(reference):
        return ClassifiedReference(ReferenceKind.RAW_CID, reference, reference)

    if reference.startswith(ARWEAVE_SCHEME):
        return ClassifiedReference(
            ReferenceKind.ARWEAVE_URI, reference[len(ARWEAVE_SCHEME):], reference
        )

    return ClassifiedReference(ReferenceKind.PASSTHROUGH, reference, reference)
