"""Metadata helpers for minted music-token records."""

from mintmedia.metadata.extractor import (
    MediaReference,
    audio_references,
    extract_media_references,
    join_chunks,
)

__all__ = [
    "MediaReference",
    "audio_references",
    "extract_media_references",
    "join_chunks",
]
