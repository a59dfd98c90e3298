"""Media reference extraction from minted music-token metadata records"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)


@dataclass
class MediaReference:
    """
    One media reference found in a metadata record.

    Attributes:
        src: Reference string (ipfs://, bare CID, ar://, or URL)
        media_type: Declared mime type, if any
        name: File name or song title
        role: "image" for the cover art, "file" for entries of ``files``
    """

    src: str
    media_type: Optional[str] = None
    name: Optional[str] = None
    role: str = "file"

    @property
    def is_audio(self) -> bool:
        return bool(self.media_type) and self.media_type.startswith("audio/")


def join_chunks(value: Any) -> Optional[str]:
    """
    Normalize an on-chain string field.

    On-chain metadata caps strings at 64 bytes, so long values are stored
    as lists of chunks that must be concatenated.
    """
    if isinstance(value, str):
        return value or None
    if isinstance(value, list) and value and all(isinstance(part, str) for part in value):
        return "".join(value) or None
    return None


def extract_media_references(metadata: dict[str, Any]) -> list[MediaReference]:
    """
    Extract media references from a metadata record.

    Args:
        metadata: Already validated metadata JSON for one asset

    Returns:
        References in document order: cover image first, then files
    """
    references: list[MediaReference] = []
    if not isinstance(metadata, dict):
        return references

    image = join_chunks(metadata.get("image"))
    if image:
        references.append(
            MediaReference(
                src=image,
                media_type=join_chunks(metadata.get("mediaType")),
                name=join_chunks(metadata.get("name")),
                role="image",
            )
        )

    files = metadata.get("files") or []
    if not isinstance(files, list):
        logger.debug(f"Ignoring non-list files field: {type(files).__name__}")
        return references

    for entry in files:
        if not isinstance(entry, dict):
            continue
        src = join_chunks(entry.get("src"))
        if not src:
            continue

        name = join_chunks(entry.get("name"))
        song = entry.get("song")
        if isinstance(song, dict):
            name = join_chunks(song.get("song_title")) or name

        references.append(
            MediaReference(
                src=src,
                media_type=join_chunks(entry.get("mediaType")),
                name=name,
            )
        )

    return references


def audio_references(metadata: dict[str, Any]) -> list[MediaReference]:
    """Only the audio entries of a metadata record."""
    return [ref for ref in extract_media_references(metadata) if ref.is_audio]
