"""Pydantic schemas for API requests and responses"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from mintmedia.resolution.base import ReferenceKind


class ResolveResponse(BaseModel):
    """A resolved reference."""
    reference: str
    url: str
    kind: ReferenceKind
    content_type: str
    fallback: bool = False


class BatchResolveRequest(BaseModel):
    """References to resolve together."""
    references: list[str] = Field(default_factory=list)


class BatchResolveResponse(BaseModel):
    """Resolved references, in request order."""
    results: list[ResolveResponse]


class MediaReferenceResponse(BaseModel):
    """A media entry from a metadata record with its resolved URL."""
    src: str
    url: str
    role: str
    media_type: Optional[str] = None
    name: Optional[str] = None


class AssetMediaRequest(BaseModel):
    """A minted asset's metadata record."""
    metadata: dict[str, Any]


class AssetMediaResponse(BaseModel):
    """Media found in a metadata record."""
    media: list[MediaReferenceResponse]
