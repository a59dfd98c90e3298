"""Reference resolution API endpoints"""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from mintmedia.api.schemas import (
    AssetMediaRequest,
    AssetMediaResponse,
    BatchResolveRequest,
    BatchResolveResponse,
    MediaReferenceResponse,
    ResolveResponse,
)
from mintmedia.context import MediaContext
from mintmedia.metadata.extractor import extract_media_references
from mintmedia.resolution.url_resolver import MediaURLResolver

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Resolve"])


def get_media_context(request: Request) -> MediaContext:
    """Shared services built in the application lifespan."""
    return request.app.state.media_context


async def _resolve_one(resolver: MediaURLResolver, reference: str) -> ResolveResponse:
    resolved = await resolver.resolve_content(reference)
    return ResolveResponse(
        reference=reference,
        url=resolved.source_url,
        kind=resolved.kind,
        content_type=resolved.content_type,
        fallback=resolved.fallback,
    )


@router.get("/resolve", response_model=ResolveResponse)
async def resolve_reference(
    ref: str = Query("", description="ipfs://, bare CID, ar:// or URL"),
    context: MediaContext = Depends(get_media_context),
) -> ResolveResponse:
    """Resolve one reference to a directly usable URL."""
    return await _resolve_one(context.resolver, ref)


@router.post("/resolve/batch", response_model=BatchResolveResponse)
async def resolve_batch(
    body: BatchResolveRequest,
    context: MediaContext = Depends(get_media_context),
) -> BatchResolveResponse:
    """Resolve several independent references concurrently."""
    max_batch = context.config.resolution.max_batch_size
    if len(body.references) > max_batch:
        raise HTTPException(
            status_code=422,
            detail=f"Batch of {len(body.references)} exceeds limit of {max_batch}",
        )

    results = await asyncio.gather(
        *(_resolve_one(context.resolver, ref) for ref in body.references)
    )
    return BatchResolveResponse(results=list(results))


@router.post("/assets/media", response_model=AssetMediaResponse)
async def resolve_asset_media(
    body: AssetMediaRequest,
    context: MediaContext = Depends(get_media_context),
) -> AssetMediaResponse:
    """List the media of a metadata record with resolved URLs."""
    references = extract_media_references(body.metadata)
    urls = await context.resolver.resolve_many(ref.src for ref in references)
    logger.debug(f"Resolved {len(urls)} media references from asset metadata")

    return AssetMediaResponse(
        media=[
            MediaReferenceResponse(
                src=ref.src,
                url=url,
                role=ref.role,
                media_type=ref.media_type,
                name=ref.name,
            )
            for ref, url in zip(references, urls)
        ]
    )
