"""Health check API endpoint for mintmedia"""

import logging
import platform
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Request

from mintmedia import __version__

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check() -> dict[str, Any]:
    """
    Basic health check endpoint.

    Returns:
        dict: Basic health status
    """
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.get("/detailed")
async def detailed_health_check(request: Request) -> dict[str, Any]:
    """
    Detailed health check with resolver status.

    Returns:
        dict: Detailed health status for all components
    """
    context = request.app.state.media_context
    resolver = context.resolver

    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.utcnow().isoformat(),
        "system": {
            "platform": platform.system(),
            "python_version": platform.python_version(),
        },
        "components": {
            "peer_fetch": {"available": resolver.peer_fetcher.available},
            "gateways": {
                "ipfs": resolver.gateways.ipfs_host,
                "arweave": resolver.gateways.arweave_host,
            },
            "playback": {"state": context.playback.state.value},
        },
        "config": {
            "server_port": context.config.server.port,
            "debug_mode": context.config.server.debug,
            "timeout_seconds": context.config.resolution.timeout_seconds,
        },
    }
