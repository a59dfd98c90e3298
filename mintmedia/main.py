"""
mintmedia Main Application

FastAPI application entry point exposing reference resolution.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from mintmedia import __version__
from mintmedia.config import get_config, load_config
from mintmedia.context import MediaContext, build_context

# Logger
logger = logging.getLogger(__name__)


def create_app(context: Optional[MediaContext] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        context: Prebuilt services; built from configuration at startup when omitted

    Returns:
        Configured FastAPI application instance.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application lifespan manager.

        Builds the shared media context on startup and closes its network
        sessions on shutdown.
        """
        logger.info(f"Starting mintmedia v{__version__}")

        media_context = context or build_context(get_config())
        app.state.media_context = media_context
        logger.info(f"Configuration loaded, server port: {media_context.config.server.port}")

        yield

        logger.info("Shutting down mintmedia")
        try:
            await media_context.close()
            logger.info("Media context closed")
        except Exception as e:
            logger.warning(f"Error closing media context: {e}")

    app = FastAPI(
        title="mintmedia",
        description="Media reference resolution for minted music tokens",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Register API routers
    from mintmedia.api import api_router
    app.include_router(api_router)

    return app


def main(config_path: Optional[str] = None) -> None:
    """
    Main entry point for running the server.

    Called by `python -m mintmedia serve`.
    """
    import uvicorn
    from mintmedia.utils.logging_setup import parse_size, setup_logging

    config = load_config(config_path)

    setup_logging(
        log_level=config.logging.level,
        log_file_name=config.logging.file,
        log_to_console=True,
        log_to_file=True,
        max_bytes=parse_size(config.logging.max_size),
        backup_count=config.logging.backup_count,
        log_format=config.logging.format,
    )

    logger.info(f"Starting mintmedia v{__version__}")

    uvicorn.run(
        "mintmedia.main:create_app",
        factory=True,
        host=config.server.host,
        port=config.server.port,
        reload=config.server.debug,
        log_level=config.server.log_level.lower(),
    )


if __name__ == "__main__":
    main()
