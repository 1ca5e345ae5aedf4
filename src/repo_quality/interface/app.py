"""FastAPI application factory."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from repo_quality.infrastructure.config import get_settings
from repo_quality.interface.dependencies import get_service, shutdown, startup
from repo_quality.interface.error_handlers import register_error_handlers
from repo_quality.interface.routes import router
from repo_quality.services.analyze_quality import CodeQualityService

logger = logging.getLogger(__name__)


async def sweep_caches(service: CodeQualityService, interval_seconds: float) -> None:
    """Purge stale cache entries every *interval_seconds* until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        removed = service.purge_expired()
        if removed:
            logger.debug("Swept %d stale cache entries", removed)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Own the shared HTTP client, the caches and the background sweep."""
    await startup()
    sweeper = asyncio.create_task(
        sweep_caches(get_service(), get_settings().cache_sweep_interval_seconds)
    )
    try:
        yield
    finally:
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper
        await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="GitHub Repository Quality",
        version="1.0.0",
        description=(
            "Takes a public GitHub repository URL and returns a 0-100 quality "
            "score, a complexity tier and short insights derived from the "
            "repository's GitHub metadata."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
