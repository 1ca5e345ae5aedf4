"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx

from repo_quality.infrastructure.config import get_settings
from repo_quality.services.analyze_quality import (
    CodeQualityService,
    create_code_quality_service,
)

_http_client: httpx.AsyncClient | None = None
_service: CodeQualityService | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _service  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds)
    )
    # One service per process so the response caches are shared across requests.
    _service = create_code_quality_service(settings, _http_client)


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _service  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    _service = None


def get_service() -> CodeQualityService:
    """Return the process-wide :class:`CodeQualityService`."""
    assert _service is not None, "startup() was not called"
    return _service
