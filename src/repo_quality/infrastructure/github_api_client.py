"""GitHub REST API client — implements the GitHubApi port with a TTL cache."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from repo_quality.domain.exceptions import (
    GitHubApiError,
    RateLimitedOrPrivateError,
    RepositoryNotFoundError,
)
from repo_quality.infrastructure.ttl_cache import TtlCache

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_USER_AGENT = "repo-quality/1.0"


class GitHubApiClient:
    """Concrete GitHubApi backed by the GitHub v3 REST API.

    Responses are memoised per endpoint string (path plus query) in *cache*.
    The key does not include the token, so clients sharing a cache share
    entries across identities.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        cache: TtlCache | None = None,
        base_url: str = _GITHUB_API,
        user_agent: str = _USER_AGENT,
    ) -> None:
        self._client = client
        self._cache = cache if cache is not None else TtlCache()
        self._base_url = base_url.rstrip("/")
        self._headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": user_agent,
        }
        if token:
            self._headers["Authorization"] = f"token {token}"
        self._key_locks: dict[str, asyncio.Lock] = {}

    async def request(self, endpoint: str) -> Any:
        """GET *endpoint* (e.g. ``/repos/psf/requests``) and return its JSON body."""
        cached = self._cache.get(endpoint)
        if cached is not None:
            logger.debug("Cache hit for %s", endpoint)
            return cached.data

        lock = self._key_locks.setdefault(endpoint, asyncio.Lock())
        try:
            async with lock:
                # Another task may have filled the entry while we waited.
                cached = self._cache.get(endpoint)
                if cached is not None:
                    logger.debug("Cache hit for %s", endpoint)
                    return cached.data

                data = await self._fetch(endpoint)
                self._cache.set(endpoint, data)
                return data
        finally:
            # Tasks already queued keep their reference; later ones hit the cache.
            if self._key_locks.get(endpoint) is lock and not lock.locked():
                del self._key_locks[endpoint]

    def pending_locks(self) -> int:
        """Number of endpoints with an in-flight or queued fetch."""
        return len(self._key_locks)

    def clear_cache(self) -> None:
        self._cache.clear()
        self._key_locks.clear()

    def cache_size(self) -> int:
        return len(self._cache)

    def purge_expired(self) -> int:
        return self._cache.purge_expired()

    async def _fetch(self, endpoint: str) -> Any:
        """Perform the GET request with error translation."""
        url = f"{self._base_url}{endpoint}"
        logger.debug("GET %s", url)
        try:
            # GitHub answers 301 for renamed or transferred repositories.
            resp = await self._client.get(
                url, headers=self._headers, follow_redirects=True
            )
        except httpx.HTTPError as exc:
            raise GitHubApiError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code == 404:
            raise RepositoryNotFoundError("Repository not found")

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining")
            logger.warning(
                "GitHub returned 403 for %s (x-ratelimit-remaining=%s)",
                endpoint,
                remaining or "n/a",
            )
            raise RateLimitedOrPrivateError(
                "Rate limit exceeded or repository is private",
                rate_limit_remaining=remaining,
            )

        if not resp.is_success:
            raise GitHubApiError(
                f"GitHub API error: {resp.status_code}", status_code=resp.status_code
            )

        # GitHub answers 204 on list endpoints with nothing to list.
        if resp.status_code == 204:
            return []

        try:
            return resp.json()
        except ValueError as exc:
            raise GitHubApiError(
                f"GitHub API returned invalid JSON for {url}",
                status_code=resp.status_code,
            ) from exc
