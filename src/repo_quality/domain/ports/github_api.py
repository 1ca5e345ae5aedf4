"""Port: GitHub API access — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Protocol


class GitHubApi(Protocol):
    """Abstract contract for a cached GitHub REST client."""

    async def request(self, endpoint: str) -> Any:
        """Return the decoded JSON body of ``GET <api>/<endpoint>``."""
        ...

    def clear_cache(self) -> None:
        """Drop every memoised response."""
        ...

    def cache_size(self) -> int:
        """Return the number of memoised responses."""
        ...

    def purge_expired(self) -> int:
        """Drop stale responses and return how many were removed."""
        ...
