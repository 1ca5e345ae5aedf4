"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Infrastructure raises these; the repository-info path propagates them and the
quality-analysis path converts them into fallback metrics.
"""

from __future__ import annotations


class RepoQualityError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidRepositoryUrlError(RepoQualityError):
    """The supplied URL does not have the ``github.com/<owner>/<name>`` shape."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class RepositoryNotFoundError(RepoQualityError):
    """The repository does not exist (404)."""


class RateLimitedOrPrivateError(RepoQualityError):
    """GitHub answered 403: rate limit exhausted or repository is private.

    The status code alone cannot tell the two apart, so they share one kind.
    ``rate_limit_remaining`` keeps the raw ``x-ratelimit-remaining`` header
    (when present) for diagnostics only.
    """

    def __init__(self, message: str, rate_limit_remaining: str | None = None) -> None:
        super().__init__(message)
        self.rate_limit_remaining = rate_limit_remaining


class GitHubApiError(RepoQualityError):
    """Any other GitHub failure: non-2xx status, transport error or bad payload.

    ``status_code`` is ``None`` when no HTTP response was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
