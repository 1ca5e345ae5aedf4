"""Repository info assembler — metadata, languages and contributors in one record."""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Mapping

from repo_quality.domain.entities import LanguageShare, RepositoryInfo
from repo_quality.domain.ports.github_api import GitHubApi
from repo_quality.domain.value_objects import RepositoryIdentifier
from repo_quality.infrastructure.github_schemas import (
    decode_contributors,
    decode_languages,
    decode_repository,
)

logger = logging.getLogger(__name__)


def repo_endpoint(repo: RepositoryIdentifier, suffix: str = "") -> str:
    """Build ``/repos/{owner}/{name}{suffix}``; the result doubles as the cache key."""
    return f"/repos/{repo.owner}/{repo.name}{suffix}"


def language_shares(byte_counts: Mapping[str, int]) -> tuple[LanguageShare, ...]:
    """Convert a ``{language: bytes}`` map into rounded percentages.

    Order follows the mapping. Percentages are rounded half-up and need not
    sum to exactly 100; they are all zero when the total is zero.
    """
    total = sum(byte_counts.values())
    return tuple(
        LanguageShare(
            name=name,
            percentage=math.floor(count / total * 100 + 0.5) if total > 0 else 0,
        )
        for name, count in byte_counts.items()
    )


async def get_repository_info(api: GitHubApi, url: str) -> RepositoryInfo:
    """Resolve *url* and assemble a :class:`RepositoryInfo` from three API calls.

    Raises the domain error of the first failing call; no partial result is
    returned.
    """
    repo = RepositoryIdentifier.from_url(url)
    logger.info("Fetching repository info for %s", repo.full_name)

    raw_repo, raw_languages, raw_contributors = await asyncio.gather(
        api.request(repo_endpoint(repo)),
        api.request(repo_endpoint(repo, "/languages")),
        api.request(repo_endpoint(repo, "/contributors?per_page=1")),
    )

    meta = decode_repository(raw_repo)
    contributors = decode_contributors(raw_contributors)

    return RepositoryInfo(
        name=meta.name,
        full_name=meta.full_name,
        description=meta.description,
        language=meta.language,
        languages=language_shares(decode_languages(raw_languages)),
        stars=meta.stargazers_count,
        forks=meta.forks_count,
        open_issues=meta.open_issues_count,
        last_commit=meta.updated_at,
        # Contributions of the top contributor, used as a rough size proxy.
        contributors=contributors[0].contributions if contributors else 0,
        default_branch=meta.default_branch,
        url=meta.html_url,
    )
