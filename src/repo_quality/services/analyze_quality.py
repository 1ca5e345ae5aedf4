"""Code-quality analysis use case — the main orchestration pipeline.

:meth:`CodeQualityService.analyze_code_quality` is the resilience boundary:
whatever goes wrong below it is logged and turned into fallback metrics, so
callers always get something renderable. :meth:`get_repository_info` on the
other hand lets domain errors through.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable

import httpx

from repo_quality.domain.entities import (
    Complexity,
    QualityMetrics,
    QualitySignals,
    RepositoryInfo,
)
from repo_quality.domain.exceptions import RepoQualityError
from repo_quality.domain.ports.github_api import GitHubApi
from repo_quality.domain.value_objects import (
    RepositoryIdentifier,
    resolve_repository_url,
)
from repo_quality.infrastructure.config import Settings
from repo_quality.infrastructure.github_api_client import GitHubApiClient
from repo_quality.infrastructure.github_schemas import (
    IssuePayload,
    decode_contributors,
    decode_issues,
    decode_languages,
    decode_repository,
)
from repo_quality.infrastructure.ttl_cache import TtlCache
from repo_quality.services import repository_info
from repo_quality.services.complexity import classify_complexity
from repo_quality.services.insights import generate_insights
from repo_quality.services.quality_score import calculate_quality_score

logger = logging.getLogger(__name__)

FALLBACK_INSIGHT = (
    "Unable to analyze repository. Please check the GitHub URL and repository access."
)
BUG_LABEL_MARKERS: tuple[str, ...] = ("bug", "critical")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def count_bugs(issues: list[IssuePayload]) -> int:
    """Count issues carrying a label whose name contains ``bug`` or ``critical``."""
    return sum(
        1
        for issue in issues
        if any(
            marker in label.name.lower()
            for label in issue.labels
            for marker in BUG_LABEL_MARKERS
        )
    )


def fallback_metrics(now: datetime | None = None) -> QualityMetrics:
    """The always-valid result returned when analysis fails."""
    return QualityMetrics(
        overall_score=0,
        open_issues=0,
        critical_bugs=0,
        complexity=Complexity.MEDIUM,
        last_commit=now or _utcnow(),
        contributors=0,
        languages=(),
        insights=(FALLBACK_INSIGHT,),
    )


class CodeQualityService:
    """Scores GitHub repositories through a cached :class:`GitHubApi`.

    Parameters
    ----------
    api:
        Cached GitHub client.
    analysis_cache:
        Memo of successful :class:`QualityMetrics` keyed by the
        resolved ``owner/name``.
        Fallback results are never stored.
    now:
        Clock used for recency bands and fallback timestamps.
    """

    def __init__(
        self,
        api: GitHubApi,
        analysis_cache: TtlCache | None = None,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._api = api
        self._analyses = analysis_cache if analysis_cache is not None else TtlCache()
        self._now = now

    # ── Public entry points ─────────────────────────────────────────────

    async def get_repository_info(self, url: str) -> RepositoryInfo:
        """Return repository info, raising a :class:`RepoQualityError` on failure."""
        return await repository_info.get_repository_info(self._api, url)

    async def analyze_code_quality(self, url: str) -> QualityMetrics:
        """Analyse *url*; never raises."""
        repo = resolve_repository_url(url)
        if repo is None:
            logger.warning("Code quality analysis failed for %s: invalid GitHub URL", url)
            return fallback_metrics(self._now())

        # URL variants of one repository share a memo entry.
        cached = self._analyses.get(repo.full_name)
        if cached is not None:
            logger.debug("Analysis cache hit for %s", repo.full_name)
            return cached.data

        try:
            metrics = await self._analyze(repo)
        except RepoQualityError as exc:
            logger.warning("Code quality analysis failed for %s: %s", url, exc)
            return fallback_metrics(self._now())
        except Exception:
            logger.exception("Unexpected error analysing %s", url)
            return fallback_metrics(self._now())

        self._analyses.set(repo.full_name, metrics)
        return metrics

    def clear_cache(self) -> None:
        """Forget every memoised API response and analysis."""
        self._api.clear_cache()
        self._analyses.clear()

    def cache_size(self) -> int:
        """Number of memoised API responses."""
        return self._api.cache_size()

    def purge_expired(self) -> int:
        """Drop stale entries from both caches and return how many were removed."""
        return self._api.purge_expired() + self._analyses.purge_expired()

    def cache_stats(self) -> dict[str, int]:
        return {
            "api_entries": self._api.cache_size(),
            "analysis_entries": len(self._analyses),
        }

    # ── Pipeline ────────────────────────────────────────────────────────

    async def _analyze(self, repo: RepositoryIdentifier) -> QualityMetrics:
        logger.info("Analysing code quality of %s", repo.full_name)

        endpoint = repository_info.repo_endpoint
        raw_repo, raw_languages, raw_contributors, raw_issues = await asyncio.gather(
            self._api.request(endpoint(repo)),
            self._api.request(endpoint(repo, "/languages")),
            self._api.request(endpoint(repo, "/contributors?per_page=100")),
            self._api.request(endpoint(repo, "/issues?state=open&per_page=100")),
        )

        meta = decode_repository(raw_repo)
        languages = repository_info.language_shares(decode_languages(raw_languages))
        contributors = len(decode_contributors(raw_contributors))
        bugs = count_bugs(decode_issues(raw_issues))

        signals = QualitySignals(
            stars=meta.stargazers_count,
            forks=meta.forks_count,
            open_issues=meta.open_issues_count,
            bug_count=bugs,
            contributors=contributors,
            last_commit_at=meta.updated_at,
            languages=languages,
        )
        now = self._now()

        return QualityMetrics(
            overall_score=calculate_quality_score(signals, now),
            open_issues=meta.open_issues_count,
            critical_bugs=bugs,
            complexity=classify_complexity(languages, contributors),
            last_commit=meta.updated_at,
            contributors=contributors,
            languages=languages,
            insights=tuple(generate_insights(signals, now)),
        )


def create_code_quality_service(
    settings: Settings, client: httpx.AsyncClient
) -> CodeQualityService:
    """Wire a :class:`CodeQualityService` from *settings* around a shared HTTP client."""
    token = settings.github_token.get_secret_value() if settings.github_token else None
    api = GitHubApiClient(
        client=client,
        token=token,
        cache=TtlCache(
            ttl_seconds=settings.cache_ttl_seconds,
            max_entries=settings.cache_max_entries,
        ),
        base_url=settings.github_api_url,
        user_agent=settings.github_user_agent,
    )
    return CodeQualityService(
        api=api,
        analysis_cache=TtlCache(
            ttl_seconds=settings.analysis_cache_ttl_seconds,
            max_entries=settings.cache_max_entries,
        ),
    )
