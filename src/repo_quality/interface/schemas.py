"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator

from repo_quality.domain.entities import QualityMetrics, RepositoryInfo


class RepositoryRequest(BaseModel):
    """Request body for ``POST /analyze`` and ``POST /repository``."""

    github_url: str

    @field_validator("github_url")
    @classmethod
    def _must_not_be_empty(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "github_url must not be empty."
            raise ValueError(msg)
        return stripped


class LanguageShareResponse(BaseModel):
    name: str
    percentage: int


class DependencyHealthResponse(BaseModel):
    outdated: int = 0
    vulnerable: int = 0


class QualityMetricsResponse(BaseModel):
    """Successful response from ``POST /analyze``."""

    overall_score: int
    test_coverage: int
    open_issues: int
    critical_bugs: int
    complexity: str
    last_commit: datetime
    contributors: int
    dependencies: DependencyHealthResponse
    languages: list[LanguageShareResponse]
    insights: list[str]

    @classmethod
    def from_metrics(cls, metrics: QualityMetrics) -> QualityMetricsResponse:
        return cls(
            overall_score=metrics.overall_score,
            test_coverage=metrics.test_coverage,
            open_issues=metrics.open_issues,
            critical_bugs=metrics.critical_bugs,
            complexity=metrics.complexity.value,
            last_commit=metrics.last_commit,
            contributors=metrics.contributors,
            dependencies=DependencyHealthResponse(
                outdated=metrics.dependencies.outdated,
                vulnerable=metrics.dependencies.vulnerable,
            ),
            languages=[
                LanguageShareResponse(name=lang.name, percentage=lang.percentage)
                for lang in metrics.languages
            ],
            insights=list(metrics.insights),
        )


class RepositoryInfoResponse(BaseModel):
    """Successful response from ``POST /repository``."""

    name: str
    full_name: str
    description: str | None
    language: str | None
    languages: list[LanguageShareResponse]
    stars: int
    forks: int
    open_issues: int
    last_commit: datetime
    contributors: int
    default_branch: str
    url: str

    @classmethod
    def from_info(cls, info: RepositoryInfo) -> RepositoryInfoResponse:
        return cls(
            name=info.name,
            full_name=info.full_name,
            description=info.description,
            language=info.language,
            languages=[
                LanguageShareResponse(name=lang.name, percentage=lang.percentage)
                for lang in info.languages
            ],
            stars=info.stars,
            forks=info.forks,
            open_issues=info.open_issues,
            last_commit=info.last_commit,
            contributors=info.contributors,
            default_branch=info.default_branch,
            url=info.url,
        )


class CacheStatsResponse(BaseModel):
    """Response from ``GET /cache``."""

    api_entries: int
    analysis_entries: int


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
