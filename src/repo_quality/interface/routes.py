"""API routes — thin controllers that delegate to the code-quality service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from repo_quality.interface.dependencies import get_service
from repo_quality.interface.schemas import (
    CacheStatsResponse,
    ErrorResponse,
    QualityMetricsResponse,
    RepositoryInfoResponse,
    RepositoryRequest,
)
from repo_quality.services.analyze_quality import CodeQualityService

router = APIRouter()


@router.post("/analyze", response_model=QualityMetricsResponse)
async def analyze(
    body: RepositoryRequest,
    service: CodeQualityService = Depends(get_service),
) -> QualityMetricsResponse:
    """Score a public GitHub repository; failures yield zero-score fallback metrics."""
    metrics = await service.analyze_code_quality(body.github_url)
    return QualityMetricsResponse.from_metrics(metrics)


@router.post(
    "/repository",
    response_model=RepositoryInfoResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid GitHub URL"},
        403: {
            "model": ErrorResponse,
            "description": "Rate limit exceeded or repository is private",
        },
        404: {"model": ErrorResponse, "description": "Repository not found"},
        502: {"model": ErrorResponse, "description": "GitHub API error"},
    },
)
async def repository(
    body: RepositoryRequest,
    service: CodeQualityService = Depends(get_service),
) -> RepositoryInfoResponse:
    """Return metadata, language breakdown and contributor proxy for a repository."""
    info = await service.get_repository_info(body.github_url)
    return RepositoryInfoResponse.from_info(info)


@router.get("/cache", response_model=CacheStatsResponse)
async def cache_stats(
    service: CodeQualityService = Depends(get_service),
) -> CacheStatsResponse:
    return CacheStatsResponse(**service.cache_stats())


@router.delete("/cache", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cache(
    service: CodeQualityService = Depends(get_service),
) -> Response:
    service.clear_cache()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
