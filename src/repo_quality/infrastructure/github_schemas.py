"""Pydantic schemas for the GitHub payloads this package consumes.

Only the fields actually read are declared; everything else is ignored.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from repo_quality.domain.exceptions import GitHubApiError

T = TypeVar("T")


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class RepositoryPayload(_Payload):
    """``GET /repos/{owner}/{repo}``."""

    name: str
    full_name: str
    description: str | None = None
    language: str | None = None
    stargazers_count: int
    forks_count: int
    open_issues_count: int
    updated_at: datetime
    default_branch: str
    html_url: str


class ContributorPayload(_Payload):
    """One entry of ``GET /repos/{owner}/{repo}/contributors``."""

    login: str | None = None
    contributions: int = 0


class LabelPayload(_Payload):
    name: str


class IssuePayload(_Payload):
    """One entry of ``GET /repos/{owner}/{repo}/issues``."""

    number: int
    title: str = ""
    state: str = "open"
    labels: list[LabelPayload] = []


_REPOSITORY = TypeAdapter(RepositoryPayload)
_LANGUAGES = TypeAdapter(dict[str, int])
_CONTRIBUTORS = TypeAdapter(list[ContributorPayload])
_ISSUES = TypeAdapter(list[IssuePayload])


def _decode(adapter: TypeAdapter[T], data: Any, what: str) -> T:
    try:
        return adapter.validate_python(data)
    except ValidationError as exc:
        raise GitHubApiError(
            f"Unexpected GitHub {what} payload: {exc.error_count()} validation error(s)"
        ) from exc


def decode_repository(data: Any) -> RepositoryPayload:
    return _decode(_REPOSITORY, data, "repository")


def decode_languages(data: Any) -> dict[str, int]:
    return _decode(_LANGUAGES, data, "languages")


def decode_contributors(data: Any) -> list[ContributorPayload]:
    return _decode(_CONTRIBUTORS, data, "contributors")


def decode_issues(data: Any) -> list[IssuePayload]:
    return _decode(_ISSUES, data, "issues")
