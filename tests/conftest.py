"""Shared fixtures: a controllable clock and an in-memory fake of the GitHub API."""

from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
import pytest

from repo_quality.infrastructure.github_api_client import GitHubApiClient
from repo_quality.infrastructure.ttl_cache import TtlCache

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
REPO_URL = "https://github.com/octo/widget"


class FakeClock:
    """Monotonic-style clock that only moves when told to."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGitHub:
    """``httpx.MockTransport`` handler serving canned responses by path + query."""

    def __init__(self):
        self.routes: dict[str, tuple[int, Any]] = {}
        self.calls: list[httpx.Request] = []
        self.redirects: dict[str, tuple[int, str]] = {}

    def add(self, endpoint: str, body: Any, status: int = 200) -> None:
        self.routes[endpoint] = (status, body)

    def redirect(self, endpoint: str, target: str, status: int = 301) -> None:
        self.redirects[endpoint] = (status, target)

    def hits(self, endpoint: str) -> int:
        return sum(1 for req in self.calls if _endpoint(req) == endpoint)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if _endpoint(request) in self.redirects:
            status, target = self.redirects[_endpoint(request)]
            return httpx.Response(status, headers={"Location": str(request.url.join(target))})
        status, body = self.routes.get(_endpoint(request), (404, {"message": "Not Found"}))
        if isinstance(body, (bytes, str)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)


def _endpoint(request: httpx.Request) -> str:
    return request.url.raw_path.decode()


def repo_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "name": "widget",
        "full_name": "octo/widget",
        "description": "A small widget library",
        "language": "Python",
        "stargazers_count": 1200,
        "forks_count": 150,
        "open_issues_count": 3,
        "updated_at": (NOW - timedelta(days=2)).isoformat(),
        "default_branch": "main",
        "html_url": "https://github.com/octo/widget",
        "private": False,
    }
    payload.update(overrides)
    return payload


def contributors_payload(count: int, first_contributions: int = 42) -> list[dict[str, Any]]:
    return [
        {"login": f"dev{i}", "contributions": first_contributions if i == 0 else 1}
        for i in range(count)
    ]


def issue(number: int, *labels: str) -> dict[str, Any]:
    return {
        "number": number,
        "title": f"Issue {number}",
        "state": "open",
        "labels": [{"name": label} for label in labels],
    }


def serve_repository(
    github: FakeGitHub,
    repo: dict[str, Any] | None = None,
    languages: dict[str, int] | None = None,
    contributors: int = 12,
    issues: list[dict[str, Any]] | None = None,
    full_name: str = "octo/widget",
) -> None:
    """Register every endpoint the analysis pipeline touches for *full_name*."""
    base = f"/repos/{full_name}"
    github.add(base, repo if repo is not None else repo_payload())
    github.add(
        f"{base}/languages",
        languages if languages is not None else {"Python": 8000, "Shell": 2000},
    )
    github.add(f"{base}/contributors?per_page=1", contributors_payload(min(contributors, 1)))
    github.add(f"{base}/contributors?per_page=100", contributors_payload(contributors))
    github.add(
        f"{base}/issues?state=open&per_page=100",
        issues if issues is not None else [issue(1, "enhancement"), issue(2)],
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def github():
    return FakeGitHub()


@pytest.fixture
async def http_client(github):
    async with httpx.AsyncClient(transport=httpx.MockTransport(github)) as client:
        yield client


@pytest.fixture
def api(http_client, clock):
    return GitHubApiClient(client=http_client, cache=TtlCache(clock=clock))
