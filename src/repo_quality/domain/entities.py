"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class Complexity(str, Enum):
    """Coarse onboarding-difficulty tier of a repository."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class LanguageShare:
    """One language and its rounded share (0..100) of the repository's bytes."""

    name: str
    percentage: int


@dataclass(frozen=True, slots=True)
class RepositoryInfo:
    """Assembled view of a remote GitHub repository."""

    name: str
    full_name: str
    description: str | None
    language: str | None
    languages: tuple[LanguageShare, ...]
    stars: int
    forks: int
    open_issues: int
    last_commit: datetime
    contributors: int
    default_branch: str
    url: str


@dataclass(frozen=True, slots=True)
class DependencyHealth:
    """Placeholder for dependency scanning; both counters stay at zero."""

    outdated: int = 0
    vulnerable: int = 0


@dataclass(frozen=True, slots=True)
class QualitySignals:
    """Raw repository attributes fed to the scoring, complexity and insight functions."""

    stars: int
    forks: int
    open_issues: int
    bug_count: int
    contributors: int
    last_commit_at: datetime
    languages: tuple[LanguageShare, ...] = ()


@dataclass(frozen=True, slots=True)
class QualityMetrics:
    """Final output of a code-quality analysis."""

    overall_score: int
    open_issues: int
    critical_bugs: int
    complexity: Complexity
    last_commit: datetime
    contributors: int
    languages: tuple[LanguageShare, ...]
    insights: tuple[str, ...]
    test_coverage: int = 0
    dependencies: DependencyHealth = field(default_factory=DependencyHealth)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A memoised API response; ``fetched_at`` is read from the cache's clock."""

    key: str
    data: Any
    fetched_at: float
