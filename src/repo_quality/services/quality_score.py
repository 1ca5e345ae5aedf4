"""Quality score — a banded heuristic over popularity, collaboration, recency and defects.

Every signal is looked up in its own band table, top-down; the first band
whose threshold is crossed contributes its points. The sum starts at
``BASE_SCORE`` and is clamped to ``[0, 100]``.
"""

from __future__ import annotations

from datetime import datetime, timezone

from repo_quality.domain.entities import QualitySignals

BASE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100

_SECONDS_PER_DAY = 24 * 60 * 60

# (exclusive lower bound, points)
STAR_BANDS: tuple[tuple[int, int], ...] = ((1000, 20), (500, 15), (100, 10), (10, 5))
FORK_BANDS: tuple[tuple[int, int], ...] = ((100, 10), (50, 7), (10, 5), (0, 2))
CONTRIBUTOR_BANDS: tuple[tuple[int, int], ...] = ((10, 10), (5, 7), (2, 5), (0, 2))
OPEN_ISSUE_BANDS: tuple[tuple[int, int], ...] = ((50, -20), (20, -15), (10, -10), (5, -5))
BUG_BANDS: tuple[tuple[int, int], ...] = ((10, -30), (5, -20), (2, -10), (0, -5))

# (exclusive upper bound in days, points)
RECENCY_BANDS: tuple[tuple[int, int], ...] = ((7, 10), (30, 7), (90, 5), (365, 2))


def days_since(moment: datetime, now: datetime | None = None) -> float:
    """Fractional days elapsed between *moment* and *now* (UTC)."""
    now = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (now - moment).total_seconds() / _SECONDS_PER_DAY


def _above(value: float, bands: tuple[tuple[int, int], ...]) -> int:
    for threshold, points in bands:
        if value > threshold:
            return points
    return 0


def _below(value: float, bands: tuple[tuple[int, int], ...]) -> int:
    for threshold, points in bands:
        if value < threshold:
            return points
    return 0


def calculate_quality_score(signals: QualitySignals, now: datetime | None = None) -> int:
    """Return the 0..100 quality score for *signals*.

    *now* is the reference time for the recency band; it defaults to the
    current UTC time.
    """
    score = BASE_SCORE
    score += _above(signals.stars, STAR_BANDS)
    score += _above(signals.forks, FORK_BANDS)
    score += _above(signals.contributors, CONTRIBUTOR_BANDS)
    score += _below(days_since(signals.last_commit_at, now), RECENCY_BANDS)
    score += _above(signals.open_issues, OPEN_ISSUE_BANDS)
    score += _above(signals.bug_count, BUG_BANDS)
    return max(MIN_SCORE, min(MAX_SCORE, score))
