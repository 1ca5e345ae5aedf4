"""Insight generator — short human-readable observations about a repository."""

from __future__ import annotations

from datetime import datetime

from repo_quality.domain.entities import QualitySignals
from repo_quality.services.quality_score import days_since

DEFAULT_INSIGHT = "Repository analysis completed"

POPULAR = "Highly popular repository with strong community support"
LOW_VISIBILITY = "Consider improving documentation and marketing to increase visibility"
ACTIVE_COMMUNITY = "Active community with many contributors"
NO_FORKS = "No forks yet - consider encouraging community contributions"
MANY_ISSUES = "High number of open issues - consider prioritizing bug fixes"
NO_ISSUES = "No open issues - great maintenance!"
MANY_BUGS = "Multiple critical bugs detected - prioritize fixes"
NO_BUGS = "No critical bugs reported"
INACTIVE = "Repository appears inactive - consider updating or archiving"
VERY_ACTIVE = "Very active repository with recent commits"
LARGE_TEAM = "Large team with distributed development"
SINGLE_CONTRIBUTOR = "Single contributor project - consider building a team"
MULTI_LANGUAGE = "Multi-language project - consider simplifying the tech stack"
FOCUSED_STACK = "Focused technology stack"


def generate_insights(signals: QualitySignals, now: datetime | None = None) -> list[str]:
    """Return at most one insight per category, or ``[DEFAULT_INSIGHT]`` if none apply."""
    insights: list[str] = []

    if signals.stars > 1000:
        insights.append(POPULAR)
    elif signals.stars < 10:
        insights.append(LOW_VISIBILITY)

    if signals.forks > 100:
        insights.append(ACTIVE_COMMUNITY)
    elif signals.forks == 0:
        insights.append(NO_FORKS)

    if signals.open_issues > 20:
        insights.append(MANY_ISSUES)
    elif signals.open_issues == 0:
        insights.append(NO_ISSUES)

    if signals.bug_count > 5:
        insights.append(MANY_BUGS)
    elif signals.bug_count == 0:
        insights.append(NO_BUGS)

    age = days_since(signals.last_commit_at, now)
    if age > 365:
        insights.append(INACTIVE)
    elif age < 7:
        insights.append(VERY_ACTIVE)

    if signals.contributors > 10:
        insights.append(LARGE_TEAM)
    elif signals.contributors == 1:
        insights.append(SINGLE_CONTRIBUTOR)

    language_count = len(signals.languages)
    if language_count > 5:
        insights.append(MULTI_LANGUAGE)
    elif language_count == 1:
        insights.append(FOCUSED_STACK)

    return insights or [DEFAULT_INSIGHT]
