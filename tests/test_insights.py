"""
Tests for the insight generator.
"""

from datetime import timedelta

from conftest import NOW
from repo_quality.domain.entities import LanguageShare, QualitySignals
from repo_quality.services import insights as ins
from repo_quality.services.insights import generate_insights


def neutral(**overrides):
    """Signals that sit between every insight threshold."""
    values = {
        "stars": 50,
        "forks": 20,
        "open_issues": 5,
        "bug_count": 2,
        "contributors": 4,
        "last_commit_at": NOW - timedelta(days=60),
        "languages": (LanguageShare("Python", 70), LanguageShare("Shell", 30)),
    }
    values.update(overrides)
    return QualitySignals(**values)


def test_neutral_signals_give_default_insight():
    assert generate_insights(neutral(), now=NOW) == [ins.DEFAULT_INSIGHT]


def test_never_empty_for_no_languages():
    assert generate_insights(neutral(languages=()), now=NOW) == [ins.DEFAULT_INSIGHT]


def test_positive_insights_in_category_order():
    result = generate_insights(
        neutral(
            stars=5000,
            forks=500,
            open_issues=0,
            bug_count=0,
            contributors=30,
            last_commit_at=NOW - timedelta(days=1),
            languages=(LanguageShare("Go", 100),),
        ),
        now=NOW,
    )
    assert result == [
        ins.POPULAR,
        ins.ACTIVE_COMMUNITY,
        ins.NO_ISSUES,
        ins.NO_BUGS,
        ins.VERY_ACTIVE,
        ins.LARGE_TEAM,
        ins.FOCUSED_STACK,
    ]


def test_warning_insights_in_category_order():
    result = generate_insights(
        neutral(
            stars=3,
            forks=0,
            open_issues=21,
            bug_count=6,
            contributors=1,
            last_commit_at=NOW - timedelta(days=400),
            languages=tuple(LanguageShare(f"L{i}", 10) for i in range(6)),
        ),
        now=NOW,
    )
    assert result == [
        ins.LOW_VISIBILITY,
        ins.NO_FORKS,
        ins.MANY_ISSUES,
        ins.MANY_BUGS,
        ins.INACTIVE,
        ins.SINGLE_CONTRIBUTOR,
        ins.MULTI_LANGUAGE,
    ]


def test_categories_are_independent():
    result = generate_insights(
        neutral(stars=1001, last_commit_at=NOW - timedelta(days=3)), now=NOW
    )
    assert result == [ins.POPULAR, ins.VERY_ACTIVE]


def test_boundaries_do_not_fire():
    result = generate_insights(
        neutral(
            stars=1000,
            forks=100,
            open_issues=20,
            bug_count=5,
            contributors=10,
            last_commit_at=NOW - timedelta(days=365),
        ),
        now=NOW,
    )
    assert result == [ins.DEFAULT_INSIGHT]


def test_zero_contributors_gives_no_team_insight():
    assert generate_insights(neutral(contributors=0), now=NOW) == [ins.DEFAULT_INSIGHT]
