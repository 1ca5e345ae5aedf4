"""Complexity tier from language diversity and team size."""

from __future__ import annotations

from collections.abc import Sequence

from repo_quality.domain.entities import Complexity, LanguageShare


def classify_complexity(languages: Sequence[LanguageShare], contributors: int) -> Complexity:
    """Map language spread and contributor count to a :class:`Complexity` tier.

    The "top" language is the first entry as returned by GitHub, not
    necessarily the one with the largest share. An empty language list is
    not treated as a spread-out stack.
    """
    count = len(languages)
    top_percentage = languages[0].percentage if languages else 100

    if count > 5 or contributors > 10 or top_percentage < 60:
        return Complexity.HIGH
    if count > 2 or contributors > 3 or top_percentage < 80:
        return Complexity.MEDIUM
    return Complexity.LOW
