"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from repo_quality.domain.exceptions import InvalidRepositoryUrlError

_GITHUB_URL_RE = re.compile(r"github\.com/(?P<owner>[^/]+)/(?P<name>[^/]+)")
_GIT_SUFFIX = ".git"


@dataclass(frozen=True, slots=True)
class RepositoryIdentifier:
    """The ``owner/name`` pair that addresses a GitHub repository.

    Only the path shape is checked: scheme, query string and fragment are
    not validated.
    """

    owner: str
    name: str

    @classmethod
    def from_url(cls, url: str) -> RepositoryIdentifier:
        """Parse *url*, raising :class:`InvalidRepositoryUrlError` on mismatch."""
        identifier = resolve_repository_url(url)
        if identifier is None:
            raise InvalidRepositoryUrlError(
                f"Invalid GitHub URL: '{url}'. "
                "Expected format: https://github.com/<owner>/<repo>"
            )
        return identifier

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


def resolve_repository_url(url: str) -> RepositoryIdentifier | None:
    """Extract ``(owner, name)`` from *url*, or return ``None`` if it has no such shape.

    The match is anchored on the literal ``github.com`` host substring and a
    trailing ``.git`` on the name segment is stripped.
    """
    match = _GITHUB_URL_RE.search(url)
    if not match:
        return None

    name = match["name"]
    if name.endswith(_GIT_SUFFIX):
        name = name[: -len(_GIT_SUFFIX)]
    if not name:
        return None

    return RepositoryIdentifier(owner=match["owner"], name=name)
