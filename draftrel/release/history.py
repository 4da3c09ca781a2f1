from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from draftrel.core.result import Err, Ok, Result
from draftrel.git.repository import GitError
from draftrel.release.errors import ReleaseError
from draftrel.release.model import Commit
from draftrel.release.semver import SemVer, parse_tag


class HistoryProvider(Protocol):
    """The subset of git a history read needs."""

    def fetch_tags(self) -> Result[None, GitError]: ...

    def latest_tag(self) -> Result[str | None, GitError]: ...

    def commits_since(self, tag: str) -> Result[list[Commit], GitError]: ...


@dataclass(frozen=True, slots=True)
class History:
    base: SemVer
    commits: tuple[Commit, ...]


def _unavailable(error: GitError) -> ReleaseError:
    return ReleaseError(
        kind="history_unavailable",
        message=f"git {error.command} failed",
        hint=error.message,
    )


def latest_version(provider: HistoryProvider) -> Result[SemVer, ReleaseError]:
    tag = provider.latest_tag()
    if isinstance(tag, Err):
        return Err(_unavailable(tag.error))

    if tag.value is None:
        return Err(
            ReleaseError(
                kind="no_tag_found",
                message="no version tag found",
                hint="Create the first release tag by hand, e.g.: git tag v0.1.0",
            )
        )

    version = parse_tag(tag.value)
    if version is None:
        return Err(
            ReleaseError(
                kind="invalid_base_version",
                message=f"latest tag is not a vX.Y.Z version: {tag.value}",
            )
        )
    return Ok(version)


def read_history(provider: HistoryProvider, *, fetch_tags: bool) -> Result[History, ReleaseError]:
    """Latest version tag plus the commits made since, newest first."""
    if fetch_tags:
        fetched = provider.fetch_tags()
        if isinstance(fetched, Err):
            return Err(_unavailable(fetched.error))

    base = latest_version(provider)
    if isinstance(base, Err):
        return base

    commits = provider.commits_since(base.value.to_tag())
    if isinstance(commits, Err):
        return Err(_unavailable(commits.error))

    return Ok(History(base=base.value, commits=tuple(commits.value)))
