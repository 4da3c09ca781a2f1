from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

from draftrel.core.config import DEFAULT_WORKERS
from draftrel.release.classify import classify_subject
from draftrel.release.contributors import resolve_handle
from draftrel.release.model import ClassifiedEntry, Commit, CommitResolution


class CodeHost(Protocol):
    """Read-only code-host lookups. Implementations map every failure to None."""

    def find_pr_number(self, sha: str) -> int | None: ...

    def pr_author_login(self, number: int) -> str | None: ...


def reference_suffix(commit: Commit, pr_number: int | None) -> str:
    if pr_number is not None:
        return f" (#{pr_number})"
    return f" ({commit.short_sha})"


def resolve_commit(commit: Commit, host: CodeHost) -> CommitResolution:
    pr_number = host.find_pr_number(commit.sha)
    return CommitResolution(
        pr_number=pr_number,
        handle=resolve_handle(commit, pr_number, host),
    )


def resolve_commits(
    commits: Sequence[Commit],
    host: CodeHost,
    *,
    workers: int = DEFAULT_WORKERS,
) -> list[CommitResolution]:
    """Resolve PR numbers and handles for every commit on a bounded pool.

    The returned list is index-aligned with ``commits``.
    """
    if not commits:
        return []
    with ThreadPoolExecutor(max_workers=max(1, min(workers, len(commits)))) as pool:
        return list(pool.map(lambda c: resolve_commit(c, host), commits))


def classify_entries(
    commits: Sequence[Commit], resolutions: Sequence[CommitResolution]
) -> list[ClassifiedEntry]:
    entries: list[ClassifiedEntry] = []
    for commit, resolution in zip(commits, resolutions, strict=True):
        c = classify_subject(commit.subject)
        entries.append(
            ClassifiedEntry(
                category=c.category,
                subcategory=c.subcategory,
                display_text=c.display_text,
                reference_suffix=reference_suffix(commit, resolution.pr_number),
            )
        )
    return entries
