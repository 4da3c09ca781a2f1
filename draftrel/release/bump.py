from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from draftrel.release.classify import is_breaking_subject, is_feature_subject
from draftrel.release.model import BUMP_RANK, BumpKind, Commit
from draftrel.release.semver import SemVer


@dataclass(frozen=True, slots=True)
class Decisive:
    """The scan can stop: nothing later can outrank this bump."""

    kind: BumpKind


@dataclass(frozen=True, slots=True)
class Candidate:
    """Best bump so far; a later breaking commit may still outrank it."""

    kind: BumpKind


ScanStep = Decisive | Candidate


def _signal(subject: str) -> BumpKind | None:
    if is_breaking_subject(subject):
        return "major"
    if is_feature_subject(subject):
        return "minor"
    return None


def _step(current: BumpKind, subject: str) -> ScanStep:
    found = _signal(subject)
    if found is None or BUMP_RANK[found] <= BUMP_RANK[current]:
        return Candidate(current)
    if found == "major":
        return Decisive(found)
    return Candidate(found)


def resolve_bump(commits: Iterable[Commit]) -> BumpKind:
    """Pick the bump kind for a commit range.

    A breaking marker ends the scan immediately. A ``feat`` commit only
    raises the candidate to minor, so a breaking commit later in the
    traversal still wins. With no signal at all the bump is patch.
    """
    current: BumpKind = "patch"
    for commit in commits:
        match _step(current, commit.subject):
            case Decisive(kind):
                return kind
            case Candidate(kind):
                current = kind
    return current


def next_version(base: SemVer, commits: Iterable[Commit]) -> tuple[BumpKind, SemVer]:
    kind = resolve_bump(commits)
    return (kind, base.bump(kind))
