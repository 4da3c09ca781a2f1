from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

BumpKind = Literal["major", "minor", "patch"]
Category = Literal["feature", "fix", "developer", "other"]

BUMP_RANK: dict[BumpKind, int] = {"patch": 0, "minor": 1, "major": 2}

SHORT_SHA_LENGTH = 7


@dataclass(frozen=True, slots=True)
class Commit:
    """A commit as read from `git log`; identity is the full sha."""

    sha: str
    subject: str
    author_email: str
    author_name: str

    @property
    def short_sha(self) -> str:
        return self.sha[:SHORT_SHA_LENGTH]


@dataclass(frozen=True, slots=True)
class Classification:
    """Category and cleaned text derived from a subject line alone."""

    category: Category
    subcategory: str | None
    display_text: str


@dataclass(frozen=True, slots=True)
class ClassifiedEntry:
    category: Category
    subcategory: str | None
    display_text: str
    reference_suffix: str

    def render(self) -> str:
        text = f"{self.display_text}{self.reference_suffix}"
        if self.category == "developer" and self.subcategory:
            return f"[{self.subcategory}] {text}"
        return text


@dataclass(frozen=True, slots=True)
class CommitResolution:
    """Per-commit outcome of the code-host lookups."""

    pr_number: int | None
    handle: str


@dataclass(frozen=True, slots=True)
class NoChanges:
    """Nothing worth releasing since the base tag. Not an error."""

    base_tag: str
