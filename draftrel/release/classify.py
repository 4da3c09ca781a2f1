"""Conventional-commit header parsing.

Everything here is a pure function of the subject line: no I/O and no
state, so the same subject always lands in the same section with the same
text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from draftrel.release.model import Classification

# <type>(<scope>)!: <text>
_HEADER_RE = re.compile(r"^(?P<type>[A-Za-z]+)(?:\((?P<scope>[^)]*)\))?(?P<bang>!)?: +(?P<text>.*)$")

DEVELOPER_TYPES = frozenset({"style", "refactor", "test", "build", "ci", "docs"})

BREAKING_CHANGE_MARKER = "BREAKING CHANGE"


@dataclass(frozen=True, slots=True)
class CommitHeader:
    type: str
    scope: str | None
    breaking: bool
    text: str


def parse_header(subject: str) -> CommitHeader | None:
    m = _HEADER_RE.match(subject)
    if m is None:
        return None
    return CommitHeader(
        type=m.group("type"),
        scope=m.group("scope"),
        breaking=m.group("bang") is not None,
        text=m.group("text"),
    )


def classify_subject(subject: str) -> Classification:
    header = parse_header(subject)
    if header is None:
        return Classification(category="other", subcategory=None, display_text=subject)

    if header.type == "feat":
        return Classification(category="feature", subcategory=None, display_text=header.text)
    if header.type == "fix":
        return Classification(category="fix", subcategory=None, display_text=header.text)
    if header.type in DEVELOPER_TYPES:
        return Classification(
            category="developer", subcategory=header.type, display_text=header.text
        )

    # Unknown types (chore, perf, ...) keep their prefix.
    return Classification(category="other", subcategory=None, display_text=subject)


def is_breaking_subject(subject: str) -> bool:
    """Only the subject is inspected; a BREAKING CHANGE footer in the body is not seen."""
    if BREAKING_CHANGE_MARKER in subject:
        return True
    header = parse_header(subject)
    return header is not None and header.breaking


def is_feature_subject(subject: str) -> bool:
    header = parse_header(subject)
    return header is not None and header.type == "feat"
