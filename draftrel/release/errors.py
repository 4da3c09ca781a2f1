"""Error payload shared by every release step."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "no_tag_found",
    "history_unavailable",
    "invalid_base_version",
    "tag_create_failed",
    "tag_push_failed",
    "release_create_failed",
    "gh_missing",
    "gh_auth_required",
    "invalid_input",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error.

    ``details`` carries follow-up facts the invoker needs, such as the
    outcome of each rollback action after a failed publish step.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
    details: tuple[str, ...] = ()

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
