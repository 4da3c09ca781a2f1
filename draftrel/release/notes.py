from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from draftrel.core.result import Err, Ok, Result
from draftrel.release.contributors import sorted_handles
from draftrel.release.errors import ReleaseError
from draftrel.release.model import Category, ClassifiedEntry, NoChanges

NOTES_HEADING = "## What's Changed"

SECTION_TITLES: tuple[tuple[Category, str], ...] = (
    ("feature", "Features"),
    ("fix", "Bug Fixes"),
    ("developer", "For Developers"),
    ("other", "Other Changes"),
)
CONTRIBUTORS_TITLE = "Contributors"


@dataclass(frozen=True, slots=True)
class NotesSection:
    title: str
    items: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ReleaseNotesDocument:
    """Non-empty sections in render order."""

    sections: tuple[NotesSection, ...]

    def section(self, title: str) -> NotesSection | None:
        for s in self.sections:
            if s.title == title:
                return s
        return None

    def render(self) -> str:
        lines: list[str] = [NOTES_HEADING]
        for s in self.sections:
            lines.append("")
            lines.append(f"### {s.title}")
            lines.extend(f"- {item}" for item in s.items)
        return "\n".join(lines) + "\n"


def build_notes(
    entries: Sequence[ClassifiedEntry],
    handles: Iterable[str],
    *,
    base_tag: str,
) -> ReleaseNotesDocument | NoChanges:
    """Group entries by category, keeping traversal order inside each group.

    Contributors alone never make a release: with no entries the result is
    NoChanges.
    """
    sections: list[NotesSection] = []
    for category, title in SECTION_TITLES:
        items = tuple(e.render() for e in entries if e.category == category)
        if items:
            sections.append(NotesSection(title=title, items=items))

    if not sections:
        return NoChanges(base_tag=base_tag)

    contributors = sorted_handles(handles)
    if contributors:
        sections.append(
            NotesSection(title=CONTRIBUTORS_TITLE, items=tuple(f"@{h}" for h in contributors))
        )

    return ReleaseNotesDocument(sections=tuple(sections))


def write_notes_file(*, path: Path, document: ReleaseNotesDocument) -> Result[Path, ReleaseError]:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document.render(), encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"failed to write release notes: {e}",
                hint=str(path),
            )
        )
    return Ok(path)
