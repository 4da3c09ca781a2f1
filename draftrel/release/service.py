from __future__ import annotations

from dataclasses import dataclass

from draftrel.core.config import Config
from draftrel.core.result import Err, Ok, Result
from draftrel.output.console import ConsoleProtocol, Style
from draftrel.release.bump import next_version
from draftrel.release.errors import ReleaseError
from draftrel.release.history import HistoryProvider, read_history
from draftrel.release.model import BumpKind, Commit, NoChanges
from draftrel.release.notes import ReleaseNotesDocument, build_notes
from draftrel.release.publisher import PublishedRelease, ReleasePublisher
from draftrel.release.resolve import CodeHost, classify_entries, resolve_commits
from draftrel.release.semver import SemVer


@dataclass(frozen=True, slots=True)
class VersionPlan:
    base: SemVer
    bump: BumpKind
    version: SemVer
    commits: tuple[Commit, ...]


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    base: SemVer
    bump: BumpKind
    version: SemVer
    commits: tuple[Commit, ...]
    notes: ReleaseNotesDocument | NoChanges


def plan_version(
    *,
    history: HistoryProvider,
    config: Config,
    console: ConsoleProtocol,
) -> Result[VersionPlan, ReleaseError]:
    """Read the history and compute the next version. No code-host calls."""
    read = read_history(history, fetch_tags=config.git.fetch_tags)
    if isinstance(read, Err):
        return read
    base = read.value.base
    commits = read.value.commits
    console.print(f"base: {base.to_tag()} ({len(commits)} commits since)", Style.DIM)

    bump, version = next_version(base, commits)
    return Ok(VersionPlan(base=base, bump=bump, version=version, commits=commits))


def plan_release(
    *,
    history: HistoryProvider,
    host: CodeHost,
    config: Config,
    console: ConsoleProtocol,
) -> Result[ReleasePlan, ReleaseError]:
    """Compute the next version and the release notes without writing anything."""
    planned = plan_version(history=history, config=config, console=console)
    if isinstance(planned, Err):
        return planned
    v = planned.value

    notes: ReleaseNotesDocument | NoChanges
    if not v.commits:
        notes = NoChanges(base_tag=v.base.to_tag())
    else:
        resolutions = resolve_commits(v.commits, host, workers=config.github.workers)
        entries = classify_entries(v.commits, resolutions)
        notes = build_notes(entries, (r.handle for r in resolutions), base_tag=v.base.to_tag())

    return Ok(
        ReleasePlan(base=v.base, bump=v.bump, version=v.version, commits=v.commits, notes=notes)
    )


def publish_plan(
    *,
    plan: ReleasePlan,
    publisher: ReleasePublisher,
) -> Result[PublishedRelease | NoChanges, ReleaseError]:
    """Publish a planned release; a plan without changes performs no writes."""
    if isinstance(plan.notes, NoChanges):
        return Ok(plan.notes)
    return publisher.publish(plan.version, plan.notes.render())
