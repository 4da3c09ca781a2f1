"""Tag + draft release publication with compensating rollback.

States advance ``idle -> tag_created -> tag_pushed -> release_created``.
Every completed step pushes its inverse onto a compensation stack; when a
later step fails the stack is unwound newest-first, so the local and remote
repositories end up exactly as they were before the run.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal, Protocol

from draftrel.core.result import Err, Ok, Result
from draftrel.git.repository import GitError
from draftrel.output.console import ConsoleProtocol, Style
from draftrel.release.errors import ReleaseError
from draftrel.release.semver import SemVer

PublishState = Literal["idle", "tag_created", "tag_pushed", "release_created"]


class TagStore(Protocol):
    def create_tag(self, tag: str) -> Result[None, GitError]: ...

    def delete_tag(self, tag: str) -> Result[None, GitError]: ...

    def push_tag(self, tag: str) -> Result[None, GitError]: ...

    def delete_remote_tag(self, tag: str) -> Result[None, GitError]: ...


class ReleaseHost(Protocol):
    def create_release(self, *, tag: str, title: str, notes: str) -> Result[None, ReleaseError]: ...


@dataclass(frozen=True, slots=True)
class Compensation:
    description: str
    action: Callable[[], Result[None, GitError]]


@dataclass
class CompensationStack:
    _items: list[Compensation] = field(default_factory=list)

    def push(self, description: str, action: Callable[[], Result[None, GitError]]) -> None:
        self._items.append(Compensation(description=description, action=action))

    def unwind(self, console: ConsoleProtocol) -> tuple[tuple[str, ...], bool]:
        """Run every inverse action newest-first.

        Returns:
            One report line per action, and whether every action succeeded.
        """
        report: list[str] = []
        clean = True
        while self._items:
            item = self._items.pop()
            console.print(f"rollback: {item.description}", Style.DIM)
            result = item.action()
            if isinstance(result, Err):
                console.warning(f"rollback failed: {item.description}: {result.error.message}")
                report.append(f"rollback failed: {item.description}: {result.error.message}")
                clean = False
            else:
                report.append(f"rolled back: {item.description}")
        return (tuple(report), clean)


@dataclass(frozen=True, slots=True)
class PublishedRelease:
    tag: str
    title: str
    state: PublishState = "release_created"


def release_title(version: SemVer) -> str:
    return f"Release {version.to_tag()}"


class ReleasePublisher:
    def __init__(
        self,
        *,
        tags: TagStore,
        host: ReleaseHost,
        console: ConsoleProtocol,
    ) -> None:
        self._tags = tags
        self._host = host
        self._console = console
        self.state: PublishState = "idle"

    def publish(self, version: SemVer, notes: str) -> Result[PublishedRelease, ReleaseError]:
        tag = version.to_tag()
        title = release_title(version)
        stack = CompensationStack()

        created = self._tags.create_tag(tag)
        if isinstance(created, Err):
            return Err(
                ReleaseError(
                    kind="tag_create_failed",
                    message=f"failed to create tag {tag}",
                    hint=created.error.message,
                )
            )
        self.state = "tag_created"
        stack.push(f"delete local tag {tag}", lambda: self._tags.delete_tag(tag))
        self._console.print(f"tag {tag}: created", Style.DIM)

        pushed = self._tags.push_tag(tag)
        if isinstance(pushed, Err):
            return Err(
                self._rollback(
                    stack,
                    ReleaseError(
                        kind="tag_push_failed",
                        message=f"failed to push tag {tag}",
                        hint=pushed.error.message,
                    ),
                )
            )
        self.state = "tag_pushed"
        stack.push(f"delete remote tag {tag}", lambda: self._tags.delete_remote_tag(tag))
        self._console.print(f"tag {tag}: pushed", Style.DIM)

        released = self._host.create_release(tag=tag, title=title, notes=notes)
        if isinstance(released, Err):
            return Err(self._rollback(stack, released.error))
        self.state = "release_created"

        return Ok(PublishedRelease(tag=tag, title=title))

    def _rollback(self, stack: CompensationStack, error: ReleaseError) -> ReleaseError:
        self._console.warning(f"{error.message}; rolling back")
        report, clean = stack.unwind(self._console)
        if clean:
            self.state = "idle"
        return ReleaseError(
            kind=error.kind,
            message=error.message,
            hint=error.hint,
            details=(*error.details, *report),
        )
