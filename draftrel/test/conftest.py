from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from draftrel.core.result import Err, Ok, Result
from draftrel.git.repository import GitError
from draftrel.release.errors import ReleaseError
from draftrel.release.model import Commit


def make_commit(
    subject: str,
    *,
    n: int = 1,
    email: str = "dev@example.com",
    name: str = "Dev Person",
) -> Commit:
    return Commit(
        sha=f"{n:x}".rjust(40, "a"),
        subject=subject,
        author_email=email,
        author_name=name,
    )


@dataclass
class FakeHistory:
    """In-memory history provider."""

    tag: str | None = "v1.2.3"
    commits: list[Commit] = field(default_factory=list)
    fail: str | None = None
    calls: list[str] = field(default_factory=list)

    def fetch_tags(self) -> Result[None, GitError]:
        self.calls.append("fetch_tags")
        if self.fail == "fetch":
            return Err(GitError(command="fetch --tags", message="could not resolve host"))
        return Ok(None)

    def latest_tag(self) -> Result[str | None, GitError]:
        self.calls.append("latest_tag")
        if self.fail == "describe":
            return Err(GitError(command="describe", message="not a git repository"))
        return Ok(self.tag)

    def commits_since(self, tag: str) -> Result[list[Commit], GitError]:
        self.calls.append(f"commits_since:{tag}")
        if self.fail == "log":
            return Err(GitError(command="log", message="bad revision"))
        return Ok(list(self.commits))


@dataclass
class FakeHost:
    """Code host with canned PR numbers and authors; counts every call."""

    prs: dict[str, int] = field(default_factory=dict)
    authors: dict[int, str] = field(default_factory=dict)
    release_error: str | None = None
    pr_lookups: list[str] = field(default_factory=list)
    author_lookups: list[int] = field(default_factory=list)
    releases: list[dict[str, object]] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def find_pr_number(self, sha: str) -> int | None:
        with self._lock:
            self.pr_lookups.append(sha)
        return self.prs.get(sha)

    def pr_author_login(self, number: int) -> str | None:
        with self._lock:
            self.author_lookups.append(number)
        return self.authors.get(number)

    def create_release(self, *, tag: str, title: str, notes: str) -> Result[None, ReleaseError]:
        if self.release_error is not None:
            return Err(
                ReleaseError(
                    kind="release_create_failed",
                    message=f"failed to create release {tag}",
                    hint=self.release_error,
                )
            )
        self.releases.append({"tag": tag, "title": title, "notes": notes})
        return Ok(None)


@dataclass
class FakeTags:
    """Local + remote tag store; ``fail_on`` names the operation that errors."""

    local: set[str] = field(default_factory=set)
    remote: set[str] = field(default_factory=set)
    fail_on: set[str] = field(default_factory=set)
    log: list[str] = field(default_factory=list)

    def _step(self, op: str, tag: str, apply: Callable[[], None]) -> Result[None, GitError]:
        self.log.append(f"{op}:{tag}")
        if op in self.fail_on:
            return Err(GitError(command=op, message=f"{op} rejected"))
        apply()
        return Ok(None)

    def create_tag(self, tag: str) -> Result[None, GitError]:
        return self._step("create", tag, lambda: self.local.add(tag))

    def delete_tag(self, tag: str) -> Result[None, GitError]:
        return self._step("delete", tag, lambda: self.local.discard(tag))

    def push_tag(self, tag: str) -> Result[None, GitError]:
        return self._step("push", tag, lambda: self.remote.add(tag))

    def delete_remote_tag(self, tag: str) -> Result[None, GitError]:
        return self._step("delete_remote", tag, lambda: self.remote.discard(tag))


@pytest.fixture
def commit_factory() -> Callable[..., Commit]:
    return make_commit


@pytest.fixture
def fake_history() -> FakeHistory:
    return FakeHistory()


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def fake_tags() -> FakeTags:
    return FakeTags()
