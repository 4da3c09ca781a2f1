from __future__ import annotations

import json
import shutil
from dataclasses import dataclass
from pathlib import Path
from time import sleep

from draftrel.core.config import DEFAULT_GH_READ_RETRY_ATTEMPTS, DEFAULT_GH_TIMEOUT_SECONDS
from draftrel.core.result import Err, Ok, Result
from draftrel.core.structured import as_obj_list, as_str_dict, get_int, get_str, get_table
from draftrel.platform.process import ProcessError
from draftrel.platform.process import run as run_process
from draftrel.release.errors import ReleaseError

GH_READ_RETRY_DELAY_SECONDS = 1.0


def _is_transient_gh_error(error: ProcessError) -> bool:
    text = f"{error.stderr}\n{error.stdout}".lower()
    markers = (
        "timed out",
        "timeout",
        "connection reset",
        "connection refused",
        "temporarily unavailable",
        "service unavailable",
        "bad gateway",
        "gateway timeout",
        "network is unreachable",
        "http 429",
        "http 500",
        "http 502",
        "http 503",
        "http 504",
    )
    return any(marker in text for marker in markers)


def run_gh_read(
    *,
    repo_root: Path,
    cmd: list[str],
    timeout: float = DEFAULT_GH_TIMEOUT_SECONDS,
    retry_attempts: int = DEFAULT_GH_READ_RETRY_ATTEMPTS,
) -> Result[str, ProcessError]:
    """Run an idempotent gh query, retrying transient failures with linear backoff.

    A read that hit the local timeout is not retried.
    """
    attempts = max(1, retry_attempts)
    result = run_process(cmd, cwd=repo_root, timeout=timeout)
    for attempt in range(1, attempts):
        if isinstance(result, Ok) or result.error.timed_out:
            break
        if not _is_transient_gh_error(result.error):
            break
        sleep(GH_READ_RETRY_DELAY_SECONDS * attempt)
        result = run_process(cmd, cwd=repo_root, timeout=timeout)
    return result


def _read_json(
    *, repo_root: Path, cmd: list[str], timeout: float, retry_attempts: int
) -> object | None:
    result = run_gh_read(
        repo_root=repo_root, cmd=cmd, timeout=timeout, retry_attempts=retry_attempts
    )
    if isinstance(result, Err):
        return None
    try:
        obj: object = json.loads(result.value)
    except json.JSONDecodeError:
        return None
    return obj


def ensure_gh_available() -> Result[None, ReleaseError]:
    if shutil.which("gh") is None:
        return Err(
            ReleaseError(
                kind="gh_missing",
                message="gh: missing",
                hint="Install GitHub CLI: https://cli.github.com/",
            )
        )
    return Ok(None)


def ensure_gh_auth(
    *, repo_root: Path, timeout: float = DEFAULT_GH_TIMEOUT_SECONDS
) -> Result[None, ReleaseError]:
    result = run_process(["gh", "auth", "status"], cwd=repo_root, timeout=timeout)
    if isinstance(result, Err):
        return Err(
            ReleaseError(
                kind="gh_auth_required",
                message="gh auth required",
                hint="Run: gh auth login",
            )
        )
    return Ok(None)


@dataclass(frozen=True, slots=True)
class GhCodeHost:
    """Code-host queries and commands backed by the gh CLI.

    Lookups never fail loudly: an unreachable API, a timeout, a missing PR or
    an unexpected payload all read as "not found".
    """

    repo_root: Path
    timeout: float = DEFAULT_GH_TIMEOUT_SECONDS
    retry_attempts: int = DEFAULT_GH_READ_RETRY_ATTEMPTS

    def find_pr_number(self, sha: str) -> int | None:
        """PR linked to a commit: search merged PRs first, then `gh pr view <sha>`."""
        found = _read_json(
            repo_root=self.repo_root,
            cmd=[
                "gh", "pr", "list",
                "--search", sha,
                "--state", "merged",
                "--json", "number",
                "--limit", "1",
            ],
            timeout=self.timeout,
            retry_attempts=self.retry_attempts,
        )
        items = as_obj_list(found)
        if items:
            first = as_str_dict(items[0])
            number = get_int(first, "number") if first is not None else None
            if number is not None:
                return number

        viewed = as_str_dict(
            _read_json(
                repo_root=self.repo_root,
                cmd=["gh", "pr", "view", sha, "--json", "number"],
                timeout=self.timeout,
                retry_attempts=self.retry_attempts,
            )
        )
        if viewed is None:
            return None
        return get_int(viewed, "number")

    def pr_author_login(self, number: int) -> str | None:
        data = as_str_dict(
            _read_json(
                repo_root=self.repo_root,
                cmd=["gh", "pr", "view", str(number), "--json", "author"],
                timeout=self.timeout,
                retry_attempts=self.retry_attempts,
            )
        )
        if data is None:
            return None
        author = get_table(data, "author")
        if author is None:
            return None
        return get_str(author, "login")

    def create_release(self, *, tag: str, title: str, notes: str) -> Result[None, ReleaseError]:
        cmd = ["gh", "release", "create", tag, "--title", title, "--notes", notes]
        cmd += ["--verify-tag", "--draft"]
        result = run_process(cmd, cwd=self.repo_root, timeout=self.timeout)
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="release_create_failed",
                    message=f"failed to create release {tag}",
                    hint=result.error.stderr.strip() or None,
                )
            )
        return Ok(None)
