"""Git repository abstraction.

The Repository class wraps the handful of git commands a release needs:
reading the latest tag and the commit range since it, and creating,
pushing and deleting version tags. All operations return Result types.

Usage:
    repo = Repository(Path("/path/to/repo"), remote="origin")

    match repo.latest_tag():
        case Ok(None):
            print("no tags yet")
        case Ok(tag):
            print(f"latest: {tag}")
        case Err(e):
            print(f"describe failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from draftrel.core.config import DEFAULT_GIT_NETWORK_TIMEOUT_SECONDS, DEFAULT_GIT_TIMEOUT_SECONDS
from draftrel.core.result import Err, Ok, Result
from draftrel.platform.process import ProcessError
from draftrel.platform.process import run as run_process
from draftrel.release.model import Commit

__all__ = [
    "GitError",
    "Repository",
    "parse_log",
]

_NETWORK_COMMANDS = frozenset({"fetch", "push"})

# Unit/record separators keep subjects with arbitrary punctuation intact.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = f"%H{_FIELD_SEP}%aE{_FIELD_SEP}%aN{_FIELD_SEP}%s{_RECORD_SEP}"

_NO_TAG_MARKERS = ("no names found", "no tags can describe")


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


def _git_error(command: str, error: ProcessError, fallback: str) -> GitError:
    return GitError(
        command=command,
        message=error.stderr.strip() or error.stdout.strip() or fallback,
        returncode=error.returncode,
    )


def parse_log(output: str) -> list[Commit]:
    """Parse `git log` output produced with the record/field separators."""
    commits: list[Commit] = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record.strip():
            continue
        parts = record.split(_FIELD_SEP)
        if len(parts) != 4:
            continue
        sha, email, name, subject = parts
        commits.append(
            Commit(
                sha=sha.strip(),
                subject=subject.strip(),
                author_email=email.strip(),
                author_name=name.strip(),
            )
        )
    return commits


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the repository root
        remote: Remote that version tags are pushed to
    """

    def __init__(
        self,
        path: Path,
        *,
        remote: str = "origin",
        timeout: float = DEFAULT_GIT_TIMEOUT_SECONDS,
        network_timeout: float = DEFAULT_GIT_NETWORK_TIMEOUT_SECONDS,
    ) -> None:
        self.path = path
        self.remote = remote
        self._timeout = timeout
        self._network_timeout = network_timeout

    def fetch_tags(self) -> Result[None, GitError]:
        """Refresh local tags from the remote (`git fetch --tags --force`)."""
        result = self._run(["fetch", "--tags", "--force", self.remote])
        if isinstance(result, Err):
            return Err(_git_error("fetch --tags", result.error, "fetch failed"))
        return Ok(None)

    def latest_tag(self) -> Result[str | None, GitError]:
        """Most recent tag reachable from HEAD.

        Returns:
            Ok(tag), Ok(None) if the repository has no tags at all,
            Err(GitError) if git could not answer.
        """
        result = self._run(["describe", "--tags", "--abbrev=0"])
        match result:
            case Ok(stdout):
                tag = stdout.strip()
                return Ok(tag or None)
            case Err(e):
                text = f"{e.stderr}\n{e.stdout}".lower()
                if any(marker in text for marker in _NO_TAG_MARKERS):
                    return Ok(None)
                return Err(_git_error("describe", e, "git describe failed"))

    def commits_since(self, tag: str) -> Result[list[Commit], GitError]:
        """Commits in ``<tag>..HEAD``, newest first (git's native order)."""
        result = self._run(["log", f"{tag}..HEAD", f"--pretty=format:{_LOG_FORMAT}"])
        match result:
            case Err(e):
                return Err(_git_error("log", e, "git log failed"))
            case Ok(stdout):
                return Ok(parse_log(stdout))

    def create_tag(self, tag: str) -> Result[None, GitError]:
        result = self._run(["tag", tag])
        if isinstance(result, Err):
            return Err(_git_error("tag", result.error, f"failed to create tag {tag}"))
        return Ok(None)

    def delete_tag(self, tag: str) -> Result[None, GitError]:
        result = self._run(["tag", "-d", tag])
        if isinstance(result, Err):
            return Err(_git_error("tag -d", result.error, f"failed to delete tag {tag}"))
        return Ok(None)

    def push_tag(self, tag: str) -> Result[None, GitError]:
        result = self._run(["push", self.remote, tag])
        if isinstance(result, Err):
            return Err(_git_error("push", result.error, f"failed to push tag {tag}"))
        return Ok(None)

    def delete_remote_tag(self, tag: str) -> Result[None, GitError]:
        result = self._run(["push", "--delete", self.remote, tag])
        if isinstance(result, Err):
            return Err(
                _git_error("push --delete", result.error, f"failed to delete remote tag {tag}")
            )
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = self._network_timeout if command in _NETWORK_COMMANDS else self._timeout
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)
