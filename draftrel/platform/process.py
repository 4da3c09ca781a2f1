"""Bounded subprocess calls for git and gh.

There is no way to run a command here without a timeout: a hung network
call (fetch, push, gh api) must surface as an error, never block the run.

    match run(["git", "describe", "--tags", "--abbrev=0"], cwd=repo, timeout=30.0):
        case Ok(stdout):
            tag = stdout.strip()
        case Err(error):
            ...
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from draftrel.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]

# Used for commands that never produced an exit status (timeout, missing binary).
TIMED_OUT_RETURNCODE = -1
_TIMEOUT_PREFIX = "Command timed out after"


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that exited non-zero, timed out, or could not start."""

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def timed_out(self) -> bool:
        return self.returncode == TIMED_OUT_RETURNCODE and self.stderr.startswith(
            _TIMEOUT_PREFIX
        )

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        suffix = " ..." if len(self.command) > 3 else ""
        return f"{shown}{suffix} failed (exit {self.returncode})"


def _error(
    cmd: Sequence[str], *, returncode: int, stderr: str, stdout: str = ""
) -> Err[ProcessError]:
    return Err(ProcessError(tuple(cmd), returncode, stdout, stderr))


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float,
) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` and return its stdout.

    ``env`` replaces the inherited environment when given.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return _error(
            cmd,
            returncode=TIMED_OUT_RETURNCODE,
            stdout=partial,
            stderr=f"{_TIMEOUT_PREFIX} {timeout}s",
        )
    except OSError as e:
        return _error(cmd, returncode=TIMED_OUT_RETURNCODE, stderr=str(e))

    if proc.returncode != 0:
        return _error(cmd, returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)
    return Ok(proc.stdout)
