from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from draftrel.core.config import Config, load_config_or_default
from draftrel.core.errors import ErrorCode
from draftrel.core.result import Err
from draftrel.git.repository import Repository
from draftrel.output.console import ConsoleProtocol, RichConsole
from draftrel.release.gh import GhCodeHost

REPO_ENV_VAR = "DRAFTREL_REPO"


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo_root: Path
    config: Config
    console: ConsoleProtocol
    repository: Repository
    host: GhCodeHost


def detect_repo_root() -> Path:
    env = os.environ.get(REPO_ENV_VAR)
    if env:
        return Path(env).expanduser().resolve()
    return Path.cwd().resolve()


def build_context() -> CLIContext:
    root = detect_repo_root()
    if not root.is_dir():
        typer.echo(f"error: repository root not found: {root}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config_result = load_config_or_default(root)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    config = config_result.value

    return CLIContext(
        repo_root=root,
        config=config,
        console=RichConsole(),
        repository=Repository(
            root,
            remote=config.git.remote,
            timeout=config.git.timeout,
            network_timeout=config.git.network_timeout,
        ),
        host=GhCodeHost(
            repo_root=root,
            timeout=config.github.timeout,
            retry_attempts=config.github.read_retry_attempts,
        ),
    )
