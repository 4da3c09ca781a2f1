from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from draftrel.cli.context import CLIContext, build_context
from draftrel.core.result import Err
from draftrel.output.console import ConsoleProtocol, Style
from draftrel.output.errors import print_release_error, release_error_exit_code
from draftrel.release.errors import ReleaseError
from draftrel.release.gh import ensure_gh_auth, ensure_gh_available
from draftrel.release.model import NoChanges
from draftrel.release.notes import write_notes_file
from draftrel.release.publisher import ReleasePublisher, release_title
from draftrel.release.service import ReleasePlan, plan_release, plan_version, publish_plan


def _fail(error: ReleaseError, console: ConsoleProtocol) -> NoReturn:
    print_release_error(error, console)
    raise typer.Exit(code=release_error_exit_code(error))


def _plan_or_exit(ctx: CLIContext) -> ReleasePlan:
    planned = plan_release(
        history=ctx.repository,
        host=ctx.host,
        config=ctx.config,
        console=ctx.console,
    )
    if isinstance(planned, Err):
        _fail(planned.error, ctx.console)
    return planned.value


def _report_no_changes(plan: ReleasePlan, console: ConsoleProtocol) -> None:
    console.info(f"no changes to document since {plan.base.to_tag()}; nothing to publish")


def _ensure_gh_or_exit(ctx: CLIContext) -> None:
    ok = ensure_gh_available()
    if isinstance(ok, Err):
        _fail(ok.error, ctx.console)
    ok = ensure_gh_auth(repo_root=ctx.repo_root, timeout=ctx.config.github.timeout)
    if isinstance(ok, Err):
        _fail(ok.error, ctx.console)


def next_version_cmd() -> None:
    """Print the tag the next release would get."""
    ctx = build_context()
    planned = plan_version(history=ctx.repository, config=ctx.config, console=ctx.console)
    if isinstance(planned, Err):
        _fail(planned.error, ctx.console)
    plan = planned.value
    ctx.console.print(f"bump: {plan.bump}", Style.DIM)
    typer.echo(plan.version.to_tag())


def notes_cmd(
    out: Path | None = typer.Option(None, "--out", help="Also write the notes to this file."),
) -> None:
    """Render the release notes for the commits since the latest tag."""
    ctx = build_context()
    _ensure_gh_or_exit(ctx)
    plan = _plan_or_exit(ctx)
    if isinstance(plan.notes, NoChanges):
        _report_no_changes(plan, ctx.console)
        return

    ctx.console.markdown(plan.notes.render())
    if out is not None:
        written = write_notes_file(path=out, document=plan.notes)
        if isinstance(written, Err):
            _fail(written.error, ctx.console)


def publish_cmd(
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the plan, write nothing."),
    notes_out: Path | None = typer.Option(
        None, "--notes-out", help="Also write the rendered notes to this file."
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Tag the next version and open a draft release with generated notes."""
    ctx = build_context()
    console = ctx.console
    _ensure_gh_or_exit(ctx)

    plan = _plan_or_exit(ctx)
    if isinstance(plan.notes, NoChanges):
        _report_no_changes(plan, console)
        return

    console.header(f"{release_title(plan.version)} ({plan.bump} bump from {plan.base.to_tag()})")
    console.markdown(plan.notes.render())

    if notes_out is not None:
        written = write_notes_file(path=notes_out, document=plan.notes)
        if isinstance(written, Err):
            _fail(written.error, console)
        console.print(f"notes: {written.value}", Style.DIM)

    if dry_run:
        console.info("dry run: no tag or release created")
        return

    if not yes and not typer.confirm(f"Publish {plan.version.to_tag()}?", default=False):
        console.info("aborted")
        raise typer.Exit(code=1)

    publisher = ReleasePublisher(
        tags=ctx.repository,
        host=ctx.host,
        console=console,
    )
    published = publish_plan(plan=plan, publisher=publisher)
    if isinstance(published, Err):
        _fail(published.error, console)

    if isinstance(published.value, NoChanges):
        _report_no_changes(plan, console)
        return

    console.success(f"draft release created: {published.value.title}")
