"""Single-repository commands: set-version, branch, tag."""

from __future__ import annotations

import typer

from relbranch.cli.commands._helpers import report_outcome, run_operation
from relbranch.cli.context import build_context
from relbranch.release.policy import Branch, OperationRequest, SetVersion, Tag


def _run(ctx: typer.Context, op: OperationRequest, *, yes: bool, dry_run: bool) -> None:
    cli = build_context(ctx.obj)
    result = run_operation(
        cli.repo,
        op,
        console=cli.console,
        interactive=not yes,
        dry_run=dry_run,
    )
    code = report_outcome(result, console=cli.console, command=op.name)
    if code:
        raise typer.Exit(code=code)


def set_version(
    ctx: typer.Context,
    version: str | None = typer.Argument(
        None, help="New trunk version (MAJOR.MINOR.PATCH). Prompted when omitted."
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Accept computed defaults, never prompt."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Check and print the plan only."),
) -> None:
    """Set the trunk version (default: current version with minor bumped)."""
    _run(ctx, SetVersion(explicit=version), yes=yes, dry_run=dry_run)


def branch(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Accept computed defaults, never prompt."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Check and print the plan only."),
) -> None:
    """Cut release/<major>.<minor> from the trunk and bump the trunk minor version."""
    _run(ctx, Branch(), yes=yes, dry_run=dry_run)


def tag(
    ctx: typer.Context,
    tag_options: list[str] | None = typer.Argument(
        None, help="Extra options passed to git tag (after --)."
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Replace an existing tag."),
    message: str | None = typer.Option(
        None, "--message", "-m", help="Tag annotation (default: the version)."
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Check and print the plan only."),
) -> None:
    """Tag the release branch version and bump its patch version."""
    op = Tag(force=force, message=message, extra_args=tuple(tag_options or ()))
    _run(ctx, op, yes=True, dry_run=dry_run)
