"""Multi-repository variants: ``relbranch multi <command> REPO...``."""

from __future__ import annotations

from pathlib import Path

import typer

from relbranch.cli.commands._helpers import exit_with, report_outcome, run_operation
from relbranch.core.errors import ErrorCode
from relbranch.core.result import Result
from relbranch.output.console import ConsoleProtocol, RichConsole
from relbranch.release.config import ConfigError
from relbranch.release.errors import ReleaseError
from relbranch.release.multi import RepoOutcome, run_all, summarize
from relbranch.release.policy import Branch, OperationRequest, SetVersion, Tag
from relbranch.release.report import StatusReport


multi_app = typer.Typer(add_completion=False, no_args_is_help=True)


def run_multi(
    op: OperationRequest,
    repos: list[Path] | None,
    *,
    yes: bool,
    dry_run: bool,
    console: ConsoleProtocol | None = None,
) -> None:
    if not repos:
        exit_with("no repositories given", code=ErrorCode.USAGE_ERROR)

    out = console or RichConsole()

    def run_one(
        path: Path, request: OperationRequest
    ) -> Result[StatusReport, ReleaseError | ConfigError]:
        result = run_operation(path, request, console=out, interactive=not yes, dry_run=dry_run)
        report_outcome(result, console=out, command=request.name)
        return result

    def on_done(outcome: RepoOutcome) -> None:
        if isinstance(op, SetVersion):
            out.print(f"exit {outcome.exit_code}")

    outcomes = run_all(
        op,
        [p.expanduser().resolve() for p in repos],
        run_one=run_one,
        on_start=lambda path: out.header(f"== {path}"),
        on_done=on_done,
    )

    counts = summarize(outcomes)
    out.newline()
    out.print(f"{counts['ok']}/{counts['total']} repositories succeeded")
    if counts["failed"]:
        for outcome in outcomes:
            if not outcome.ok:
                out.print(f"  failed: {outcome.path}")
        raise typer.Exit(code=int(ErrorCode.RELEASE_ERROR))


@multi_app.command("set-version")
def multi_set_version(
    repos: list[Path] | None = typer.Argument(None, help="Repository paths, processed in order."),
    version: str | None = typer.Option(None, "--version", help="Explicit version for every repo."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Accept computed defaults, never prompt."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Check and print the plan only."),
) -> None:
    """Run set-version in each repository."""
    run_multi(SetVersion(explicit=version), repos, yes=yes, dry_run=dry_run)


@multi_app.command("branch")
def multi_branch(
    repos: list[Path] | None = typer.Argument(None, help="Repository paths, processed in order."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Accept computed defaults, never prompt."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Check and print the plan only."),
) -> None:
    """Run branch in each repository."""
    run_multi(Branch(), repos, yes=yes, dry_run=dry_run)


@multi_app.command("tag")
def multi_tag(
    repos: list[Path] | None = typer.Argument(None, help="Repository paths, processed in order."),
    force: bool = typer.Option(False, "--force", "-f", help="Replace existing tags."),
    message: str | None = typer.Option(
        None, "--message", "-m", help="Tag annotation (default: the version)."
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Check and print the plan only."),
) -> None:
    """Run tag in each repository."""
    run_multi(Tag(force=force, message=message), repos, yes=True, dry_run=dry_run)
