from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from relbranch.cli.context import open_workflow
from relbranch.core.errors import ErrorCode
from relbranch.core.result import Err, Ok, Result
from relbranch.output.console import ConsoleProtocol
from relbranch.output.errors import print_release_error, release_error_exit_code
from relbranch.release.config import ConfigError
from relbranch.release.errors import ReleaseError
from relbranch.release.policy import OperationRequest
from relbranch.release.report import StatusReport


def exit_with(err: str, *, code: ErrorCode) -> NoReturn:
    typer.echo(f"error: {err}", err=True)
    raise typer.Exit(code=int(code))


def config_error_text(error: ConfigError) -> str:
    if error.path is not None:
        return f"{error.message} ({error.path})"
    return error.message


def run_operation(
    repo: Path,
    op: OperationRequest,
    *,
    console: ConsoleProtocol,
    interactive: bool,
    dry_run: bool,
) -> Result[StatusReport, ReleaseError | ConfigError]:
    workflow = open_workflow(repo, console=console, interactive=interactive, dry_run=dry_run)
    if isinstance(workflow, Err):
        return workflow
    return workflow.value.run(op)


def report_outcome(
    result: Result[StatusReport, ReleaseError | ConfigError],
    *,
    console: ConsoleProtocol,
    command: str,
) -> int:
    """Print the outcome of one operation and return its exit code."""
    match result:
        case Ok(report):
            console.newline()
            console.status_table(report)
            if report.dry_run:
                console.info(f"{command}: dry run, nothing was changed")
            else:
                console.success(f"{command}: done")
            return int(ErrorCode.OK)
        case Err(ConfigError() as error):
            console.error(f"{command}: {config_error_text(error)}")
            return int(ErrorCode.RELEASE_ERROR)
        case Err(error):
            print_release_error(error, console, command=command)
            return release_error_exit_code(error)
