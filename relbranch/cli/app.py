from __future__ import annotations

from pathlib import Path

import typer

from relbranch import __version__
from relbranch.cli.commands.multi_cmd import multi_app
from relbranch.cli.commands.release_cmd import branch, set_version, tag
from relbranch.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command("set-version")(set_version)
app.command()(branch)
app.command()(tag)

# Sub-apps
app.add_typer(multi_app, name="multi", help="Run a command across several repositories.")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    repo: Path | None = typer.Option(
        None,
        "--repo",
        "-C",
        help="Repository root (default: current directory)",
    ),
) -> None:
    del version
    if repo is not None and not repo.expanduser().is_dir():
        typer.echo(f"error: --repo '{repo}' is not a directory", err=True)
        raise typer.Exit(code=int(ErrorCode.RELEASE_ERROR))

    ctx.obj = repo


def main() -> None:
    app()
