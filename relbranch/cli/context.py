from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relbranch.core.result import Err, Ok, Result
from relbranch.git.repository import Repository
from relbranch.output.console import ConsoleProtocol, RichConsole
from relbranch.release.config import ConfigError, resolve_config
from relbranch.release.hook import resolve_hook
from relbranch.release.prompt import DefaultResolver, PromptResolver, VersionResolver
from relbranch.release.workflow import ReleaseWorkflow


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo: Path
    console: ConsoleProtocol


def build_context(repo: Path | None) -> CLIContext:
    root = (repo or Path.cwd()).expanduser().resolve()
    return CLIContext(repo=root, console=RichConsole())


def find_repository(path: Path) -> Repository:
    """Repository for the work tree containing ``path``.

    Outside a work tree ``path`` is kept as is, so the workflow reports it as
    not a repository.
    """
    match Repository(path).root():
        case Ok(root):
            return Repository(root)
        case Err(_):
            return Repository(path)


def open_workflow(
    repo: Path,
    *,
    console: ConsoleProtocol,
    interactive: bool,
    dry_run: bool,
) -> Result[ReleaseWorkflow, ConfigError]:
    """Resolve configuration for ``repo`` and wire a workflow for it.

    ``repo`` may be any directory inside the work tree; the record, hook and
    config file are resolved against the top-level directory.
    """
    vcs = find_repository(repo)
    root = vcs.path
    config = resolve_config(root, vcs.config_get)
    if isinstance(config, Err):
        return config

    resolver: VersionResolver = PromptResolver() if interactive else DefaultResolver()
    return Ok(
        ReleaseWorkflow(
            vcs=vcs,
            config=config.value,
            console=console,
            resolver=resolver,
            hook=resolve_hook(config.value.hook_file(root), root),
            dry_run=dry_run,
        )
    )
