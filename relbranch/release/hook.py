"""Optional version hook.

A repository may ship an executable (``.relbranch/hook`` by default) that
propagates a freshly computed version into other files. It is called as

    <hook> <version> <postfix>

after the record is written and before the commit; whatever it modifies in
tracked files is part of that commit. A missing hook is not an error.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from relbranch.core.result import Err, Ok, Result
from relbranch.platform.files import is_executable
from relbranch.platform.process import run_attached
from relbranch.release.errors import HookFailed


class VersionHook(Protocol):
    def apply(self, version: str, postfix: str) -> Result[None, HookFailed]: ...


class NullHook:
    """Hook used when none is configured."""

    def apply(self, version: str, postfix: str) -> Result[None, HookFailed]:
        return Ok(None)


class ExecutableHook:
    """Runs an external program, blocking until it exits (no timeout)."""

    def __init__(self, path: Path, cwd: Path) -> None:
        self.path = path
        self.cwd = cwd

    def apply(self, version: str, postfix: str) -> Result[None, HookFailed]:
        result = run_attached([str(self.path), version, postfix], cwd=self.cwd)
        if isinstance(result, Err):
            return Err(
                HookFailed(
                    hook=self.path,
                    version=version,
                    postfix=postfix,
                    returncode=result.error.returncode,
                )
            )
        return Ok(None)


def resolve_hook(path: Path, cwd: Path) -> VersionHook:
    """Return an ExecutableHook if ``path`` is an executable file, else NullHook."""
    if is_executable(path):
        return ExecutableHook(path, cwd)
    return NullHook()
