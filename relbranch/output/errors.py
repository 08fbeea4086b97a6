"""Error presentation: one diagnostic line per failure, plus an optional hint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from relbranch.core.errors import ErrorCode
from relbranch.output.console import Style
from relbranch.release.errors import (
    DirtyWorkingTree,
    HookFailed,
    InvalidVersionFormat,
    RecordMissing,
    RecordUnreadable,
    ReleaseError,
    RepositoryNotFound,
    TagExists,
    ValueUnresolved,
    VcsFailed,
    WrongBranchKind,
)

if TYPE_CHECKING:
    from relbranch.output.console import ConsoleProtocol

__all__ = ["describe_release_error", "print_release_error", "release_error_exit_code"]

_MAX_LISTED_PATHS = 5


def describe_release_error(error: ReleaseError) -> tuple[str, str | None]:
    """Return (message, hint) for ``error``."""
    match error:
        case InvalidVersionFormat(text=text, source=source):
            where = f" in {source}" if source is not None else ""
            return (f"invalid version {text!r}{where}", "expected MAJOR.MINOR.PATCH, e.g. 1.4.0")
        case WrongBranchKind(branch=branch, required=required, operation=operation):
            actual = branch if branch is not None else "detached HEAD"
            return (f"'{operation}' must run on the {required}, not on {actual}", None)
        case DirtyWorkingTree(paths=paths):
            listed = ", ".join(paths[:_MAX_LISTED_PATHS])
            if len(paths) > _MAX_LISTED_PATHS:
                listed += f" (+{len(paths) - _MAX_LISTED_PATHS} more)"
            return (f"working tree has uncommitted changes: {listed}", "commit or stash them first")
        case RecordMissing(path=path):
            return (
                f"version record not found: {path}",
                "run 'relbranch set-version' on the trunk first",
            )
        case RecordUnreadable(path=path, message=message):
            return (f"cannot read version record {path}: {message}", None)
        case TagExists(tag=tag):
            return (f"tag {tag} already exists", "use --force to replace it")
        case HookFailed(hook=hook, version=version, postfix=postfix, returncode=rc):
            return (
                f"hook {hook} failed for {version}{postfix} (exit {rc})",
                "the record may be written but not committed; inspect the working tree",
            )
        case RepositoryNotFound(path=path):
            return (f"not a git repository: {path}", None)
        case VcsFailed(command=command, message=message):
            return (f"git {command} failed: {message}", None)
        case ValueUnresolved(prompt=prompt):
            return (f"no value for: {prompt}", "run interactively or pass the value explicitly")


def print_release_error(error: ReleaseError, console: ConsoleProtocol, *, command: str) -> None:
    message, hint = describe_release_error(error)
    console.error(f"{command}: {message}")
    if hint:
        console.print(f"hint: {hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    """Every asserted release failure exits with the same code."""
    del error
    return int(ErrorCode.RELEASE_ERROR)
