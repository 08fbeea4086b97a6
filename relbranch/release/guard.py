"""Preconditions checked before (and between) mutating steps."""

from __future__ import annotations

from relbranch.core.result import Err, Ok, Result
from relbranch.release.branches import BranchKind, ReleaseBranch, Trunk, describe_kind
from relbranch.release.contracts import Vcs
from relbranch.release.errors import (
    DirtyWorkingTree,
    InvalidVersionFormat,
    RepositoryNotFound,
    VcsFailed,
    WrongBranchKind,
)
from relbranch.release.version import Version, parse_version


def assert_repository(vcs: Vcs) -> Result[None, RepositoryNotFound]:
    if not vcs.exists():
        return Err(RepositoryNotFound(vcs.path))
    return Ok(None)


def assert_branch_kind(
    actual: BranchKind,
    required: type[Trunk] | type[ReleaseBranch],
    *,
    branch: str | None,
    operation: str,
) -> Result[None, WrongBranchKind]:
    if not isinstance(actual, required):
        return Err(
            WrongBranchKind(branch=branch, required=describe_kind(required), operation=operation)
        )
    return Ok(None)


def assert_clean_working_tree(vcs: Vcs) -> Result[None, DirtyWorkingTree | VcsFailed]:
    """Fail if anything is staged or modified relative to HEAD.

    Must be called again before every step that relies on a known starting
    point: the hook may have touched the tree in between.
    """
    result = vcs.status().map_err(VcsFailed.from_git)
    if isinstance(result, Err):
        return result

    status = result.value
    if not status.is_clean:
        return Err(DirtyWorkingTree(paths=tuple(e.path for e in status.modified)))
    return Ok(None)


def assert_valid_version(text: str) -> Result[Version, InvalidVersionFormat]:
    return parse_version(text)
