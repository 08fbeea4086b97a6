"""Next-version rules.

``next_state`` is a pure function of (current version, branch kind,
requested operation):

- ``Branch`` on trunk: cut ``<prefix><major>.<minor>`` carrying the current
  version unchanged; trunk moves to the next minor.
- ``Tag`` on a release branch: tag the current version; the branch moves to
  the next patch.
- ``SetVersion`` on trunk: the explicit version if given, otherwise the next
  minor (the caller may let the operator override it).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from relbranch.core.result import Err, Ok, Result
from relbranch.release.branches import (
    BranchKind,
    ReleaseBranch,
    Trunk,
    describe_kind,
    release_branch_name,
)
from relbranch.release.errors import InvalidVersionFormat, WrongBranchKind
from relbranch.release.version import Version, parse_version


@dataclass(frozen=True, slots=True)
class SetVersion:
    explicit: str | None = None

    name = "set-version"
    required_kind = Trunk


@dataclass(frozen=True, slots=True)
class Branch:
    name = "branch"
    required_kind = Trunk


@dataclass(frozen=True, slots=True)
class Tag:
    force: bool = False
    message: str | None = None
    extra_args: Sequence[str] = field(default_factory=tuple)

    name = "tag"
    required_kind = ReleaseBranch


OperationRequest = SetVersion | Branch | Tag


@dataclass(frozen=True, slots=True)
class NextState:
    next_version: Version
    release_branch: str | None = None
    explicit: bool = False


def next_state(
    current: Version,
    kind: BranchKind,
    op: OperationRequest,
    *,
    release_prefix: str,
) -> Result[NextState, WrongBranchKind | InvalidVersionFormat]:
    if not isinstance(kind, op.required_kind):
        return Err(
            WrongBranchKind(
                branch=_kind_label(kind, release_prefix),
                required=describe_kind(op.required_kind),
                operation=op.name,
            )
        )

    match op:
        case Branch():
            return Ok(
                NextState(
                    next_version=current.next_minor(),
                    release_branch=release_branch_name(current, release_prefix),
                )
            )
        case Tag():
            return Ok(NextState(next_version=current.next_patch()))
        case SetVersion(explicit=None):
            return Ok(NextState(next_version=current.next_minor()))
        case SetVersion(explicit=text):
            parsed = parse_version(text)
            if isinstance(parsed, Err):
                return parsed
            return Ok(NextState(next_version=parsed.value, explicit=True))


def _kind_label(kind: BranchKind, release_prefix: str) -> str | None:
    match kind:
        case Trunk():
            return "trunk"
        case ReleaseBranch(major=major, minor=minor):
            return f"{release_prefix}{major}.{minor}"
        case _:
            return kind.name
