"""Branch classification.

A branch is either the trunk, a release branch named
``<prefix><major>.<minor>``, or something the workflow does not handle.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from relbranch.release.version import Version


@dataclass(frozen=True, slots=True)
class Trunk:
    pass


@dataclass(frozen=True, slots=True)
class ReleaseBranch:
    major: int
    minor: int


@dataclass(frozen=True, slots=True)
class Unrecognized:
    name: str | None


BranchKind = Trunk | ReleaseBranch | Unrecognized


def classify(branch_name: str | None, *, trunk_name: str, release_prefix: str) -> BranchKind:
    """Classify ``branch_name``; ``None`` (detached HEAD) is unrecognized."""
    if branch_name is None:
        return Unrecognized(None)
    if branch_name == trunk_name:
        return Trunk()

    m = re.fullmatch(rf"{re.escape(release_prefix)}([0-9]+)\.([0-9]+)", branch_name)
    if m is None:
        return Unrecognized(branch_name)
    return ReleaseBranch(int(m.group(1)), int(m.group(2)))


def release_branch_name(version: Version, release_prefix: str) -> str:
    """Name of the release branch cut from ``version`` (patch is never included)."""
    return f"{release_prefix}{version.major}.{version.minor}"


def describe_kind(kind: type[Trunk] | type[ReleaseBranch]) -> str:
    if kind is Trunk:
        return "trunk"
    return "release branch"
