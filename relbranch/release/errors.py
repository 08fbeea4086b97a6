"""Failure taxonomy of the release workflow.

Each failure is a small frozen dataclass; ``ReleaseError`` is their union.
All of them are terminal for the current operation. Precondition failures
(``WrongBranchKind``, ``DirtyWorkingTree``, ``InvalidVersionFormat``,
``RepositoryNotFound``) happen before any mutation.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relbranch.git.repository import GitError


@dataclass(frozen=True, slots=True)
class InvalidVersionFormat:
    text: str
    source: Path | None = None


@dataclass(frozen=True, slots=True)
class WrongBranchKind:
    branch: str | None
    required: str
    operation: str


@dataclass(frozen=True, slots=True)
class DirtyWorkingTree:
    paths: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class RecordMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class RecordUnreadable:
    path: Path
    message: str


@dataclass(frozen=True, slots=True)
class TagExists:
    tag: str


@dataclass(frozen=True, slots=True)
class HookFailed:
    hook: Path
    version: str
    postfix: str
    returncode: int


@dataclass(frozen=True, slots=True)
class RepositoryNotFound:
    path: Path


@dataclass(frozen=True, slots=True)
class VcsFailed:
    command: str
    message: str
    returncode: int = 1

    @classmethod
    def from_git(cls, error: GitError) -> VcsFailed:
        return cls(command=error.command, message=error.message, returncode=error.returncode)


@dataclass(frozen=True, slots=True)
class ValueUnresolved:
    prompt: str


ReleaseError = (
    InvalidVersionFormat
    | WrongBranchKind
    | DirtyWorkingTree
    | RecordMissing
    | RecordUnreadable
    | TagExists
    | HookFailed
    | RepositoryNotFound
    | VcsFailed
    | ValueUnresolved
)
