"""Cross-layer contracts for the release workflow.

The workflow only talks to version control through ``Vcs``; the git adapter
(``relbranch.git.repository.Repository``) is the production implementation
and tests use an in-memory fake.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from relbranch.core.result import Result
from relbranch.git.repository import GitError, GitStatus


class Vcs(Protocol):
    path: Path

    def exists(self) -> bool: ...

    def status(self) -> Result[GitStatus, GitError]: ...

    def current_branch(self) -> str | None: ...

    def config_get(self, key: str) -> str | None: ...

    def create_branch(self, name: str) -> Result[None, GitError]:
        """Create ``name`` at HEAD and switch to it."""
        ...

    def checkout(self, name: str) -> Result[None, GitError]: ...

    def stage(self, paths: Sequence[Path]) -> Result[None, GitError]:
        """Stage ``paths`` plus every modification to tracked files."""
        ...

    def commit(self, message: str, *, allow_empty: bool = False) -> Result[None, GitError]: ...

    def tag_exists(self, name: str) -> bool: ...

    def create_tag(
        self,
        name: str,
        *,
        message: str,
        force: bool = False,
        extra_args: Sequence[str] = (),
    ) -> Result[None, GitError]:
        """Create an annotated tag at HEAD."""
        ...
