"""Git repository adapter.

``Repository`` wraps the handful of git commands the release workflow
needs. Every method that can fail returns a Result.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.status():
        case Ok(status):
            print(f"Branch: {status.branch}")
            if status.is_clean:
                print("Working tree clean")
        case Err(e):
            print(f"Error: {e.message}")

    match repo.create_tag("1.4.0", message="1.4.0"):
        case Err(e):
            print(f"Tag failed: {e.message}")
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from relbranch.core.result import Err, Ok, Result
from relbranch.platform.process import ProcessError
from relbranch.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single ``git status --porcelain`` entry.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str

    @property
    def is_staged(self) -> bool:
        return self.xy != "??" and self.xy[0] != " "

    @property
    def is_unstaged(self) -> bool:
        return self.xy != "??" and self.xy[1] != " "


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Parsed git status.

    Attributes:
        branch: Current branch name ("" when unknown)
        entries: All status entries (staged, unstaged, untracked)
    """

    branch: str
    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        """True if nothing is staged or modified relative to HEAD.

        Untracked files do not count: they are never part of a release commit.
        """
        return not self.modified

    @property
    def modified(self) -> list[StatusEntry]:
        """Entries with staged or unstaged changes."""
        return [e for e in self.entries if e.is_staged or e.is_unstaged]


class Repository:
    """Git repository rooted at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check if ``path`` is a git work tree root (.git dir or file)."""
        return (self.path / ".git").exists()

    def root(self) -> Result[Path, GitError]:
        """Top-level directory of the work tree containing ``path``."""
        result = self._run(["rev-parse", "--show-toplevel"])
        match result:
            case Err(e):
                return Err(self._error("rev-parse", e))
            case Ok(stdout):
                return Ok(Path(stdout.strip()))

    def status(self) -> Result[GitStatus, GitError]:
        """Run `git status --porcelain=v1 -b` and parse the output."""
        result = self._run(["status", "--porcelain=v1", "-b"])
        match result:
            case Err(e):
                return Err(self._error("status", e))
            case Ok(stdout):
                return Ok(self._parse_status(stdout))

    def current_branch(self) -> str | None:
        """Get current branch name.

        Returns None if detached HEAD or error.
        """
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        match result:
            case Ok(stdout):
                branch = stdout.strip()
                return None if branch == "HEAD" else branch
            case Err(_):
                return None

    def config_get(self, key: str) -> str | None:
        """Read a git config value; None when unset."""
        result = self._run(["config", "--get", key])
        match result:
            case Ok(stdout):
                return stdout.strip()
            case Err(_):
                return None

    def create_branch(self, name: str) -> Result[None, GitError]:
        return self._mutate(["checkout", "-b", name])

    def checkout(self, name: str) -> Result[None, GitError]:
        return self._mutate(["checkout", name])

    def stage(self, paths: Sequence[Path]) -> Result[None, GitError]:
        if paths:
            added = self._mutate(["add", "--", *(str(p) for p in paths)])
            if isinstance(added, Err):
                return added
        return self._mutate(["add", "--update"])

    def commit(self, message: str, *, allow_empty: bool = False) -> Result[None, GitError]:
        args = ["commit", "-m", message]
        if allow_empty:
            args.append("--allow-empty")
        return self._mutate(args)

    def tag_exists(self, name: str) -> bool:
        result = self._run(["rev-parse", "--quiet", "--verify", f"refs/tags/{name}"])
        return isinstance(result, Ok)

    def create_tag(
        self,
        name: str,
        *,
        message: str,
        force: bool = False,
        extra_args: Sequence[str] = (),
    ) -> Result[None, GitError]:
        args = ["tag", "--annotate", "-m", message]
        if force:
            args.append("--force")
        args.extend(extra_args)
        args.append(name)
        return self._mutate(args)

    def _mutate(self, args: list[str]) -> Result[None, GitError]:
        result = self._run(args)
        match result:
            case Err(e):
                return Err(self._error(" ".join(args[:2]), e))
            case Ok(_):
                return Ok(None)

    def _error(self, command: str, e: ProcessError) -> GitError:
        return GitError(
            command=command,
            message=e.stderr.strip() or e.stdout.strip() or f"git {command} failed",
            returncode=e.returncode,
        )

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )

    def _parse_status(self, output: str) -> GitStatus:
        """Parse git status --porcelain=v1 -b output."""
        lines = [ln for ln in output.splitlines() if ln.strip()]

        if not lines:
            return GitStatus(branch="")

        # First line is branch info: ## branch...upstream [ahead N, behind M]
        branch = self._parse_branch_line(lines[0])

        entries: list[StatusEntry] = []
        for line in lines[1:]:
            entry = self._parse_entry(line)
            if entry:
                entries.append(entry)

        return GitStatus(branch=branch, entries=tuple(entries))

    def _parse_branch_line(self, line: str) -> str:
        s = line.strip()
        if s.startswith("##"):
            s = s[2:].lstrip()
        s = s.split(" [", 1)[0].strip()
        return s.split("...", 1)[0].strip()

    def _parse_entry(self, line: str) -> StatusEntry | None:
        if len(line) < 4:
            return None
        return StatusEntry(xy=line[:2], path=line[3:])
