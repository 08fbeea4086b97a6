"""Run one release operation across several repositories.

Repositories are processed one after another, in the given order. A failure
is recorded for its repository and the loop moves on; nothing is rolled
back. Runs are sequential because the default resolver prompts on the
shared terminal.

Usage:
    outcomes = run_all(Branch(), [Path("a"), Path("b")], run_one=runner)
    for outcome in outcomes:
        print(outcome.path, "ok" if outcome.ok else outcome.error)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from relbranch.core.errors import ErrorCode
from relbranch.core.result import Err, Ok, Result
from relbranch.release.config import ConfigError
from relbranch.release.errors import ReleaseError
from relbranch.release.policy import OperationRequest
from relbranch.release.report import StatusReport

__all__ = [
    "RepoOutcome",
    "run_all",
    "summarize",
]


@dataclass(frozen=True, slots=True)
class RepoOutcome:
    """Outcome of one repository.

    Attributes:
        path: Repository path
        report: Status report on success
        error: Failure on error
    """

    path: Path
    report: StatusReport | None = None
    error: ReleaseError | ConfigError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return int(ErrorCode.OK) if self.ok else int(ErrorCode.RELEASE_ERROR)


OperationRunner = Callable[
    [Path, OperationRequest], Result[StatusReport, ReleaseError | ConfigError]
]


def run_all(
    op: OperationRequest,
    repo_paths: Sequence[Path],
    *,
    run_one: OperationRunner,
    on_start: Callable[[Path], None] | None = None,
    on_done: Callable[[RepoOutcome], None] | None = None,
) -> list[RepoOutcome]:
    """Run ``op`` on every repository in order and collect the outcomes.

    Args:
        op: Operation to run in each repository
        repo_paths: Repositories, processed in this order
        run_one: Runs ``op`` against a single repository
        on_start: Called before each repository (presentation)
        on_done: Called with each outcome as soon as it is known

    Returns:
        One RepoOutcome per path, in input order
    """
    outcomes: list[RepoOutcome] = []

    for path in repo_paths:
        if on_start is not None:
            on_start(path)

        match run_one(path, op):
            case Ok(report):
                outcome = RepoOutcome(path=path, report=report)
            case Err(error):
                outcome = RepoOutcome(path=path, error=error)

        outcomes.append(outcome)
        if on_done is not None:
            on_done(outcome)

    return outcomes


def summarize(outcomes: Sequence[RepoOutcome]) -> dict[str, int]:
    """Counts: total, ok, failed."""
    return {
        "total": len(outcomes),
        "ok": sum(1 for o in outcomes if o.ok),
        "failed": sum(1 for o in outcomes if not o.ok),
    }
