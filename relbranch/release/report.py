from __future__ import annotations

from dataclasses import dataclass

EMPTY_CELL = "-"


@dataclass(frozen=True, slots=True)
class StatusReport:
    """Before/after snapshot printed at the end of an operation.

    Derived from the operation's own computations; never read back.
    Versions are display strings (postfix included).
    """

    trunk_branch: str
    trunk_previous: str | None = None
    trunk_next: str | None = None
    release_branch: str | None = None
    release_previous: str | None = None
    release_next: str | None = None
    tag: str | None = None
    dry_run: bool = False

    def rows(self) -> list[tuple[str, str, str]]:
        """(branch, previous, next) rows; unfilled cells are ``-``."""
        rows = [(self.trunk_branch, _cell(self.trunk_previous), _cell(self.trunk_next))]
        if self.release_branch is not None:
            rows.append(
                (self.release_branch, _cell(self.release_previous), _cell(self.release_next))
            )
        return rows

    def plain(self) -> str:
        lines = [f"{'branch':<24} {'previous':<16} next"]
        for branch, previous, nxt in self.rows():
            lines.append(f"{branch:<24} {previous:<16} {nxt}")
        if self.tag is not None:
            lines.append(f"tag: {self.tag}")
        return "\n".join(lines)


def _cell(value: str | None) -> str:
    return EMPTY_CELL if value is None else value
