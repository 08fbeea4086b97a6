from __future__ import annotations

from relbranch.release.report import StatusReport


def test_rows_fill_missing_cells() -> None:
    report = StatusReport(
        trunk_branch="main",
        trunk_previous="2.7.0-SNAPSHOT",
        trunk_next="2.8.0-SNAPSHOT",
        release_branch="release/2.7",
        release_next="2.7.0",
    )

    assert report.rows() == [
        ("main", "2.7.0-SNAPSHOT", "2.8.0-SNAPSHOT"),
        ("release/2.7", "-", "2.7.0"),
    ]


def test_trunk_row_always_present() -> None:
    report = StatusReport(
        trunk_branch="main",
        release_branch="release/2.7",
        release_previous="2.7.0",
        release_next="2.7.1",
        tag="2.7.0",
    )

    assert report.rows()[0] == ("main", "-", "-")
    assert "tag: 2.7.0" in report.plain()
