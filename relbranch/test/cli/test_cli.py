"""CLI tests: argument handling and exit codes with a stubbed workflow, plus
an end-to-end run against a real git repository."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest
from typer.testing import CliRunner

from relbranch import __version__
from relbranch.cli.app import app
from relbranch.cli.commands import multi_cmd, release_cmd
from relbranch.core.result import Err, Ok, Result
from relbranch.release.config import ConfigError
from relbranch.release.errors import DirtyWorkingTree, ReleaseError, TagExists
from relbranch.release.policy import Branch, OperationRequest, SetVersion, Tag
from relbranch.release.report import StatusReport

runner = CliRunner()


class StubOperation:
    """Stands in for ``run_operation``; fails for repositories named in ``failing``."""

    def __init__(self, failing: dict[str, ReleaseError | ConfigError] | None = None) -> None:
        self.failing = failing or {}
        self.calls: list[tuple[Path, OperationRequest, bool, bool]] = []

    def __call__(
        self,
        repo: Path,
        op: OperationRequest,
        *,
        console: object,
        interactive: bool,
        dry_run: bool,
    ) -> Result[StatusReport, ReleaseError | ConfigError]:
        self.calls.append((repo, op, interactive, dry_run))
        if repo.name in self.failing:
            return Err(self.failing[repo.name])
        return Ok(
            StatusReport(
                trunk_branch="main",
                trunk_previous="1.0.0",
                trunk_next="1.1.0",
                dry_run=dry_run,
            )
        )


@pytest.fixture
def stub(monkeypatch: pytest.MonkeyPatch) -> StubOperation:
    fake = StubOperation()
    monkeypatch.setattr(release_cmd, "run_operation", fake)
    monkeypatch.setattr(multi_cmd, "run_operation", fake)
    return fake


# =============================================================================
# Top level
# =============================================================================


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_no_args_shows_help() -> None:
    result = runner.invoke(app, [])
    assert "set-version" in result.output


def test_repo_must_be_a_directory(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--repo", str(tmp_path / "missing"), "branch"])
    assert result.exit_code == 1
    assert "not a directory" in result.output


# =============================================================================
# Single repository (stubbed)
# =============================================================================


class TestSingleRepository:
    def test_set_version_explicit(self, stub: StubOperation, tmp_path: Path) -> None:
        result = runner.invoke(app, ["-C", str(tmp_path), "set-version", "1.4.0"])

        assert result.exit_code == 0, result.output
        repo, op, interactive, dry_run = stub.calls[0]
        assert repo == tmp_path.resolve()
        assert op == SetVersion(explicit="1.4.0")
        assert interactive is True
        assert dry_run is False
        assert "set-version: done" in result.output

    def test_branch_yes_and_dry_run(self, stub: StubOperation, tmp_path: Path) -> None:
        result = runner.invoke(app, ["-C", str(tmp_path), "branch", "--yes", "--dry-run"])

        assert result.exit_code == 0, result.output
        _, op, interactive, dry_run = stub.calls[0]
        assert op == Branch()
        assert (interactive, dry_run) == (False, True)
        assert "dry run, nothing was changed" in result.output

    def test_tag_passes_options_through(self, stub: StubOperation, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["-C", str(tmp_path), "tag", "--force", "-m", "Release", "--", "--sign"]
        )

        assert result.exit_code == 0, result.output
        _, op, interactive, _ = stub.calls[0]
        assert op == Tag(force=True, message="Release", extra_args=("--sign",))
        assert interactive is False

    def test_failure_exits_with_release_error(
        self, stub: StubOperation, tmp_path: Path
    ) -> None:
        stub.failing[tmp_path.name] = TagExists("2.7.0")

        result = runner.invoke(app, ["-C", str(tmp_path), "tag"])

        assert result.exit_code == 1
        assert "tag 2.7.0 already exists" in result.output

    def test_config_error(self, stub: StubOperation, tmp_path: Path) -> None:
        stub.failing[tmp_path.name] = ConfigError("Invalid TOML syntax: bad", tmp_path)

        result = runner.invoke(app, ["-C", str(tmp_path), "branch"])

        assert result.exit_code == 1
        assert "Invalid TOML syntax" in result.output


# =============================================================================
# Multi repository (stubbed)
# =============================================================================


class TestMulti:
    def test_continues_after_failure(self, stub: StubOperation, tmp_path: Path) -> None:
        repos = [tmp_path / name for name in ("a", "b", "c")]
        stub.failing["b"] = DirtyWorkingTree(paths=("x.py",))

        result = runner.invoke(app, ["multi", "branch", "--yes", *map(str, repos)])

        assert result.exit_code == 1
        assert [call[0].name for call in stub.calls] == ["a", "b", "c"]
        assert "2/3 repositories succeeded" in result.output
        assert result.output.count("failed:") == 1

    def test_all_succeed(self, stub: StubOperation, tmp_path: Path) -> None:
        result = runner.invoke(app, ["multi", "tag", str(tmp_path / "a"), str(tmp_path / "b")])

        assert result.exit_code == 0, result.output
        assert all(isinstance(call[1], Tag) for call in stub.calls)
        assert "2/2 repositories succeeded" in result.output

    def test_set_version_prints_each_exit_code(
        self, stub: StubOperation, tmp_path: Path
    ) -> None:
        stub.failing["b"] = DirtyWorkingTree(paths=("x.py",))

        result = runner.invoke(
            app,
            ["multi", "set-version", "--version", "3.0.0", str(tmp_path / "a"), str(tmp_path / "b")],
        )

        assert result.exit_code == 1
        assert stub.calls[0][1] == SetVersion(explicit="3.0.0")
        assert "exit 0" in result.output
        assert "exit 1" in result.output

    def test_requires_repositories(self, stub: StubOperation) -> None:
        result = runner.invoke(app, ["multi", "branch"])

        assert result.exit_code == 2
        assert stub.calls == []


# =============================================================================
# End to end with git
# =============================================================================


def git(repo: Path, *args: str) -> str:
    return subprocess.run(
        ["git", "-C", str(repo), *args],
        check=True,
        capture_output=True,
        text=True,
    ).stdout.strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "--quiet")
    git(repo, "checkout", "--quiet", "-b", "main")
    git(repo, "config", "user.name", "Release Bot")
    git(repo, "config", "user.email", "release@example.com")
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "config", "tag.gpgsign", "false")
    (repo / "README").write_text("demo\n")
    git(repo, "add", "README")
    git(repo, "commit", "--quiet", "-m", "Initial commit")
    return repo


def record_version(repo: Path) -> str:
    for line in (repo / "version.properties").read_text().splitlines():
        if line.startswith("version="):
            return line.split("=", 1)[1]
    raise AssertionError("no version line")


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestEndToEnd:
    def test_full_release_cycle(self, git_repo: Path) -> None:
        repo = str(git_repo)

        # Missing record: accept 0.1.0 and the proposed 0.2.0.
        result = runner.invoke(app, ["-C", repo, "set-version"], input="\n\n")
        assert result.exit_code == 0, result.output
        assert record_version(git_repo) == "0.2.0"
        assert git(git_repo, "status", "--porcelain") == ""

        result = runner.invoke(app, ["-C", repo, "branch", "--yes"])
        assert result.exit_code == 0, result.output
        assert git(git_repo, "rev-parse", "--abbrev-ref", "HEAD") == "main"
        assert record_version(git_repo) == "0.3.0"
        assert "version=0.2.0" in git(git_repo, "show", "release/0.2:version.properties")

        git(git_repo, "checkout", "--quiet", "release/0.2")
        result = runner.invoke(app, ["-C", repo, "tag"])
        assert result.exit_code == 0, result.output
        assert git(git_repo, "tag", "--list") == "0.2.0"
        assert record_version(git_repo) == "0.2.1"

        result = runner.invoke(app, ["-C", repo, "tag"])
        assert result.exit_code == 0, result.output
        assert git(git_repo, "tag", "--list").splitlines() == ["0.2.0", "0.2.1"]

    def test_dirty_tree_is_refused(self, git_repo: Path) -> None:
        runner.invoke(app, ["-C", str(git_repo), "set-version", "--yes", "1.0.0"])
        (git_repo / "README").write_text("changed\n")

        result = runner.invoke(app, ["-C", str(git_repo), "branch", "--yes"])

        assert result.exit_code == 1
        assert "uncommitted changes: README" in result.output
        assert git(git_repo, "branch", "--list", "release/*") == ""

    def test_tag_on_trunk_is_refused(self, git_repo: Path) -> None:
        runner.invoke(app, ["-C", str(git_repo), "set-version", "--yes", "1.0.0"])

        result = runner.invoke(app, ["-C", str(git_repo), "tag"])

        assert result.exit_code == 1
        assert "must run on the release branch" in result.output
        assert git(git_repo, "tag", "--list") == ""

    def test_runs_from_a_subdirectory(self, git_repo: Path) -> None:
        nested = git_repo / "src" / "pkg"
        nested.mkdir(parents=True)

        result = runner.invoke(app, ["-C", str(nested), "set-version", "--yes", "1.0.0"])

        assert result.exit_code == 0, result.output
        assert record_version(git_repo) == "1.0.0"
        assert not (nested / "version.properties").exists()

        result = runner.invoke(app, ["-C", str(nested), "branch", "--yes"])
        assert result.exit_code == 0, result.output
        assert git(git_repo, "branch", "--list", "release/1.0") != ""

    def test_multi_continues_past_unreadable_record(self, tmp_path: Path) -> None:
        repos = []
        for name in ("broken", "good"):
            repo = tmp_path / name
            repo.mkdir()
            git(repo, "init", "--quiet")
            git(repo, "checkout", "--quiet", "-b", "main")
            git(repo, "config", "user.name", "Release Bot")
            git(repo, "config", "user.email", "release@example.com")
            git(repo, "config", "commit.gpgsign", "false")
            repos.append(repo)
        (repos[0] / "version.properties").write_bytes(b"version=\xff\n")
        (repos[1] / "version.properties").write_text("version=2.7.0\n")
        for repo in repos:
            git(repo, "add", "version.properties")
            git(repo, "commit", "--quiet", "-m", "Add record")

        result = runner.invoke(app, ["multi", "branch", "--yes", *map(str, repos)])

        assert result.exit_code == 1
        assert "invalid version" in result.output
        assert "1/2 repositories succeeded" in result.output
        assert git(repos[1], "branch", "--list", "release/2.7") != ""
        assert git(repos[0], "branch", "--list", "release/*") == ""
