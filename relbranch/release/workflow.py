"""Release workflow: set-version, branch and tag.

Each operation checks every precondition before touching the repository,
then runs its mutating steps in order and stops at the first failure:

    set-version  (trunk)           write record -> hook -> commit
    branch       (trunk)           checkout -b release/X.Y -> write record -> hook
                                   -> commit -> checkout trunk -> write record
                                   -> hook -> commit
    tag          (release branch)  tag X.Y.Z -> write record -> hook -> commit

Nothing is rolled back. A failure after ``branch`` created the release
branch leaves the repository on that branch, possibly with an uncommitted
record; the operator has to inspect it. ``dry_run`` runs the checks and
reports the planned states without writing anything.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from relbranch.core.result import Err, Ok, Result
from relbranch.git.repository import GitError
from relbranch.output.console import ConsoleProtocol, Style
from relbranch.release.branches import BranchKind, ReleaseBranch, classify
from relbranch.release.config import ReleaseConfig
from relbranch.release.contracts import Vcs
from relbranch.release.errors import RecordMissing, ReleaseError, TagExists, VcsFailed
from relbranch.release.guard import (
    assert_branch_kind,
    assert_clean_working_tree,
    assert_repository,
    assert_valid_version,
)
from relbranch.release.hook import VersionHook
from relbranch.release.policy import Branch, OperationRequest, SetVersion, Tag, next_state
from relbranch.release.prompt import VersionResolver
from relbranch.release.record import initialize_record, load_record, save_record
from relbranch.release.report import StatusReport
from relbranch.release.version import Version, parse_version

__all__ = ["ReleaseWorkflow"]


@dataclass(frozen=True, slots=True)
class _Position:
    branch: str | None
    kind: BranchKind


class ReleaseWorkflow:
    """Runs release operations against one repository."""

    def __init__(
        self,
        *,
        vcs: Vcs,
        config: ReleaseConfig,
        console: ConsoleProtocol,
        resolver: VersionResolver,
        hook: VersionHook,
        dry_run: bool = False,
    ) -> None:
        self._vcs = vcs
        self._config = config
        self._console = console
        self._resolver = resolver
        self._hook = hook
        self._dry_run = dry_run

    @property
    def record_path(self) -> Path:
        return self._config.record_file(self._vcs.path)

    def run(self, op: OperationRequest) -> Result[StatusReport, ReleaseError]:
        match op:
            case SetVersion(explicit=explicit):
                return self.set_version(explicit)
            case Branch():
                return self.branch()
            case Tag(force=force, message=message, extra_args=extra_args):
                return self.tag(force=force, message=message, extra_args=extra_args)

    # ------------------------------------------------------------------
    # set-version
    # ------------------------------------------------------------------

    def set_version(self, explicit: str | None = None) -> Result[StatusReport, ReleaseError]:
        op = SetVersion(explicit=explicit.strip() if explicit is not None else None)
        if op.explicit is not None:
            valid = assert_valid_version(op.explicit)
            if isinstance(valid, Err):
                return valid

        position = self._enter(op)
        if isinstance(position, Err):
            return position

        current = self._current_or_initialize()
        if isinstance(current, Err):
            return current

        state = next_state(
            current.value, position.value.kind, op, release_prefix=self._config.release_prefix
        )
        if isinstance(state, Err):
            return state

        target = state.value.next_version
        if not state.value.explicit:
            confirmed = self._confirm("Next version", target)
            if isinstance(confirmed, Err):
                return confirmed
            target = confirmed.value

        postfix = self._config.trunk_postfix
        written = self._write_and_commit(
            target, postfix, message=f"Set version to {target.decorate(postfix)}"
        )
        if isinstance(written, Err):
            return written

        return Ok(
            StatusReport(
                trunk_branch=self._config.trunk_branch,
                trunk_previous=current.value.decorate(postfix),
                trunk_next=target.decorate(postfix),
                dry_run=self._dry_run,
            )
        )

    # ------------------------------------------------------------------
    # branch
    # ------------------------------------------------------------------

    def branch(self) -> Result[StatusReport, ReleaseError]:
        op = Branch()
        position = self._enter(op)
        if isinstance(position, Err):
            return position

        current = load_record(self.record_path)
        if isinstance(current, Err):
            return current

        state = next_state(
            current.value, position.value.kind, op, release_prefix=self._config.release_prefix
        )
        if isinstance(state, Err):
            return state

        release_branch = state.value.release_branch
        assert release_branch is not None
        trunk_next = state.value.next_version
        cfg = self._config

        created = self._git(
            f"git checkout -b {release_branch}",
            lambda: self._vcs.create_branch(release_branch),
        )
        if isinstance(created, Err):
            return created

        # The release branch starts at the version being released; trunk moves on.
        on_release = self._write_and_commit(
            current.value,
            cfg.release_postfix,
            message=f"Create {release_branch} at {current.value.decorate(cfg.release_postfix)}",
            allow_empty=True,
        )
        if isinstance(on_release, Err):
            return on_release

        if not self._dry_run:
            clean = assert_clean_working_tree(self._vcs)
            if isinstance(clean, Err):
                return clean

        back = self._git(
            f"git checkout {cfg.trunk_branch}",
            lambda: self._vcs.checkout(cfg.trunk_branch),
        )
        if isinstance(back, Err):
            return back

        on_trunk = self._write_and_commit(
            trunk_next,
            cfg.trunk_postfix,
            message=f"Set version to {trunk_next.decorate(cfg.trunk_postfix)}",
        )
        if isinstance(on_trunk, Err):
            return on_trunk

        return Ok(
            StatusReport(
                trunk_branch=cfg.trunk_branch,
                trunk_previous=current.value.decorate(cfg.trunk_postfix),
                trunk_next=trunk_next.decorate(cfg.trunk_postfix),
                release_branch=release_branch,
                release_next=current.value.decorate(cfg.release_postfix),
                dry_run=self._dry_run,
            )
        )

    # ------------------------------------------------------------------
    # tag
    # ------------------------------------------------------------------

    def tag(
        self,
        *,
        force: bool = False,
        message: str | None = None,
        extra_args: Sequence[str] = (),
    ) -> Result[StatusReport, ReleaseError]:
        op = Tag(force=force, message=message, extra_args=tuple(extra_args))
        position = self._enter(op)
        if isinstance(position, Err):
            return position

        current = load_record(self.record_path)
        if isinstance(current, Err):
            return current
        version = current.value

        kind = position.value.kind
        if isinstance(kind, ReleaseBranch):
            if (kind.major, kind.minor) != (version.major, version.minor):
                self._console.warning(
                    f"record version {version} does not match branch {position.value.branch}"
                )

        state = next_state(version, kind, op, release_prefix=self._config.release_prefix)
        if isinstance(state, Err):
            return state

        tag_name = version.format()
        if self._vcs.tag_exists(tag_name) and not force:
            return Err(TagExists(tag_name))

        tag_message = message or tag_name
        flag = " --force" if force else ""
        tagged = self._git(
            f"git tag --annotate{flag} -m {tag_message!r} {tag_name}",
            lambda: self._vcs.create_tag(
                tag_name, message=tag_message, force=force, extra_args=op.extra_args
            ),
        )
        if isinstance(tagged, Err):
            return tagged

        postfix = self._config.release_postfix
        following = state.value.next_version
        written = self._write_and_commit(
            following, postfix, message=f"Set version to {following.decorate(postfix)}"
        )
        if isinstance(written, Err):
            return written

        return Ok(
            StatusReport(
                trunk_branch=self._config.trunk_branch,
                release_branch=position.value.branch,
                release_previous=version.decorate(postfix),
                release_next=following.decorate(postfix),
                tag=tag_name,
                dry_run=self._dry_run,
            )
        )

    # ------------------------------------------------------------------
    # steps
    # ------------------------------------------------------------------

    def _enter(self, op: OperationRequest) -> Result[_Position, ReleaseError]:
        """Repository, branch kind and clean tree; no mutation happens before this passes."""
        repo = assert_repository(self._vcs)
        if isinstance(repo, Err):
            return repo

        branch = self._vcs.current_branch()
        kind = classify(
            branch,
            trunk_name=self._config.trunk_branch,
            release_prefix=self._config.release_prefix,
        )
        matches = assert_branch_kind(kind, op.required_kind, branch=branch, operation=op.name)
        if isinstance(matches, Err):
            return matches

        clean = assert_clean_working_tree(self._vcs)
        if isinstance(clean, Err):
            return clean

        return Ok(_Position(branch=branch, kind=kind))

    def _current_or_initialize(self) -> Result[Version, ReleaseError]:
        """Current version; a missing record is resolved but only written with the target."""
        if self._dry_run:
            loaded = load_record(self.record_path)
            if isinstance(loaded, Err) and isinstance(loaded.error, RecordMissing):
                self._console.print(
                    f"record missing; would initialize {self.record_path.name} "
                    f"with {self._config.initial_version}",
                    Style.DIM,
                )
                return Ok(self._config.initial_version)
            return loaded
        return initialize_record(
            self.record_path, self._config.initial_version, self._resolver, persist=False
        )

    def _confirm(self, prompt: str, proposed: Version) -> Result[Version, ReleaseError]:
        if self._dry_run:
            return Ok(proposed)
        answer = self._resolver(prompt, proposed.format())
        if isinstance(answer, Err):
            return answer
        return parse_version(answer.value.strip())

    def _write_and_commit(
        self,
        version: Version,
        postfix: str,
        *,
        message: str,
        allow_empty: bool = False,
    ) -> Result[None, ReleaseError]:
        """Persist ``version``, run the hook, then commit record and hook changes."""
        record = self.record_path
        self._console.print(f"write {record.name}: version={version}", Style.DIM)
        if not self._dry_run:
            save_record(record, version)

        if not self._dry_run:
            hooked = self._hook.apply(version.format(), postfix)
            if isinstance(hooked, Err):
                return hooked

        staged = self._git(f"git add {record.name}", lambda: self._vcs.stage([record]))
        if isinstance(staged, Err):
            return staged

        empty = " --allow-empty" if allow_empty else ""
        return self._git(
            f"git commit -m {message!r}{empty}",
            lambda: self._vcs.commit(message, allow_empty=allow_empty),
        )

    def _git(
        self,
        echo: str,
        step: Callable[[], Result[None, GitError]],
    ) -> Result[None, ReleaseError]:
        self._console.print(echo, Style.DIM)
        if self._dry_run:
            return Ok(None)
        return step().map_err(VcsFailed.from_git)
