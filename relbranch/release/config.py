"""Release configuration.

Resolved once per invocation and passed to every component. Sources, last
one wins:

1. built-in defaults below
2. ``[relbranch]`` table of ``relbranch.toml`` at the repository root
3. repository git config (``git config relbranch.trunk release``)
"""

from __future__ import annotations

import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from relbranch.core.result import Err, Ok, Result
from relbranch.core.structured import StrDict, as_str_dict, get_str, get_table
from relbranch.release.version import Version, parse_version

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ReleaseConfig",
    "resolve_config",
]

CONFIG_FILE_NAME = "relbranch.toml"

DEFAULT_TRUNK_BRANCH = "main"
DEFAULT_RELEASE_PREFIX = "release/"
DEFAULT_TRUNK_POSTFIX = "-SNAPSHOT"
DEFAULT_RELEASE_POSTFIX = ""
DEFAULT_HOOK_PATH = ".relbranch/hook"
DEFAULT_RECORD_PATH = "version.properties"
DEFAULT_INITIAL_VERSION = Version(0, 1, 0)

# (toml key, git config key, empty value allowed)
_KEYS: tuple[tuple[str, str, bool], ...] = (
    ("trunk", "relbranch.trunk", False),
    ("release_prefix", "relbranch.releasePrefix", False),
    ("trunk_postfix", "relbranch.trunkPostfix", True),
    ("release_postfix", "relbranch.releasePostfix", True),
    ("hook", "relbranch.hook", False),
    ("version_file", "relbranch.versionFile", False),
    ("initial_version", "relbranch.initialVersion", False),
)

_FIELDS = {
    "trunk": "trunk_branch",
    "release_prefix": "release_prefix",
    "trunk_postfix": "trunk_postfix",
    "release_postfix": "release_postfix",
    "hook": "hook_path",
    "version_file": "record_path",
}


@dataclass(frozen=True, slots=True)
class ConfigError:
    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Immutable settings for one repository.

    ``hook_path`` and ``record_path`` are relative to the repository root
    unless absolute.
    """

    trunk_branch: str = DEFAULT_TRUNK_BRANCH
    release_prefix: str = DEFAULT_RELEASE_PREFIX
    trunk_postfix: str = DEFAULT_TRUNK_POSTFIX
    release_postfix: str = DEFAULT_RELEASE_POSTFIX
    hook_path: str = DEFAULT_HOOK_PATH
    record_path: str = DEFAULT_RECORD_PATH
    initial_version: Version = DEFAULT_INITIAL_VERSION

    def record_file(self, repo_root: Path) -> Path:
        return repo_root / self.record_path

    def hook_file(self, repo_root: Path) -> Path:
        return repo_root / self.hook_path


def resolve_config(
    repo_root: Path,
    git_config: Callable[[str], str | None],
) -> Result[ReleaseConfig, ConfigError]:
    """Build the configuration for the repository at ``repo_root``.

    ``git_config`` looks up one git config key (None when unset).
    """
    values: dict[str, str] = {}

    toml_path = repo_root / CONFIG_FILE_NAME
    if toml_path.is_file():
        table = _load_toml_table(toml_path)
        if isinstance(table, Err):
            return table
        for key, _git_key, keep_empty in _KEYS:
            value = get_str(table.value, key, keep_empty=keep_empty)
            if value is not None:
                values[key] = value

    for key, git_key, keep_empty in _KEYS:
        raw = git_config(git_key)
        if raw is None:
            continue
        value = raw.strip()
        if value or keep_empty:
            values[key] = value

    return _build(values, source=toml_path if toml_path.is_file() else None)


def _build(values: Mapping[str, str], *, source: Path | None) -> Result[ReleaseConfig, ConfigError]:
    config = ReleaseConfig()
    changes: dict[str, str] = {_FIELDS[k]: v for k, v in values.items() if k in _FIELDS}
    config = replace(config, **changes)

    initial = values.get("initial_version")
    if initial is not None:
        parsed = parse_version(initial)
        if isinstance(parsed, Err):
            return Err(ConfigError(f"invalid initial_version: {initial!r}", path=source))
        config = replace(config, initial_version=parsed.value)

    return Ok(config)


def _load_toml_table(path: Path) -> Result[StrDict, ConfigError]:
    try:
        data_obj: object = tomllib.loads(path.read_text(encoding="utf-8"))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(get_table(data, "relbranch") or {})
