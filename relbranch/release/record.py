"""The version record: a small properties file holding the current version.

Layout:

    # This file is generated by relbranch. Do not edit by hand.
    version=1.4.0

The record is the only durable state. Once it exists it always holds a
value matching the version grammar; anything else aborts the operation.
"""

from __future__ import annotations

from pathlib import Path

from relbranch.core.result import Err, Ok, Result
from relbranch.platform.files import atomic_write_text
from relbranch.release.errors import (
    InvalidVersionFormat,
    RecordMissing,
    RecordUnreadable,
    ValueUnresolved,
)
from relbranch.release.prompt import VersionResolver
from relbranch.release.version import Version, parse_version

RECORD_HEADER = "# This file is generated by relbranch. Do not edit by hand."
VERSION_KEY = "version"


def load_record(
    path: Path,
) -> Result[Version, RecordMissing | RecordUnreadable | InvalidVersionFormat]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(RecordMissing(path))
    except UnicodeDecodeError:
        return Err(InvalidVersionFormat(text="", source=path))
    except OSError as e:
        return Err(RecordUnreadable(path, e.strerror or str(e)))

    value = _read_version_value(text)
    if value is None:
        return Err(InvalidVersionFormat(text="", source=path))
    return parse_version(value, source=path)


def save_record(path: Path, version: Version) -> None:
    """Replace the whole record file with ``version``."""
    atomic_write_text(path, f"{RECORD_HEADER}\n{VERSION_KEY}={version.format()}\n")


def initialize_record(
    path: Path,
    default: Version,
    resolver: VersionResolver,
    *,
    persist: bool = True,
) -> Result[Version, InvalidVersionFormat | RecordUnreadable | ValueUnresolved]:
    """Load the record, creating it first if it does not exist yet.

    Only a missing file triggers the resolver; an existing record is returned
    untouched, so repeated calls never prompt twice. With ``persist=False``
    the resolved initial version is returned without writing the file.
    """
    loaded = load_record(path)
    match loaded:
        case Ok(version):
            return Ok(version)
        case Err(RecordMissing()):
            pass
        case Err(e):
            return Err(e)

    answer = resolver(f"No version record at {path.name}. Initial version", default.format())
    if isinstance(answer, Err):
        return answer

    parsed = parse_version(answer.value.strip())
    if isinstance(parsed, Err):
        return parsed

    if persist:
        save_record(path, parsed.value)
    return parsed


def _read_version_value(text: str) -> str | None:
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(("#", "!")):
            continue
        for sep in ("=", ":"):
            if sep in line:
                key, value = line.split(sep, 1)
                if key.strip() == VERSION_KEY:
                    return value.strip()
                break
    return None
