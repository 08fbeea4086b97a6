from __future__ import annotations

import os
from pathlib import Path

import pytest

from relbranch.platform.files import atomic_write_text, is_executable


def test_atomic_write_text_creates_parent_dirs(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "version.properties"
    atomic_write_text(path, "version=1.0.0\n")

    assert path.read_text(encoding="utf-8") == "version=1.0.0\n"


def test_atomic_write_text_replaces_existing_content(tmp_path: Path) -> None:
    path = tmp_path / "version.properties"
    path.write_text("version=0.1.0\n", encoding="utf-8")

    atomic_write_text(path, "version=0.2.0\n")

    assert path.read_text(encoding="utf-8") == "version=0.2.0\n"


def test_atomic_write_text_cleans_temp_file_on_replace_failure(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "version.properties"
    path.write_text("version=0.1.0\n", encoding="utf-8")

    def fail_replace(_src: Path, _dst: Path) -> None:
        raise OSError("replace failed")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(OSError, match="replace failed"):
        atomic_write_text(path, "version=0.2.0\n")

    assert list(tmp_path.glob(f".{path.name}.*.tmp")) == []
    assert path.read_text(encoding="utf-8") == "version=0.1.0\n"


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_is_executable(tmp_path: Path) -> None:
    script = tmp_path / "hook"
    script.write_text("#!/bin/sh\n", encoding="utf-8")
    assert is_executable(script) is False

    script.chmod(0o755)
    assert is_executable(script) is True
    assert is_executable(tmp_path) is False
    assert is_executable(tmp_path / "missing") is False
