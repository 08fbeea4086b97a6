from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from relbranch.core.result import Err, Ok, Result
from relbranch.release.errors import InvalidVersionFormat


_VERSION_RE = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)")


@dataclass(frozen=True, slots=True, order=True)
class Version:
    major: int
    minor: int
    patch: int

    def format(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def decorate(self, postfix: str) -> str:
        """Display form: canonical text followed by ``postfix``."""
        return f"{self.format()}{postfix}"

    def next_minor(self) -> Version:
        return Version(self.major, self.minor + 1, 0)

    def next_patch(self) -> Version:
        return Version(self.major, self.minor, self.patch + 1)

    def __str__(self) -> str:
        return self.format()


def parse_version(
    text: str, *, source: Path | None = None
) -> Result[Version, InvalidVersionFormat]:
    m = _VERSION_RE.fullmatch(text)
    if m is None:
        return Err(InvalidVersionFormat(text=text, source=source))
    return Ok(Version(int(m.group(1)), int(m.group(2)), int(m.group(3))))
