from __future__ import annotations

import pytest

from relbranch.core.result import Err, Ok
from relbranch.release.errors import InvalidVersionFormat
from relbranch.release.version import Version, parse_version


@pytest.mark.parametrize("text", ["0.1.0", "1.2.3", "10.20.30", "0.0.0"])
def test_format_of_parse_is_identity(text: str) -> None:
    parsed = parse_version(text)
    assert isinstance(parsed, Ok)
    assert parsed.value.format() == text
    assert str(parsed.value) == text


@pytest.mark.parametrize(
    "text",
    ["", "1.2", "1.2.3.4", "v1.2.3", "1.2.3-beta", " 1.2.3", "1.2.3\n", "a.b.c", "1..3", "١.٢.٣"],
)
def test_parse_rejects_non_canonical_text(text: str) -> None:
    assert parse_version(text) == Err(InvalidVersionFormat(text=text))


def test_leading_zeros_parse_but_do_not_round_trip() -> None:
    parsed = parse_version("01.2.3")
    assert parsed == Ok(Version(1, 2, 3))
    assert isinstance(parsed, Ok)
    assert parsed.value.format() == "1.2.3"


def test_next_minor_resets_patch() -> None:
    assert Version(2, 7, 4).next_minor() == Version(2, 8, 0)


def test_next_patch_keeps_major_and_minor() -> None:
    v = Version(2, 7, 4)
    nxt = v.next_patch()
    assert (nxt.major, nxt.minor, nxt.patch) == (2, 7, 5)


def test_total_order() -> None:
    assert Version(1, 9, 9) < Version(2, 0, 0) < Version(2, 0, 1) < Version(2, 1, 0)
    assert sorted([Version(1, 10, 0), Version(1, 2, 0)]) == [Version(1, 2, 0), Version(1, 10, 0)]


def test_decorate_appends_postfix() -> None:
    assert Version(0, 2, 0).decorate("-SNAPSHOT") == "0.2.0-SNAPSHOT"
    assert Version(0, 2, 0).decorate("") == "0.2.0"
