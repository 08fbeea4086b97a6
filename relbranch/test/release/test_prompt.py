from __future__ import annotations

import pytest

from relbranch.core.result import Err, Ok
from relbranch.release import prompt as prompt_mod
from relbranch.release.errors import ValueUnresolved
from relbranch.release.prompt import DefaultResolver, PromptResolver


def test_default_resolver() -> None:
    assert DefaultResolver()("Next version", "0.2.0") == Ok("0.2.0")
    assert DefaultResolver()("Next version", None) == Err(ValueUnresolved("Next version"))


def test_prompt_resolver_uses_answer(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[tuple[str, str | None]] = []

    def fake_prompt(text: str, default: str | None = None) -> str:
        seen.append((text, default))
        return " 1.0.0 "

    monkeypatch.setattr(prompt_mod.typer, "prompt", fake_prompt)

    assert PromptResolver()("Next version", "0.2.0") == Ok("1.0.0")
    assert seen == [("Next version", "0.2.0")]


def test_prompt_resolver_blank_answer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(prompt_mod.typer, "prompt", lambda text, default=None: "  ")
    assert PromptResolver()("Next version", None) == Err(ValueUnresolved("Next version"))
