"""Ways to settle a value the operator may want to override.

``PromptResolver`` asks on the terminal with the computed value as default.
``DefaultResolver`` never asks: it takes the default, which makes it the
resolver for batch runs and tests.
"""

from __future__ import annotations

from typing import Protocol

import typer

from relbranch.core.result import Err, Ok, Result
from relbranch.release.errors import ValueUnresolved


class VersionResolver(Protocol):
    def __call__(self, prompt: str, default: str | None) -> Result[str, ValueUnresolved]: ...


class PromptResolver:
    """Interactive resolver backed by ``typer.prompt``. Blocks until answered."""

    def __call__(self, prompt: str, default: str | None) -> Result[str, ValueUnresolved]:
        answer: str = typer.prompt(prompt, default=default)
        answer = answer.strip()
        if not answer:
            return Err(ValueUnresolved(prompt))
        return Ok(answer)


class DefaultResolver:
    def __call__(self, prompt: str, default: str | None) -> Result[str, ValueUnresolved]:
        if default is None:
            return Err(ValueUnresolved(prompt))
        return Ok(default)
