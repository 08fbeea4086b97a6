"""Result type for explicit error handling.

Every fallible release step returns either ``Ok(value)`` or ``Err(error)``
instead of raising. Callers narrow with ``isinstance`` or pattern matching:

    match load_record(path):
        case Ok(version):
            print(version)
        case Err(RecordMissing(path=p)):
            print(f"no record at {p}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result holding ``value``."""

    value: T

    def map_err[F](self, f: Callable[..., F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result holding ``error``."""

    error: E

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Transform the contained error."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
