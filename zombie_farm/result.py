"""Result type for explicit per-item success/failure handling.

Single transitions raise ``FarmError`` subclasses. Batch operations, which
must keep going after one zombie fails, collect each zombie's outcome as a
``Result`` instead:

    outcome = try_feed(zombie)
    if outcome.is_ok():
        fed.append(outcome.unwrap())
    else:
        skipped.append((zombie.id, str(outcome.error)))

Inspired by Rust's Result type, adapted for Python's idioms.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")  # Success value type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Transformed value type


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful outcome carrying a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    @property
    def error(self) -> None:
        return None

    def map(self, f: Callable[[T], U]) -> "Ok[U]":
        """Transform the success value.

        Example:
            Ok(5).map(lambda x: x * 2)  # Ok(10)
        """
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Generic[E]):
    """A failed outcome carrying the error (usually a ``FarmError``)."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        """Raise the carried error if it is an exception, else ``ValueError``."""
        if isinstance(self.error, BaseException):
            raise self.error
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    @property
    def value(self) -> None:
        return None

    def map(self, f: Callable[[T], U]) -> "Err[E]":
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]


def try_result(f: Callable[[], T], error_type: type = Exception) -> "Result[T, Exception]":
    """Run ``f`` and capture an ``error_type`` exception as ``Err``.

    Example:
        outcome = try_result(lambda: feed(zombie, inventory, now), FarmError)
    """
    try:
        return Ok(f())
    except error_type as e:
        return Err(e)
