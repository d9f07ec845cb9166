"""
Result values for explicit error handling.

The validation engine reports outcomes as values rather than exceptions so
that callers can pre-check a call without exception-driven control flow.

Usage:
    from snapi.core.result import Err, Ok, Result

    result = check_function_call(registry, "ice_attack", {})
    if result.is_err():
        print(result.error)
    else:
        spec = result.value
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the contained error."""
        raise self.error


Result = Ok[T] | Err[E]


__all__ = ["Err", "Ok", "Result"]
