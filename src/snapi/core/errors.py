"""Error hierarchy for snapi.

This module defines the exceptions shared by the DSL, the validation engine
and the dispatch engine without creating circular import dependencies.

Usage:
    from snapi.core.errors import InvalidFunctionCallError

    try:
        IceKing.run_function("icicle", {"victim": "Gunther"})
    except InvalidFunctionCallError as exc:
        print(exc.function_name, exc.missing)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class SnapiError(Exception):
    """Base exception for all snapi errors.

    All custom exceptions inherit from this class so callers can catch
    every failure raised by the core with a single handler.
    """

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class CapabilityDefinitionError(SnapiError):
    """Raised when a capability declaration is malformed.

    Examples:
    - Empty or non-identifier function names
    - Assigning a second, different library to a capability
    - A function declaration without a resolvable name
    """


class InvalidFunctionCallError(SnapiError):
    """Raised when a call does not match the capability's schema.

    Covers unknown function names and calls that omit required arguments.
    With strict type checking enabled it also covers values whose type
    does not match the declared argument type.
    """

    def __init__(
        self,
        function_name: str,
        reason: str,
        *,
        validator: str | None = None,
        missing: Iterable[str] = (),
    ) -> None:
        self.function_name = function_name
        self.reason = reason
        self.validator = validator
        self.missing = tuple(missing)

        context: dict[str, Any] = {"function": function_name}
        if validator:
            context["validator"] = validator
        if self.missing:
            context["missing"] = ",".join(self.missing)
        super().__init__(reason, context=context)


class LibraryClassMissingFunctionError(SnapiError):
    """Raised when the library object has no operation for a valid call."""

    def __init__(self, function_name: str, library: object) -> None:
        self.function_name = function_name
        self.library = library
        library_name = getattr(library, "__qualname__", None) or getattr(
            library, "__name__", type(library).__qualname__
        )
        super().__init__(
            f"Library {library_name} does not provide '{function_name}'",
            context={"function": function_name, "library": library_name},
        )


class ConfigError(SnapiError):
    """Raised when configuration cannot be loaded or validated."""


__all__ = [
    "CapabilityDefinitionError",
    "ConfigError",
    "InvalidFunctionCallError",
    "LibraryClassMissingFunctionError",
    "SnapiError",
]
