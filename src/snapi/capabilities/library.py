"""Resolution of capability functions to library operations.

A library is any object (usually a class or module) providing one
type-level callable per declared function name. Each callable receives the
argument mapping as its single positional argument.

Libraries can publish the operations they expose explicitly::

    class IceWand:
        __snapi_operations__ = ("ice_attack",)

        @staticmethod
        def ice_attack(args): ...

Without that table, the attribute is looked up statically on the library.
For classes only static methods, class methods and other non-function
callables count; plain functions are instance methods and are not
reachable without an instance.
"""

from __future__ import annotations

import inspect
import types
from collections.abc import Callable, Iterable
from typing import Any

LibraryOperation = Callable[[Any], Any]

# Attribute naming the operations a library exposes.
OPERATIONS_ATTR = "__snapi_operations__"


def declared_operations(library: object) -> frozenset[str] | None:
    """Return the library's explicit operation table, or None if it has none."""
    table = getattr(library, OPERATIONS_ATTR, None)
    if table is None:
        return None
    if isinstance(table, str):
        return frozenset((table,))
    return frozenset(table)


def _type_level_attribute(library: type, name: str) -> object | None:
    try:
        raw = inspect.getattr_static(library, name)
    except AttributeError:
        return None
    if isinstance(raw, (staticmethod, classmethod)):
        return getattr(library, name)
    if isinstance(raw, types.FunctionType):
        return None
    return raw if callable(raw) else None


def resolve_operation(library: object, name: str) -> LibraryOperation | None:
    """Return the callable the library exposes under ``name``, if any."""
    table = declared_operations(library)
    if table is not None and name not in table:
        return None

    if isinstance(library, type):
        operation = _type_level_attribute(library, name)
    else:
        operation = getattr(library, name, None)
    return operation if callable(operation) else None


def missing_operations(library: object, names: Iterable[str]) -> list[str]:
    """Names from ``names`` the library does not expose, in input order."""
    return [name for name in names if resolve_operation(library, name) is None]


def library_name(library: object) -> str:
    if isinstance(library, type):
        return f"{library.__module__}.{library.__qualname__}"
    if isinstance(library, types.ModuleType):
        return library.__name__
    return f"<{type(library).__qualname__} instance>"


__all__ = [
    "LibraryOperation",
    "OPERATIONS_ATTR",
    "declared_operations",
    "library_name",
    "missing_operations",
    "resolve_operation",
]
