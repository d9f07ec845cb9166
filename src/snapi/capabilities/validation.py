"""Validation of call arguments against a function's declared arguments.

The binding rule is presence: a call is valid when the function is
registered and every argument declared ``required`` appears as a key of
the argument mapping. Extra keys are ignored.

Strict type checking is an opt-in extension. When enabled, present values
whose argument declares a known ``type`` tag are checked with a strict
Pydantic ``TypeAdapter`` (no coercion). Unknown tags such as ``enum`` are
left unchecked.
"""

from __future__ import annotations

import functools
from collections.abc import Mapping
from typing import Any

from pydantic import ConfigDict, TypeAdapter, ValidationError

from snapi.capabilities.arguments import ArgumentSpec
from snapi.capabilities.functions import FunctionSpec
from snapi.capabilities.registry import CapabilityRegistry
from snapi.core.errors import InvalidFunctionCallError
from snapi.core.result import Err, Ok, Result
from snapi.core.runtime import get_runtime_or_none

# Argument type tags with a Python counterpart.
TYPE_TAGS: dict[str, type] = {
    "string": str,
    "integer": int,
    "float": float,
    "number": float,
    "boolean": bool,
    "hash": dict,
}


@functools.lru_cache(maxsize=None)
def _adapter_for(type_tag: str, is_list: bool) -> TypeAdapter[Any] | None:
    python_type = TYPE_TAGS.get(type_tag)
    if python_type is None:
        return None
    target: Any = list[python_type] if is_list else python_type  # type: ignore[valid-type]
    return TypeAdapter(target, config=ConfigDict(strict=True))


def strict_types_enabled(explicit: bool | None = None) -> bool:
    """Resolve the strict-type flag from the caller or the runtime context."""
    if explicit is not None:
        return explicit
    ctx = get_runtime_or_none()
    return ctx.strict_types if ctx is not None else False


def _type_mismatches(spec: FunctionSpec, args: Mapping[str, Any]) -> list[str]:
    mismatches: list[str] = []
    for argument in spec.arguments:
        if argument.name not in args or argument.type is None:
            continue
        value = args[argument.name]
        if value is None and not argument.required:
            continue
        if not _value_matches(argument, value):
            mismatches.append(argument.name)
    return mismatches


def _value_matches(argument: ArgumentSpec, value: Any) -> bool:
    adapter = _adapter_for(argument.type or "", argument.list)
    if adapter is None:
        return True
    try:
        adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def check_function_call(
    registry: CapabilityRegistry,
    function_name: str,
    args: Mapping[str, Any],
    *,
    strict_types: bool | None = None,
) -> Result[FunctionSpec, InvalidFunctionCallError]:
    """Validate a call, returning the matched spec or the reason it failed."""
    validator = registry.owner.__qualname__

    spec = registry.get(function_name)
    if spec is None:
        return Err(
            InvalidFunctionCallError(
                function_name,
                f"Unknown function '{function_name}' for {registry.namespace}",
                validator=validator,
            )
        )

    if not isinstance(args, Mapping):
        return Err(
            InvalidFunctionCallError(
                function_name,
                f"Arguments must be a mapping, got {type(args).__name__}",
                validator=validator,
            )
        )

    missing = [argument.name for argument in spec.required_arguments if argument.name not in args]
    if missing:
        return Err(
            InvalidFunctionCallError(
                function_name,
                f"Missing required arguments for '{function_name}'",
                validator=validator,
                missing=missing,
            )
        )

    if strict_types_enabled(strict_types):
        mismatched = _type_mismatches(spec, args)
        if mismatched:
            return Err(
                InvalidFunctionCallError(
                    function_name,
                    f"Arguments do not match declared types: {', '.join(mismatched)}",
                    validator=validator,
                )
            )

    return Ok(spec)


def valid_function_call(
    registry: CapabilityRegistry,
    function_name: str,
    args: Mapping[str, Any],
    *,
    strict_types: bool | None = None,
) -> bool:
    return check_function_call(registry, function_name, args, strict_types=strict_types).is_ok()


__all__ = [
    "TYPE_TAGS",
    "check_function_call",
    "strict_types_enabled",
    "valid_function_call",
]
