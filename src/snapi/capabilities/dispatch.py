"""Dispatch of validated calls to a capability's library.

A call moves through four steps: lookup, validation, library resolution
and invocation. The first two raise ``InvalidFunctionCallError``, the third
``LibraryClassMissingFunctionError``. Whatever the library operation
returns or raises is passed through untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from snapi.capabilities.library import library_name, resolve_operation
from snapi.capabilities.registry import CapabilityRegistry
from snapi.capabilities.validation import check_function_call
from snapi.core.console import get_logger
from snapi.core.errors import LibraryClassMissingFunctionError
from snapi.core.result import Err

logger = get_logger(__name__)


def run_function(
    registry: CapabilityRegistry,
    function_name: str,
    args: Mapping[str, Any],
    *,
    strict_types: bool | None = None,
) -> Any:
    checked = check_function_call(registry, function_name, args, strict_types=strict_types)
    if isinstance(checked, Err):
        logger.debug("Rejected call %s.%s: %s", registry.namespace, function_name, checked.error)
        raise checked.error

    library = registry.library_class
    operation = resolve_operation(library, function_name)
    if operation is None:
        raise LibraryClassMissingFunctionError(function_name, library)

    logger.debug(
        "Dispatching %s.%s to %s", registry.namespace, function_name, library_name(library)
    )
    return operation(args)


__all__ = ["run_function"]
