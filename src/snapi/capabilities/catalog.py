"""Capability discovery and lookup.

Collects capability classes from importable modules into a catalog keyed
by namespace. The catalog is what a routing layer or the ``snapi`` CLI
works from.

Usage:
    from snapi.capabilities.catalog import discover_capabilities, catalog_schema

    catalog = discover_capabilities(["myapp.capabilities"])
    document = catalog_schema(catalog)
"""

from __future__ import annotations

import warnings
from collections.abc import Iterable, Mapping
from importlib import import_module
from types import ModuleType
from typing import Any

from snapi.capabilities.base import BasicCapability
from snapi.core.console import get_logger
from snapi.core.errors import SnapiError

logger = get_logger(__name__)

Catalog = dict[str, type[BasicCapability]]


class CapabilityNotFoundError(SnapiError):
    """Raised when a capability target cannot be resolved."""


def is_capability(obj: object) -> bool:
    return isinstance(obj, type) and issubclass(obj, BasicCapability) and obj is not BasicCapability


def capabilities_in_module(module: ModuleType) -> list[type[BasicCapability]]:
    """Capability classes defined (not merely imported) in ``module``."""
    found: list[type[BasicCapability]] = []
    for attr_name, obj in vars(module).items():
        if attr_name.startswith("_") or not is_capability(obj):
            continue
        if obj.__module__ == module.__name__:
            found.append(obj)
    return found


def discover_capabilities(module_names: Iterable[str]) -> Catalog:
    """Import each module and collect its capabilities by namespace.

    Modules that fail to import are skipped with a RuntimeWarning. When two
    capabilities share a namespace, the later one wins and a warning is
    emitted.
    """
    catalog: Catalog = {}
    for module_name in module_names:
        try:
            module = import_module(module_name)
        except ImportError as exc:
            warnings.warn(
                f"Failed to import capability module {module_name}: {exc}",
                RuntimeWarning,
                stacklevel=2,
            )
            continue

        for capability in capabilities_in_module(module):
            namespace = capability.namespace()
            previous = catalog.get(namespace)
            if previous is not None and previous is not capability:
                warnings.warn(
                    f"Duplicate capability namespace '{namespace}' in {module_name}; "
                    f"{previous.__module__}.{previous.__qualname__} will be overwritten.",
                    RuntimeWarning,
                    stacklevel=2,
                )
            catalog[namespace] = capability

    logger.debug("Discovered %d capabilities", len(catalog))
    return catalog


def resolve_capability(
    target: str, catalog: Mapping[str, type[BasicCapability]] | None = None
) -> type[BasicCapability]:
    """Resolve ``module:ClassName`` or a namespace present in ``catalog``."""
    if ":" in target:
        module_name, _, attr_name = target.partition(":")
        try:
            module = import_module(module_name)
        except ImportError as exc:
            raise CapabilityNotFoundError(
                f"Cannot import module '{module_name}'", context={"target": target}
            ) from exc
        obj = getattr(module, attr_name, None)
        if not is_capability(obj):
            raise CapabilityNotFoundError(
                f"'{attr_name}' is not a capability class", context={"target": target}
            )
        return obj  # type: ignore[return-value]

    if catalog is not None and target in catalog:
        return catalog[target]

    raise CapabilityNotFoundError(f"Unknown capability '{target}'", context={"target": target})


def catalog_schema(catalog: Mapping[str, type[BasicCapability]]) -> dict[str, dict[str, Any]]:
    """Namespace -> function schema document for every catalogued capability."""
    return {namespace: capability.to_hash() for namespace, capability in catalog.items()}


__all__ = [
    "Catalog",
    "CapabilityNotFoundError",
    "capabilities_in_module",
    "catalog_schema",
    "discover_capabilities",
    "is_capability",
    "resolve_capability",
]
