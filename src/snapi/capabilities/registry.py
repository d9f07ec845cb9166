"""Per-class capability registry.

Every capability class owns exactly one ``CapabilityRegistry``, created
when the class is created. Registries are never shared with or copied from
a parent class, so functions declared on one class are invisible to its
parent and siblings.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from snapi.capabilities.functions import FunctionSpec
from snapi.capabilities.library import library_name, missing_operations
from snapi.capabilities.namespace import derive_namespace
from snapi.core.console import get_logger
from snapi.core.errors import CapabilityDefinitionError

logger = get_logger(__name__)


class CapabilityRegistry:
    """Function specs, library reference and namespace for one class."""

    def __init__(self, owner: type) -> None:
        self.owner = owner
        self.namespace = derive_namespace(owner.__name__)
        self._functions: dict[str, FunctionSpec] = {}
        self._library: object | None = None

    def __repr__(self) -> str:
        return (
            f"CapabilityRegistry(owner={self.owner.__qualname__}, "
            f"namespace={self.namespace!r}, functions={list(self._functions)})"
        )

    @property
    def functions(self) -> Mapping[str, FunctionSpec]:
        """Read-only view of the registered functions, in declaration order."""
        return MappingProxyType(self._functions)

    def get(self, name: str) -> FunctionSpec | None:
        return self._functions.get(name)

    def register(self, spec: FunctionSpec) -> FunctionSpec:
        if spec.name in self._functions:
            logger.debug("Redefining %s.%s", self.namespace, spec.name)
        self._functions[spec.name] = spec
        logger.debug(
            "Registered function %s.%s (%d arguments)",
            self.namespace,
            spec.name,
            len(spec.arguments),
        )
        return spec

    @property
    def library_class(self) -> object:
        return self.owner if self._library is None else self._library

    def set_library(self, library: object) -> None:
        if library is None:
            raise CapabilityDefinitionError(
                "Library cannot be None", context={"capability": self.owner.__qualname__}
            )
        if self._library is not None and self._library is not library:
            raise CapabilityDefinitionError(
                "Capability already has a library",
                context={
                    "capability": self.owner.__qualname__,
                    "library": library_name(self._library),
                },
            )
        self._library = library

    def missing_operations(self) -> list[str]:
        # Checked on every call; libraries may gain or lose attributes at runtime.
        return missing_operations(self.library_class, self._functions)

    def valid_library_class(self) -> bool:
        return not self.missing_operations()

    def to_hash(self) -> dict[str, dict[str, Any]]:
        return {name: spec.to_hash() for name, spec in self._functions.items()}


__all__ = ["CapabilityRegistry"]
