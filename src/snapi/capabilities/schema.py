"""Serializable schema models for capability classes.

``BasicCapability.to_hash()`` is the plain-dict export. The models here
wrap the same information with the namespace and library name so routing
layers can consume a typed, JSON-ready document.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from snapi.capabilities.library import library_name

if TYPE_CHECKING:
    from snapi.capabilities.base import BasicCapability


class FunctionSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    return_type: str | None = None
    arguments: list[dict[str, Any]] = Field(default_factory=list)


class CapabilitySchema(BaseModel):
    """Schema document for one capability class."""

    model_config = ConfigDict(frozen=True)

    namespace: str
    capability: str
    library: str
    functions: dict[str, FunctionSchema] = Field(default_factory=dict)

    def to_hash(self) -> dict[str, dict[str, Any]]:
        return {name: fn.model_dump() for name, fn in self.functions.items()}


def build_schema(capability: type[BasicCapability]) -> CapabilitySchema:
    return CapabilitySchema(
        namespace=capability.namespace(),
        capability=f"{capability.__module__}.{capability.__qualname__}",
        library=library_name(capability.library_class()),
        functions={
            name: FunctionSchema.model_validate(exported)
            for name, exported in capability.to_hash().items()
        },
    )


__all__ = ["CapabilitySchema", "FunctionSchema", "build_schema"]
