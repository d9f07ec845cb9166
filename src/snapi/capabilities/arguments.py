"""Argument specifications and their builder.

An ``ArgumentSpec`` records the constraints declared for one named input
of a capability function. Specs are produced by ``ArgumentBuilder`` inside
a function declaration and are immutable afterwards.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from snapi.core.errors import CapabilityDefinitionError

# Fields a builder may set, in schema export order after "name".
ARGUMENT_FIELDS: tuple[str, ...] = ("default_value", "format", "list", "required", "type")


class ArgumentSpec(BaseModel):
    """Declared constraints for one named function argument.

    Only fields passed explicitly at construction are reported by
    ``to_hash()``; the rest keep their defaults silently.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    default_value: Any = None
    format: str | None = None
    list: bool = False
    required: bool = False
    type: str | None = None

    def to_hash(self) -> dict[str, Any]:
        exported: dict[str, Any] = {"name": self.name}
        for field_name in ARGUMENT_FIELDS:
            if field_name in self.model_fields_set:
                exported[field_name] = getattr(self, field_name)
        return exported


def _check_name(kind: str, name: object) -> str:
    if not isinstance(name, str) or not name:
        raise CapabilityDefinitionError(
            f"{kind} name must be a non-empty string", context={"name": repr(name)}
        )
    return name


class ArgumentBuilder:
    """Chainable setters populating an ArgumentSpec.

    Example::

        arg.default_value("sugar").format("anything").list(True).required(True).type("enum")
    """

    def __init__(self, name: str) -> None:
        self._name = _check_name("Argument", name)
        self._fields: dict[str, Any] = {}

    def default_value(self, value: Any) -> ArgumentBuilder:
        self._fields["default_value"] = value
        return self

    def format(self, value: str) -> ArgumentBuilder:
        self._fields["format"] = value
        return self

    def list(self, value: bool = True) -> ArgumentBuilder:
        self._fields["list"] = bool(value)
        return self

    def required(self, value: bool = True) -> ArgumentBuilder:
        self._fields["required"] = bool(value)
        return self

    def type(self, value: str) -> ArgumentBuilder:
        self._fields["type"] = value
        return self

    def set(self, **fields: Any) -> ArgumentBuilder:
        """Apply several setters at once, e.g. ``set(required=True, type="string")``."""
        for field_name, value in fields.items():
            if field_name not in ARGUMENT_FIELDS:
                raise CapabilityDefinitionError(
                    f"Unknown argument field '{field_name}'",
                    context={"argument": self._name},
                )
            getattr(self, field_name)(value)
        return self

    def build(self) -> ArgumentSpec:
        return ArgumentSpec(name=self._name, **self._fields)


__all__ = ["ARGUMENT_FIELDS", "ArgumentBuilder", "ArgumentSpec"]
