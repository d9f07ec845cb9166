"""Function specifications and their builder."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

from snapi.capabilities.arguments import ArgumentBuilder, ArgumentSpec, _check_name

ArgumentConfigurator = Callable[[ArgumentBuilder], Any]


class FunctionSpec(BaseModel):
    """A named capability function: return kind plus ordered arguments."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    return_type: str | None = None
    arguments: tuple[ArgumentSpec, ...] = ()

    def argument(self, name: str) -> ArgumentSpec | None:
        for spec in self.arguments:
            if spec.name == name:
                return spec
        return None

    @property
    def required_arguments(self) -> tuple[ArgumentSpec, ...]:
        return tuple(spec for spec in self.arguments if spec.required)

    def to_hash(self) -> dict[str, Any]:
        return {
            "return_type": self.return_type,
            "arguments": [spec.to_hash() for spec in self.arguments],
        }


class FunctionBuilder:
    """Collects the return kind and arguments of one function declaration.

    Arguments may be configured with a callable receiving an
    ``ArgumentBuilder``, with keyword fields, or both::

        fn.argument("victim", lambda arg: arg.required(True)).returns("raw")
        fn.argument("victim", required=True, type="string")
    """

    def __init__(self, name: str) -> None:
        self._name = _check_name("Function", name)
        self._return_type: str | None = None
        self._arguments: dict[str, ArgumentSpec] = {}

    def returns(self, return_type: str) -> FunctionBuilder:
        self._return_type = return_type
        return self

    def argument(
        self,
        name: str,
        configure: ArgumentConfigurator | None = None,
        **fields: Any,
    ) -> FunctionBuilder:
        builder = ArgumentBuilder(name)
        if configure is not None:
            configure(builder)
        if fields:
            builder.set(**fields)
        # Redeclaring an argument replaces it in place.
        self._arguments[name] = builder.build()
        return self

    def build(self) -> FunctionSpec:
        return FunctionSpec(
            name=self._name,
            return_type=self._return_type,
            arguments=tuple(self._arguments.values()),
        )


FunctionConfigurator = Callable[[FunctionBuilder], Any]


def build_function(name: str, configure: FunctionConfigurator | None = None) -> FunctionSpec:
    """Run an optional configurator against a fresh builder and freeze the result."""
    builder = FunctionBuilder(name)
    if configure is not None:
        configure(builder)
    return builder.build()


__all__ = [
    "ArgumentConfigurator",
    "FunctionBuilder",
    "FunctionConfigurator",
    "FunctionSpec",
    "build_function",
]
