"""Capability base class and class-body declaration DSL.

Subclasses of ``BasicCapability`` describe the functions they expose::

    class IceKing(BasicCapability, library=IceWand):
        ice_attack = function(lambda fn: fn.argument("victim", required=True, type="string"))

        @function
        def freeze(fn):
            fn.argument("target", lambda arg: arg.required(True)).returns("raw")

    IceKing.namespace()                              # "ice_king"
    IceKing.to_hash()                                # schema for routing layers
    IceKing.run_function("ice_attack", {"victim": "Gunther"})

Each subclass receives a fresh ``CapabilityRegistry`` when it is created.
Declarations are collected from the class body in definition order and
then removed from the class namespace.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from snapi.capabilities import dispatch, validation
from snapi.capabilities.functions import FunctionConfigurator, FunctionSpec, build_function
from snapi.capabilities.registry import CapabilityRegistry
from snapi.core.errors import CapabilityDefinitionError, InvalidFunctionCallError
from snapi.core.result import Result

if TYPE_CHECKING:
    from snapi.capabilities.schema import CapabilitySchema


class FunctionDeclaration:
    """Placeholder for a function declared in a capability class body."""

    def __init__(self, configure: FunctionConfigurator | None, name: str | None) -> None:
        self.configure = configure
        self.name = name

    def __set_name__(self, owner: type, attr_name: str) -> None:
        if self.name is None:
            self.name = attr_name

    def __call__(self, configure: FunctionConfigurator) -> FunctionDeclaration:
        # Supports ``@function(name="...")`` decorator usage.
        if self.configure is not None:
            raise CapabilityDefinitionError(
                "Function declaration is already configured", context={"function": self.name}
            )
        self.configure = configure
        return self

    def __repr__(self) -> str:
        return f"FunctionDeclaration(name={self.name!r})"

    def build(self) -> FunctionSpec:
        if self.name is None:
            raise CapabilityDefinitionError("Function declaration has no name")
        return build_function(self.name, self.configure)


def function(
    configure: FunctionConfigurator | None = None, *, name: str | None = None
) -> FunctionDeclaration:
    """Declare a capability function inside a class body.

    The function is named after the attribute it is assigned to unless
    ``name`` is given. ``configure`` receives a ``FunctionBuilder``; it can
    be passed directly, or ``function`` can decorate it.
    """
    if configure is not None and not callable(configure):
        raise CapabilityDefinitionError(
            "function() expects a configuration callable; pass names with name=...",
            context={"configure": repr(configure)},
        )
    return FunctionDeclaration(configure, name)


class BasicCapability:
    """Base class for capability declarations.

    All behaviour is exposed through class methods; capabilities are never
    instantiated for dispatch.
    """

    _registry: ClassVar[CapabilityRegistry]

    def __init_subclass__(cls, *, library: object | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry = CapabilityRegistry(cls)

        declarations = [
            (attr_name, value)
            for attr_name, value in vars(cls).items()
            if isinstance(value, FunctionDeclaration)
        ]
        for attr_name, declaration in declarations:
            cls._registry.register(declaration.build())
            delattr(cls, attr_name)

        if library is not None:
            cls._registry.set_library(library)

    # -- declarations -------------------------------------------------------

    @classmethod
    def function(cls, name: str, configure: FunctionConfigurator | None = None) -> FunctionSpec:
        """Declare (or redeclare) a function after the class body."""
        return cls._registry.register(build_function(name, configure))

    @classmethod
    def library(cls, library: object) -> None:
        """Set the object calls are dispatched to for this class only."""
        cls._registry.set_library(library)

    # -- introspection ------------------------------------------------------

    @classmethod
    def namespace(cls) -> str:
        return cls._registry.namespace

    @classmethod
    def functions(cls) -> Mapping[str, FunctionSpec]:
        return cls._registry.functions

    @classmethod
    def library_class(cls) -> object:
        return cls._registry.library_class

    @classmethod
    def valid_library_class(cls) -> bool:
        """True when the library exposes an operation for every declared function."""
        return cls._registry.valid_library_class()

    @classmethod
    def to_hash(cls) -> dict[str, dict[str, Any]]:
        return cls._registry.to_hash()

    @classmethod
    def schema(cls) -> CapabilitySchema:
        from snapi.capabilities.schema import build_schema

        return build_schema(cls)

    # -- calls --------------------------------------------------------------

    @classmethod
    def check_function_call(
        cls,
        function_name: str,
        args: Mapping[str, Any],
        *,
        strict_types: bool | None = None,
    ) -> Result[FunctionSpec, InvalidFunctionCallError]:
        return validation.check_function_call(
            cls._registry, function_name, args, strict_types=strict_types
        )

    @classmethod
    def valid_function_call(
        cls,
        function_name: str,
        args: Mapping[str, Any],
        *,
        strict_types: bool | None = None,
    ) -> bool:
        return validation.valid_function_call(
            cls._registry, function_name, args, strict_types=strict_types
        )

    @classmethod
    def run_function(
        cls,
        function_name: str,
        args: Mapping[str, Any] | None = None,
        *,
        strict_types: bool | None = None,
    ) -> Any:
        """Validate ``args`` and call the library operation named ``function_name``.

        Raises:
            InvalidFunctionCallError: unknown function or missing required arguments.
            LibraryClassMissingFunctionError: the library has no such operation.
        """
        return dispatch.run_function(
            cls._registry, function_name, {} if args is None else args, strict_types=strict_types
        )


BasicCapability._registry = CapabilityRegistry(BasicCapability)


__all__ = ["BasicCapability", "FunctionDeclaration", "function"]
