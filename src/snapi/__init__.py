"""snapi - declarative capability schemas with validated dispatch.

A capability class declares the functions it exposes, their arguments and
return kinds. The class then exports a schema for routing layers and
dispatches validated calls to a backing library object.

Exports:
    __version__: Package version string.
    BasicCapability: Base class for capability declarations.
    function: Class-body function declaration helper.
"""

from __future__ import annotations

from snapi.capabilities.base import BasicCapability, function
from snapi.core.errors import (
    CapabilityDefinitionError,
    InvalidFunctionCallError,
    LibraryClassMissingFunctionError,
    SnapiError,
)

__all__ = [
    "BasicCapability",
    "CapabilityDefinitionError",
    "InvalidFunctionCallError",
    "LibraryClassMissingFunctionError",
    "SnapiError",
    "__version__",
    "function",
]

__version__ = "0.3.0"
