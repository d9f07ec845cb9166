"""Capabilities package - declarative function schemas with validated dispatch.

This package holds the per-class registry, the declaration DSL, argument
validation and library dispatch, plus schema export and discovery helpers.
"""

from __future__ import annotations

from snapi.capabilities.arguments import ArgumentBuilder, ArgumentSpec
from snapi.capabilities.base import BasicCapability, FunctionDeclaration, function
from snapi.capabilities.catalog import (
    CapabilityNotFoundError,
    catalog_schema,
    discover_capabilities,
    resolve_capability,
)
from snapi.capabilities.functions import FunctionBuilder, FunctionSpec
from snapi.capabilities.library import OPERATIONS_ATTR
from snapi.capabilities.namespace import derive_namespace
from snapi.capabilities.registry import CapabilityRegistry
from snapi.capabilities.schema import CapabilitySchema, FunctionSchema, build_schema

__all__ = [
    "OPERATIONS_ATTR",
    "ArgumentBuilder",
    "ArgumentSpec",
    "BasicCapability",
    "CapabilityNotFoundError",
    "CapabilityRegistry",
    "CapabilitySchema",
    "FunctionBuilder",
    "FunctionDeclaration",
    "FunctionSchema",
    "FunctionSpec",
    "build_schema",
    "catalog_schema",
    "derive_namespace",
    "discover_capabilities",
    "function",
    "resolve_capability",
]
