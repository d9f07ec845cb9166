"""
Thread-safe runtime context for snapi.

This module provides a context variable-based system for carrying the
active configuration across threads and async tasks without global mutable
state. Capability classes consult it for settings such as strict type
checking when the caller does not pass them explicitly.

Usage:
    from snapi.core.runtime import runtime_context

    with runtime_context(config):
        IceKing.run_function("ice_attack", {"victim": "Gunther"})
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import uuid4

if TYPE_CHECKING:
    from snapi.core.config import SnapiConfig


@dataclass(frozen=True)
class RuntimeContext:
    """Settings visible to every call made inside a runtime_context() block."""

    config: SnapiConfig
    trace_id: str = field(default_factory=lambda: f"snapi-{uuid4().hex[:8]}")

    @property
    def strict_types(self) -> bool:
        return self.config.strict_types


_runtime_ctx: contextvars.ContextVar[RuntimeContext | None] = contextvars.ContextVar(
    "snapi_runtime", default=None
)


def get_runtime_or_none() -> RuntimeContext | None:
    """Return the active runtime context, or None outside runtime_context()."""
    return _runtime_ctx.get()


def set_runtime_context(ctx: RuntimeContext) -> contextvars.Token[RuntimeContext | None]:
    """Install a long-lived runtime context, returning the reset token."""
    return _runtime_ctx.set(ctx)


def reset_runtime_context(token: contextvars.Token[RuntimeContext | None]) -> None:
    _runtime_ctx.reset(token)


@contextmanager
def runtime_context(
    config: SnapiConfig, *, trace_id: str | None = None
) -> Iterator[RuntimeContext]:
    ctx = RuntimeContext(config=config) if trace_id is None else RuntimeContext(config, trace_id)
    token = _runtime_ctx.set(ctx)
    try:
        yield ctx
    finally:
        _runtime_ctx.reset(token)


__all__ = [
    "RuntimeContext",
    "get_runtime_or_none",
    "reset_runtime_context",
    "runtime_context",
    "set_runtime_context",
]
