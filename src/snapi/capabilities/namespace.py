"""Namespace derivation for capability classes.

A namespace is the routing symbol a capability's functions are grouped
under. It is derived from the class name alone::

    derive_namespace("LadyRainicornAndPrinceMonochromocorn")
    # -> "lady_rainicorn_and_prince_monochromocorn"
"""

from __future__ import annotations

import functools
import re

_SEGMENT_DELIMITER = re.compile(r"::|\.")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


@functools.lru_cache(maxsize=512)
def derive_namespace(type_name: str) -> str:
    """Convert a (possibly qualified) CamelCase type name to snake_case.

    Only the innermost segment of ``pkg.module.ClassName`` or
    ``Outer::ClassName`` is used. Acronym runs stay together, so
    ``HTTPGateway`` becomes ``http_gateway``.
    """
    segment = _SEGMENT_DELIMITER.split(type_name)[-1]
    words = _ACRONYM_BOUNDARY.sub(r"\1_\2", segment)
    words = _WORD_BOUNDARY.sub(r"\1_\2", words)
    return words.replace("-", "_").lower()


__all__ = ["derive_namespace"]
