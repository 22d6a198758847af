"""
Identifier helpers for the container.

An identifier is any hashable key: a type or a plain string. These helpers
name identifiers for messages and build the ``Type@method`` keys used by
method bindings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Id:
    """
    Marker naming the identifier a parameter is resolved from.

    Used inside ``typing.Annotated``::

        def __init__(self, logger: Annotated[Logger, Id("Logger")]): ...
    """

    value: Any

    def __repr__(self) -> str:
        return f"Id({self.value!r})"


def describe(abstract: Any) -> str:
    """Return a readable name for an identifier."""
    if isinstance(abstract, str):
        return abstract
    if isinstance(abstract, type):
        return abstract.__qualname__
    name = getattr(abstract, "__qualname__", None)
    if isinstance(name, str):
        return name
    return repr(abstract)


def method_key(target: Any, method: str) -> str:
    """Normalize a ``(target, method)`` pair into a ``Type@method`` key."""
    if isinstance(target, str):
        return f"{target}@{method}"
    cls = target if isinstance(target, type) else type(target)
    return f"{cls.__module__}.{cls.__qualname__}@{method}"


def parse_method_key(key: str) -> tuple[str, str]:
    """Split a ``Type@method`` key into its identifier and method name."""
    target, sep, method = key.rpartition("@")
    if not sep or not target or not method:
        raise ValueError(f"Expected 'Type@method', got {key!r}")
    return target, method
