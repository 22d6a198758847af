"""
Exceptions raised by the container.
"""

from __future__ import annotations

from typing import Any

from .keys import describe


class ContainerError(Exception):
    """Base class for every container failure."""


class NotInstantiableError(ContainerError):
    """Raised when a resolved target cannot be constructed."""

    def __init__(self, target: Any, build_stack: list[Any] | None = None, reason: str | None = None):
        self.target = target
        self.build_stack = list(build_stack or [])
        msg = f"Target [{describe(target)}] is not instantiable"
        if reason:
            msg += f": {reason}"
        if self.build_stack:
            msg += f" while building [{', '.join(describe(key) for key in self.build_stack)}]"
        super().__init__(msg)


class UnresolvableParameterError(ContainerError):
    """Raised when a parameter has neither a dependency type nor a default."""

    def __init__(self, parameter: str, owner: Any):
        self.parameter = parameter
        self.owner = owner
        super().__init__(
            f"Unresolvable dependency resolving [{parameter}] in {describe(owner)}"
        )


class CircularAliasError(ContainerError):
    """Raised when an alias chain points back at itself."""

    def __init__(self, chain: list[Any]):
        self.chain = chain
        chain_str = " -> ".join(describe(key) for key in chain)
        super().__init__(f"Circular alias detected: {chain_str}")


class CircularDependencyError(ContainerError):
    """Raised when an identifier is requested again while it is being built."""

    def __init__(self, cycle: list[Any]):
        self.cycle = cycle
        cycle_str = " -> ".join(describe(key) for key in cycle)
        super().__init__(f"Circular dependency detected: {cycle_str}")
