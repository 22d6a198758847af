"""
Curia Container - an inversion-of-control container for Python.

This library provides:
- Bindings from abstract identifiers (types or strings) to factories and classes
- Shared (singleton) bindings and pre-built instances
- Aliases and post-resolution hooks
- Reflective constructor injection driven by type hints
- Calling functions and methods with injected parameters
"""

from .container import Binding, Container
from .errors import (
    CircularAliasError,
    CircularDependencyError,
    ContainerError,
    NotInstantiableError,
    UnresolvableParameterError,
)
from .introspection import DependencyInfo, SignatureIntrospector
from .invoker import Invoker
from .keys import Id
from .shared import get_instance, has_instance, set_instance

__all__ = [
    "Binding",
    "CircularAliasError",
    "CircularDependencyError",
    "Container",
    "ContainerError",
    "DependencyInfo",
    "Id",
    "Invoker",
    "NotInstantiableError",
    "SignatureIntrospector",
    "UnresolvableParameterError",
    "get_instance",
    "has_instance",
    "set_instance",
]
