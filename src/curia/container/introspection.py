"""
Signature introspection for extracting constructor and callable dependencies.

The container never looks at ``inspect`` directly; everything it needs to
know about a parameter list comes out of ``SignatureIntrospector`` as a list
of ``DependencyInfo`` records.
"""

from __future__ import annotations

import inspect
import types
from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from .keys import Id

EMPTY = inspect.Parameter.empty

# Builtin annotations are values, not services: they are only injected when
# explicitly bound.
PRIMITIVE_TYPES: frozenset[Any] = frozenset(
    {str, int, float, complex, bool, bytes, bytearray, list, dict, tuple, set, frozenset, object, type}
)


@dataclass(frozen=True)
class DependencyInfo:
    """Description of a single parameter of a constructor or callable."""

    name: str
    type_hint: Any
    dependency: Any = None
    default_value: Any = EMPTY
    kind: inspect._ParameterKind = inspect.Parameter.POSITIONAL_OR_KEYWORD

    @property
    def is_optional(self) -> bool:
        """True if the parameter carries a default value."""
        return self.default_value is not EMPTY

    @property
    def has_dependency(self) -> bool:
        """True if the parameter names an identifier to resolve."""
        return self.dependency is not None

    @property
    def is_primitive(self) -> bool:
        return self.type_hint in PRIMITIVE_TYPES

    @property
    def is_variadic(self) -> bool:
        return self.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)

    @property
    def is_keyword_only(self) -> bool:
        return self.kind is inspect.Parameter.KEYWORD_ONLY


class SignatureIntrospector:
    """Extracts dependency information from classes and callables."""

    @staticmethod
    def is_instantiable(target: Any) -> bool:
        """Check whether ``target`` is a concrete class that can be constructed."""
        if not inspect.isclass(target):
            return False
        if inspect.isabstract(target):
            return False
        return not getattr(target, "_is_protocol", False)

    @staticmethod
    def has_constructor(cls: type) -> bool:
        """Check whether ``cls`` defines (or inherits) a constructor other than ``object.__init__``."""
        return cls.__init__ is not object.__init__

    @staticmethod
    def extract_from_class(cls: type) -> list[DependencyInfo]:
        """Extract the constructor dependencies of a class."""
        if not SignatureIntrospector.has_constructor(cls):
            return []

        init = cls.__init__
        try:
            signature = inspect.signature(init)
        except (TypeError, ValueError):
            return []

        # Drop ``self``
        parameters = list(signature.parameters.values())[1:]
        return SignatureIntrospector._extract(init, parameters)

    @staticmethod
    def extract_from_callable(func: Callable[..., Any]) -> list[DependencyInfo]:
        """Extract the dependencies of a function, bound method or callable object."""
        if inspect.isclass(func):
            return SignatureIntrospector.extract_from_class(func)

        signature = inspect.signature(func)
        if inspect.isfunction(func) or inspect.ismethod(func):
            hint_source: Any = func
        else:
            hint_source = getattr(type(func), "__call__", func)
        return SignatureIntrospector._extract(hint_source, list(signature.parameters.values()))

    @staticmethod
    def _extract(hint_source: Any, parameters: list[inspect.Parameter]) -> list[DependencyInfo]:
        hints = SignatureIntrospector._type_hints(hint_source)
        globalns = getattr(inspect.unwrap(hint_source), "__globals__", {})

        dependencies: list[DependencyInfo] = []
        for param in parameters:
            if param.name in hints:
                annotation = hints[param.name]
            else:
                annotation = SignatureIntrospector._lookup(param.annotation, globalns)

            type_hint, dependency = SignatureIntrospector.classify(annotation)
            dependencies.append(
                DependencyInfo(
                    name=param.name,
                    type_hint=type_hint,
                    dependency=dependency,
                    default_value=param.default,
                    kind=param.kind,
                )
            )
        return dependencies

    @staticmethod
    def _type_hints(hint_source: Any) -> dict[str, Any]:
        try:
            return get_type_hints(hint_source, include_extras=True)
        except Exception:
            # A single unresolvable forward reference fails the whole call;
            # fall back to looking each annotation up on its own.
            return {}

    @staticmethod
    def _lookup(annotation: Any, globalns: dict[str, Any]) -> Any:
        if not isinstance(annotation, str):
            return annotation
        # Bare names only; anything else stays a string identifier
        return globalns.get(annotation, annotation)

    @staticmethod
    def classify(annotation: Any) -> tuple[Any, Any]:
        """
        Split an annotation into its type hint and the identifier it resolves to.

        Returns:
            ``(type_hint, dependency)`` where ``dependency`` is ``None`` when
            the annotation does not name something the container should build.
        """
        if annotation is EMPTY or annotation is Any:
            return annotation, None

        # Forward references that could not be looked up are string identifiers
        if isinstance(annotation, str):
            return annotation, annotation

        origin = get_origin(annotation)
        if origin is Annotated:
            base, *extras = get_args(annotation)
            for extra in extras:
                if isinstance(extra, Id):
                    return base, extra.value
            return SignatureIntrospector.classify(base)

        if origin is Union or origin is types.UnionType:
            members = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(members) == 1:
                return SignatureIntrospector.classify(members[0])
            return annotation, None

        if annotation in PRIMITIVE_TYPES or origin in PRIMITIVE_TYPES:
            return annotation, None

        if inspect.isclass(annotation):
            return annotation, annotation

        return annotation, None
