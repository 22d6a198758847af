"""
Container - binding registry and resolution engine.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from .errors import (
    CircularAliasError,
    CircularDependencyError,
    NotInstantiableError,
    UnresolvableParameterError,
)
from .introspection import DependencyInfo, SignatureIntrospector
from .invoker import Invoker
from .keys import describe, method_key

T = TypeVar("T")

Factory = Callable[["Container"], Any]
Hook = Callable[[Any, "Container"], Any]
MethodCallback = Callable[[Any, "Container"], Any]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Binding:
    """A construction strategy registered for an abstract identifier."""

    abstract: Any
    concrete: Factory
    shared: bool = False

    def __str__(self) -> str:
        kind = "shared" if self.shared else "transient"
        return f"{describe(self.abstract)} ({kind})"


class Container:
    """
    Inversion-of-control container.

    Maps abstract identifiers (types or strings) to construction strategies
    and builds object graphs on demand by resolving constructor parameters
    recursively. Unbound concrete classes are built directly.

    Example:
        ```python
        container = Container()
        container.singleton(Database, PostgresDatabase)
        service = container.get(UserService)
        ```
    """

    def __init__(self) -> None:
        self._bindings: dict[Any, Binding] = {}
        self._instances: dict[Any, Any] = {}
        self._aliases: dict[Any, Any] = {}
        self._hooks: dict[Any, Hook] = {}
        self._method_bindings: dict[str, MethodCallback] = {}
        self._resolved: set[Any] = set()
        self._build_stack: list[Any] = []
        self._invoker = Invoker(self)

    # Registration

    def bind(self, abstract: Any, concrete: Any = None, shared: bool = False) -> None:
        """
        Register a construction strategy for ``abstract``.

        Args:
            abstract: The identifier being bound
            concrete: A factory ``(container) -> instance``, a class, or
                another identifier. Defaults to ``abstract`` itself.
            shared: Cache the first resolved instance and reuse it
        """
        self._drop_stale_instances(abstract)

        if concrete is None:
            concrete = abstract

        if not self._is_factory(concrete):
            concrete = self._get_factory(abstract, concrete)

        self._bindings[abstract] = Binding(abstract, concrete, shared)
        logger.debug("Bound %s", self._bindings[abstract])

    def bind_if(self, abstract: Any, concrete: Any = None, shared: bool = False) -> None:
        """Register a binding only if ``abstract`` is not bound yet."""
        if not self.bound(abstract):
            self.bind(abstract, concrete, shared)

    def singleton(self, abstract: Any, concrete: Any = None) -> None:
        """Register a shared binding."""
        self.bind(abstract, concrete, shared=True)

    def instance(self, abstract: Any, value: Any) -> Container:
        """Register an existing value as the shared instance for ``abstract``."""
        abstract = self.get_alias(abstract)
        self._instances[abstract] = value
        logger.debug("Registered instance for %s", describe(abstract))
        return self

    def alias(self, alias: Any, abstract: Any) -> None:
        """Make ``alias`` resolve to whatever ``abstract`` resolves to."""
        if alias == abstract:
            raise CircularAliasError([alias, abstract])
        self._aliases[alias] = abstract
        logger.debug("Aliased %s -> %s", describe(alias), describe(abstract))

    def hook(self, abstract: Any, callback: Hook) -> None:
        """
        Register a callback run after every resolution of ``abstract``.

        The callback receives ``(instance, container)``. A return value other
        than ``None`` replaces the instance handed to the caller.
        """
        self._hooks[self.get_alias(abstract)] = callback

    def bind_method(self, method: str | tuple[Any, str], callback: MethodCallback) -> None:
        """Register a callback used instead of calling ``Type@method`` directly."""
        self._method_bindings[self._normalize_method(method)] = callback

    def has_method_binding(self, method: str | tuple[Any, str]) -> bool:
        return self._normalize_method(method) in self._method_bindings

    def call_method_binding(self, method: str | tuple[Any, str], instance: Any) -> Any:
        return self._method_bindings[self._normalize_method(method)](instance, self)

    # Queries

    def bound(self, abstract: Any) -> bool:
        """Check whether ``abstract`` has a binding, an instance or an alias."""
        try:
            return abstract in self._bindings or abstract in self._instances or abstract in self._aliases
        except TypeError:
            # Unhashable identifiers can never have been registered
            return False

    def has(self, abstract: Any) -> bool:
        """Alias of ``bound``."""
        return self.bound(abstract)

    def resolved(self, abstract: Any) -> bool:
        """Check whether ``abstract`` has been resolved at least once."""
        abstract = self.get_alias(abstract)
        return abstract in self._resolved or abstract in self._instances

    def is_shared(self, abstract: Any) -> bool:
        """Check whether instances of ``abstract`` are cached."""
        abstract = self.get_alias(abstract)
        if abstract in self._instances:
            return True
        binding = self._bindings.get(abstract)
        return binding is not None and binding.shared

    def is_alias(self, name: Any) -> bool:
        return name in self._aliases

    def get_alias(self, abstract: Any) -> Any:
        """
        Follow the alias chain for ``abstract`` to its terminal identifier.

        Raises:
            CircularAliasError: If the chain loops back on itself
        """
        chain = [abstract]
        while abstract in self._aliases:
            abstract = self._aliases[abstract]
            if abstract in chain:
                raise CircularAliasError(chain + [abstract])
            chain.append(abstract)
        return abstract

    def get_bindings(self) -> dict[Any, Binding]:
        return self._bindings.copy()

    # Resolution

    def get(self, abstract: type[T] | Any) -> T:
        """Resolve ``abstract`` from the container."""
        return self.resolve(abstract)

    def make(self, abstract: type[T] | Any) -> T:
        """Resolve ``abstract`` from the container."""
        return self.resolve(abstract)

    def factory(self, abstract: type[T] | Any) -> Callable[[], T]:
        """Return a closure that resolves ``abstract`` each time it is called."""
        return lambda: self.resolve(abstract)

    def resolve(self, abstract: type[T] | Any) -> T:
        """
        Resolve ``abstract`` to an instance.

        Aliases are followed first; a cached instance is preferred over
        construction; the hook for the identifier, if any, runs on every call.

        Raises:
            CircularAliasError: If the alias chain loops
            CircularDependencyError: If ``abstract`` is needed to build itself
            NotInstantiableError: If the concrete target cannot be built
            UnresolvableParameterError: If a constructor parameter cannot be satisfied
        """
        abstract = self.get_alias(abstract)

        if abstract in self._instances:
            logger.debug("Resolved %s from cache", describe(abstract))
            result = self._instances[abstract]
        else:
            result = self._construct(abstract)

        hook = self._hooks.get(abstract)
        if hook is not None:
            replacement = hook(result, self)
            if replacement is not None:
                result = replacement

        self._resolved.add(abstract)
        return result  # type: ignore[no-any-return]

    def build(self, concrete: Any) -> Any:
        """
        Instantiate ``concrete``, resolving its constructor dependencies.

        Factories are called with the container. Dotted strings are imported
        as ``module.ClassName`` before being built.

        Raises:
            NotInstantiableError: If ``concrete`` is abstract, a protocol, or not a class
            UnresolvableParameterError: If a constructor parameter cannot be satisfied
        """
        if self._is_factory(concrete):
            return concrete(self)

        if isinstance(concrete, str):
            concrete = self._import_target(concrete)

        if not SignatureIntrospector.is_instantiable(concrete):
            raise NotInstantiableError(concrete, self._building(concrete))

        if not SignatureIntrospector.has_constructor(concrete):
            logger.debug("Building %s without constructor arguments", describe(concrete))
            return concrete()

        dependencies = SignatureIntrospector.extract_from_class(concrete)
        args, kwargs = self.resolve_dependencies(dependencies, concrete)
        logger.debug("Building %s with %d dependencies", describe(concrete), len(dependencies))
        return concrete(*args, **kwargs)

    def resolve_dependencies(
        self,
        dependencies: list[DependencyInfo],
        owner: Any,
        parameters: dict[str, Any] | None = None,
    ) -> tuple[list[Any], dict[str, Any]]:
        """
        Resolve a parameter list into positional and keyword arguments.

        Values in ``parameters`` take precedence over container resolution.
        Variadic parameters are skipped.
        """
        parameters = parameters or {}
        args: list[Any] = []
        kwargs: dict[str, Any] = {}

        for dep in dependencies:
            if dep.is_variadic:
                continue

            if dep.name in parameters:
                value = parameters[dep.name]
            else:
                value = self._resolve_dependency(dep, owner)

            if dep.is_keyword_only:
                kwargs[dep.name] = value
            else:
                args.append(value)

        return args, kwargs

    def call(
        self,
        callback: Any,
        parameters: dict[str, Any] | None = None,
        default_method: str | None = None,
    ) -> Any:
        """Call a callable or ``Type@method`` reference, injecting its parameters."""
        return self._invoker.call(callback, parameters, default_method)

    # Removal

    def forget(self, abstract: Any) -> None:
        """Drop the binding, instance and alias registered under ``abstract``."""
        self._bindings.pop(abstract, None)
        self._instances.pop(abstract, None)
        self._aliases.pop(abstract, None)
        logger.debug("Forgot %s", describe(abstract))

    def forget_instance(self, abstract: Any) -> None:
        self._instances.pop(abstract, None)

    def forget_instances(self) -> None:
        self._instances.clear()

    def flush(self) -> None:
        """Drop every registration held by the container."""
        self._bindings.clear()
        self._instances.clear()
        self._aliases.clear()
        self._hooks.clear()
        self._method_bindings.clear()
        self._resolved.clear()

    # Process-wide instance

    @classmethod
    def get_instance(cls) -> Container:
        """Get the process-wide container, creating it on first access."""
        from .shared import get_instance

        return get_instance()

    @classmethod
    def set_instance(cls, container: Container | None) -> Container | None:
        """Install (or clear with ``None``) the process-wide container."""
        from .shared import set_instance

        return set_instance(container)

    # Indexed access

    def __getitem__(self, abstract: Any) -> Any:
        return self.resolve(abstract)

    def __setitem__(self, abstract: Any, value: Any) -> None:
        if callable(value):
            self.bind(abstract, value)
        else:
            self.bind(abstract, lambda container: value)

    def __delitem__(self, abstract: Any) -> None:
        self.forget(abstract)

    def __contains__(self, abstract: Any) -> bool:
        return self.bound(abstract)

    # Internals

    def _construct(self, abstract: Any) -> Any:
        if abstract in self._build_stack:
            start = self._build_stack.index(abstract)
            raise CircularDependencyError(self._build_stack[start:] + [abstract])

        concrete = self._get_concrete(abstract)

        self._build_stack.append(abstract)
        try:
            if self._is_factory(concrete):
                result = concrete(self)
            else:
                result = self.build(concrete)
        finally:
            self._build_stack.pop()

        if self.is_shared(abstract):
            self._instances[abstract] = result

        return result

    def _resolve_dependency(self, dep: DependencyInfo, owner: Any) -> Any:
        if dep.has_dependency:
            target = self.get_alias(dep.dependency)
            try:
                return self.resolve(target)
            except NotInstantiableError as e:
                # Only a missing target itself falls back to the default;
                # failures deeper in its graph abort the outer build.
                if dep.is_optional and e.target == target:
                    logger.debug("Using default for %s of %s", dep.name, describe(owner))
                    return dep.default_value
                raise

        if dep.is_primitive and self.bound(dep.type_hint):
            return self.resolve(dep.type_hint)

        if dep.is_optional:
            return dep.default_value

        raise UnresolvableParameterError(dep.name, owner)

    def _get_concrete(self, abstract: Any) -> Any:
        binding = self._bindings.get(abstract)
        if binding is not None:
            return binding.concrete
        return abstract

    def _get_factory(self, abstract: Any, concrete: Any) -> Factory:
        def factory(container: Container) -> Any:
            if concrete == abstract:
                return container.build(concrete)
            return container.resolve(concrete)

        return factory

    def _drop_stale_instances(self, abstract: Any) -> None:
        self._instances.pop(abstract, None)
        self._aliases.pop(abstract, None)

    def _import_target(self, name: str) -> Any:
        module_path, _, attribute = name.rpartition(".")
        if not module_path:
            raise NotInstantiableError(name, self._building(name), "no binding registered")
        try:
            module = importlib.import_module(module_path)
            return getattr(module, attribute)
        except (ImportError, AttributeError) as e:
            raise NotInstantiableError(name, self._building(name), str(e)) from e

    def _building(self, concrete: Any) -> list[Any]:
        return [key for key in self._build_stack if key != concrete]

    @staticmethod
    def _is_factory(concrete: Any) -> bool:
        return callable(concrete) and not inspect.isclass(concrete)

    @staticmethod
    def _normalize_method(method: str | tuple[Any, str]) -> str:
        if isinstance(method, str):
            return method
        target, name = method
        return method_key(target, name)
