"""
Invoker - calls functions and methods with container-resolved arguments.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .introspection import SignatureIntrospector
from .keys import describe, method_key, parse_method_key

if TYPE_CHECKING:
    from .container import Container


class Invoker:
    """
    Resolves the parameters of an arbitrary callable and invokes it.

    Parameters are resolved the same way the container resolves constructor
    parameters, except that explicitly supplied values win.

    Accepted callbacks:
        - any callable
        - a ``"Type@method"`` string
        - a ``(target, "method")`` tuple where target is a type, an
          identifier or an instance
        - an identifier or type together with ``default_method``
    """

    def __init__(self, container: Container):
        self._container = container

    def call(
        self,
        callback: Any,
        parameters: dict[str, Any] | None = None,
        default_method: str | None = None,
    ) -> Any:
        """
        Call ``callback`` with injected dependencies.

        Args:
            callback: The callable or method reference to invoke
            parameters: Values for named parameters, taking precedence over the container
            default_method: Method to call when ``callback`` names only a target

        Returns:
            Whatever the callback returns

        Raises:
            ValueError: If a string callback names no method
        """
        if isinstance(callback, str):
            if "@" in callback:
                target, method = parse_method_key(callback)
            elif default_method is not None:
                target, method = callback, default_method
            else:
                raise ValueError(f"Method not provided for {callback!r}")
            return self.call_method(target, method, parameters)

        if isinstance(callback, tuple):
            target, method = callback
            return self.call_method(target, method, parameters)

        if inspect.isclass(callback) and default_method is not None:
            return self.call_method(callback, default_method, parameters)

        if not callable(callback):
            raise TypeError(f"{describe(callback)} is not callable")

        return self.call_callable(callback, parameters)

    def call_method(self, target: Any, method: str, parameters: dict[str, Any] | None = None) -> Any:
        """Call ``method`` on ``target``, resolving the target from the container when needed."""
        if isinstance(target, str) or inspect.isclass(target):
            instance = self._container.resolve(target)
        else:
            instance = target

        key = method_key(target, method)
        if self._container.has_method_binding(key):
            return self._container.call_method_binding(key, instance)

        return self.call_callable(getattr(instance, method), parameters)

    def call_callable(self, func: Callable[..., Any], parameters: dict[str, Any] | None = None) -> Any:
        parameters = dict(parameters or {})
        dependencies = SignatureIntrospector.extract_from_callable(func)
        args, kwargs = self._container.resolve_dependencies(dependencies, func, parameters)

        # Names the signature does not declare go through as keywords
        declared = {dep.name for dep in dependencies}
        kwargs.update({name: value for name, value in parameters.items() if name not in declared})

        return func(*args, **kwargs)
