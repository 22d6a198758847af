"""
Process-wide container accessor.

Code that cannot receive a container explicitly can reach a single shared
one through ``get_instance()``. It is created lazily on first access unless
one was installed with ``set_instance()``.
"""

from __future__ import annotations

from .container import Container


class _SharedContainer:
    """Holder for the process-wide container."""

    def __init__(self) -> None:
        self._container: Container | None = None
        self._is_set = False

    def get(self) -> Container:
        if not self._is_set or self._container is None:
            self._container = Container()
            self._is_set = True
        return self._container

    def set(self, container: Container | None) -> Container | None:
        self._container = container
        self._is_set = container is not None
        return container

    @property
    def is_set(self) -> bool:
        return self._is_set


_shared = _SharedContainer()


def get_instance() -> Container:
    """Get the process-wide container, creating it on first access."""
    return _shared.get()


def set_instance(container: Container | None) -> Container | None:
    """
    Install ``container`` as the process-wide container.

    Passing ``None`` clears it; the next ``get_instance()`` creates a fresh one.
    """
    return _shared.set(container)


def has_instance() -> bool:
    """Check whether a process-wide container has been created or installed."""
    return _shared.is_set
