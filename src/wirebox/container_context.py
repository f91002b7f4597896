from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar, overload

from wirebox.autowiring import ManualParameters
from wirebox.container import Container

T = TypeVar("T")


class ContainerContext:
    """Give process-wide access to one shared container.

    The container is created lazily on first use with default settings, so
    code that only needs ``get`` never has to wire one up. Applications (and
    tests) can install their own with ``set_current`` or clear it with
    ``set_current(None)`` to get a fresh one on next use.

    The binding is process-global for this instance (not task-local or
    thread-local), which is convenient for application startup but important
    for tests that run in parallel.
    """

    def __init__(self) -> None:
        self._container: Container | None = None

    def get_current(self) -> Container:
        """Return the shared container, creating it on first use."""
        if self._container is None:
            self._container = Container()
        return self._container

    def set_current(self, container: Container | None) -> None:
        """Install ``container`` as the shared container, or clear it with ``None``.

        Args:
            container: Container to share, or ``None`` to drop the current one.

        """
        self._container = container

    @property
    def is_set(self) -> bool:
        return self._container is not None

    @overload
    def get(self, type_: type[T], parameters: ManualParameters | None = None) -> T | None: ...

    @overload
    def get(self, type_: str, parameters: ManualParameters | None = None) -> Any | None: ...

    def get(self, type_: Any, parameters: ManualParameters | None = None) -> Any | None:
        """Proxy to ``Container.get`` on the shared container."""
        return self.get_current().get(type_, parameters)

    @overload
    def make(self, type_: type[T], parameters: ManualParameters | None = None) -> T | None: ...

    @overload
    def make(self, type_: str, parameters: ManualParameters | None = None) -> Any | None: ...

    def make(self, type_: Any, parameters: ManualParameters | None = None) -> Any | None:
        """Proxy to ``Container.make`` on the shared container."""
        return self.get_current().make(type_, parameters)

    def invoke(
        self,
        instance: object,
        method_name: str,
        parameters: ManualParameters | None = None,
    ) -> Any:
        """Proxy to ``Container.invoke`` on the shared container."""
        return self.get_current().invoke(instance, method_name, parameters)

    def for_context(self, context: str | Mapping[str, Any]) -> Container:
        """Proxy to ``Container.for_context`` on the shared container."""
        return self.get_current().for_context(context)


container_context = ContainerContext()
"""Process-wide shared container access."""


__all__ = ["ContainerContext", "container_context"]
