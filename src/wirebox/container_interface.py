from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar, overload

if TYPE_CHECKING:
    from typing_extensions import Self

    from wirebox.providers import ServiceProvider

T = TypeVar("T")


class IContainer(ABC):
    """Interface for container-like objects.

    Any dependency annotated with ``IContainer`` (or the concrete container
    class) receives the resolving container itself.
    """

    @abstractmethod
    def register(self, provider: ServiceProvider) -> Self:
        """Register a service provider and return the container for chaining."""

    @abstractmethod
    def unregister(self, provider: ServiceProvider) -> Self:
        """Remove a service provider and return the container for chaining."""

    @abstractmethod
    def for_context(self, context: str | Mapping[str, Any]) -> Self:
        """Return a view of the container bound to ``context``."""

    @abstractmethod
    def find_provider(self, type_: Any) -> ServiceProvider:
        """Return the provider that builds ``type_`` in the current context."""

    @overload
    @abstractmethod
    def get(self, type_: type[T], parameters: Mapping[str | int, Any] | None = None) -> T | None: ...

    @overload
    @abstractmethod
    def get(self, type_: str, parameters: Mapping[str | int, Any] | None = None) -> Any | None: ...

    @abstractmethod
    def get(self, type_: Any, parameters: Mapping[str | int, Any] | None = None) -> Any | None:
        """Resolve ``type_`` through service providers; ``None`` on failure."""

    @overload
    @abstractmethod
    def make(self, type_: type[T], parameters: Mapping[str | int, Any] | None = None) -> T | None: ...

    @overload
    @abstractmethod
    def make(self, type_: str, parameters: Mapping[str | int, Any] | None = None) -> Any | None: ...

    @abstractmethod
    def make(self, type_: Any, parameters: Mapping[str | int, Any] | None = None) -> Any | None:
        """Construct ``type_`` with autowired arguments, bypassing providers."""

    @abstractmethod
    def invoke(
        self,
        instance: object,
        method_name: str,
        parameters: Mapping[str | int, Any] | None = None,
    ) -> Any:
        """Call ``instance.method_name`` with autowired arguments."""
