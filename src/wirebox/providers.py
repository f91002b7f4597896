from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from wirebox.exceptions import describe_type

ProviderContext = Mapping[str, Any]
"""Caller-scoped options narrowing which provider is eligible, e.g. ``{"provider": "redis"}``."""

PROVIDER_CONTEXT_KEY = "provider"


@runtime_checkable
class ServiceProvider(Protocol):
    """Protocol for a pluggable construction strategy.

    Providers are asked in registration order whether they ``supports`` a type
    under the active context; the first one that does builds the instance from
    the already autowired constructor arguments.
    """

    def supports(self, type_: type[Any], context: ProviderContext) -> bool:
        """Return whether this provider builds ``type_`` under ``context``.

        Args:
            type_: Class being resolved.
            context: Read-only context of the resolving container view.

        """

    def create_instance(self, type_: type[Any], dependencies: Sequence[Any]) -> Any:
        """Build an instance of ``type_``.

        Args:
            type_: Class being resolved.
            dependencies: Autowired constructor arguments in declared order.

        """


class BaseServiceProvider:
    """Convenience base for providers serving a fixed set of types.

    Subclasses list the types they serve in ``provides`` and may set ``name``
    so callers can select them with ``container.for_context("<name>")``. An
    unnamed provider accepts any context; a named one only accepts contexts
    without a ``provider`` key or with a matching one.

    Set ``autowire = False`` when ``create_instance`` ignores the autowired
    arguments; the container then skips building them.
    """

    provides: tuple[type[Any], ...] = ()
    name: str | None = None
    autowire: bool = True

    def supports(self, type_: type[Any], context: ProviderContext) -> bool:
        return self.matches_context(context) and type_ in self.provides

    def matches_context(self, context: ProviderContext) -> bool:
        requested = context.get(PROVIDER_CONTEXT_KEY)
        return requested is None or self.name is None or requested == self.name

    def create_instance(self, type_: type[Any], dependencies: Sequence[Any]) -> Any:
        return type_(*dependencies)


class DefaultServiceProvider:
    """Fallback provider: supports every type and constructs it directly.

    Every call builds a new instance; nothing is cached.
    """

    def supports(self, type_: type[Any], context: ProviderContext) -> bool:  # noqa: ARG002
        return True

    def create_instance(self, type_: type[Any], dependencies: Sequence[Any]) -> Any:
        return type_(*dependencies)


class InstanceProvider(BaseServiceProvider):
    """Serve one pre-built instance for a type, shared across resolutions.

    The registration key includes the served type and the provider name, so
    several instance providers can be registered side by side.
    """

    autowire = False

    def __init__(self, instance: Any, *, provides: type[Any] | None = None, name: str | None = None) -> None:
        self.instance = instance
        self.provides = (provides if provides is not None else type(instance),)
        self.name = name

    @property
    def registration_key(self) -> Any:
        return (InstanceProvider, self.provides[0], self.name)

    def supports(self, type_: type[Any], context: ProviderContext) -> bool:
        return self.matches_context(context) and type_ is self.provides[0]

    def create_instance(self, type_: type[Any], dependencies: Sequence[Any]) -> Any:  # noqa: ARG002
        return self.instance

    def __repr__(self) -> str:
        return f"InstanceProvider({describe_type(self.provides[0])}, name={self.name!r})"


def registration_key(provider: ServiceProvider) -> Any:
    """Return the key a provider is registered under.

    Providers are keyed by their class unless they expose ``registration_key``.
    """
    return getattr(provider, "registration_key", type(provider))


def wants_autowired_arguments(provider: ServiceProvider) -> bool:
    """Return whether the container should autowire arguments for ``provider``."""
    return bool(getattr(provider, "autowire", True))


class ProvidersRegistry:
    """Store service providers in registration order.

    Registration keys are unique: registering a provider whose key is already
    present replaces the previous provider in place, so precedence of the
    remaining providers never changes.
    """

    def __init__(self, default_provider: ServiceProvider | None = None) -> None:
        self._providers: dict[Any, ServiceProvider] = {}
        self.default_provider: ServiceProvider = (
            default_provider if default_provider is not None else DefaultServiceProvider()
        )

    def register(self, provider: ServiceProvider) -> None:
        """Add or replace a provider.

        Args:
            provider: Provider instance to register.

        """
        self._providers[registration_key(provider)] = provider

    def unregister(self, provider: ServiceProvider) -> None:
        """Remove the provider registered under the same key, if any.

        Args:
            provider: Provider instance (or one of the same class) to remove.

        """
        self._providers.pop(registration_key(provider), None)

    def find(self, type_: type[Any], context: ProviderContext) -> ServiceProvider:
        """Return the first provider supporting ``type_``, or the default provider.

        Args:
            type_: Class being resolved.
            context: Read-only context of the resolving container view.

        """
        for provider in self._providers.values():
            if provider.supports(type_, context):
                return provider
        return self.default_provider

    def find_registered(self, type_: type[Any], context: ProviderContext) -> ServiceProvider | None:
        """Return the first registered provider supporting ``type_``, ignoring the default."""
        provider = self.find(type_, context)
        return None if provider is self.default_provider else provider

    def values(self) -> list[ServiceProvider]:
        return list(self._providers.values())

    def __contains__(self, provider: object) -> bool:
        return self._providers.get(registration_key(provider)) is provider  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[ServiceProvider]:
        return iter(list(self._providers.values()))

    def __len__(self) -> int:
        return len(self._providers)


__all__ = [
    "PROVIDER_CONTEXT_KEY",
    "BaseServiceProvider",
    "DefaultServiceProvider",
    "InstanceProvider",
    "ProviderContext",
    "ProvidersRegistry",
    "ServiceProvider",
    "registration_key",
    "wants_autowired_arguments",
]
