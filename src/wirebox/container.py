from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeVar, overload

from wirebox.autowiring import Autowirer, ManualParameters
from wirebox.container_interface import IContainer
from wirebox.discovery import discover_providers
from wirebox.exceptions import (
    WireboxConstructionError,
    WireboxError,
    WireboxReflectionError,
    describe_type,
)
from wirebox.providers import (
    PROVIDER_CONTEXT_KEY,
    ProviderContext,
    ProvidersRegistry,
    ServiceProvider,
    wants_autowired_arguments,
)
from wirebox.reflection import CONSTRUCTOR, Reflector
from wirebox.resolution_stack import ResolutionStack
from wirebox.settings import ContainerSettings

if TYPE_CHECKING:
    from typing_extensions import Self

T = TypeVar("T")


class Container(IContainer):
    """Resolve classes into instances with transitively autowired constructors.

    ``get`` builds through the first registered service provider that supports
    the requested class (falling back to plain construction), ``make`` always
    constructs directly. Constructor parameters typed with a class are
    resolved recursively; other parameters need a manual value or a default.

    Resolution never raises: failures anywhere in the dependency chain are
    caught once by the outermost call, logged, and reported as ``None``.
    Circular chains are detected before they recurse.

    Requesting the container's own class (or ``IContainer``) returns the
    container itself, so services can depend on it.
    """

    def __init__(
        self,
        *,
        settings: ContainerSettings | None = None,
        discover: bool | None = None,
        providers: Iterable[ServiceProvider] = (),
        default_provider: ServiceProvider | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize a container and register its service providers.

        Args:
            settings: Container settings. Read from ``WIREBOX_*`` environment
                variables when omitted.
            discover: Register providers advertised through entry points.
                Overrides ``settings.discover_providers`` when given.
            providers: Providers registered before discovered ones, in order.
            default_provider: Fallback provider used when no registered
                provider supports a class. Plain construction by default.
            logger: Diagnostic sink receiving resolution failures.

        Examples:
            .. code-block:: python

                container = Container(discover=False)
                service = container.get(Service)

                repo = container.make(SqlRepo, {"dsn": "sqlite://"})

        """
        self._settings = settings if settings is not None else ContainerSettings()
        self._settings.apply_log_level()
        self._logger = logger if logger is not None else logging.getLogger(__name__)

        self._reflector = Reflector()
        self._registry = ProvidersRegistry(default_provider)
        self._context: ProviderContext = MappingProxyType({})
        self._stack = ResolutionStack()
        self._autowirer = Autowirer(self, self._reflector)

        for provider in providers:
            self.register(provider)

        should_discover = self._settings.discover_providers if discover is None else discover
        if should_discover:
            discover_providers(self, self._settings.entry_point_group)

    # region Providers
    def register(self, provider: ServiceProvider) -> Self:
        """Register a service provider.

        Registering a provider of an already registered class replaces it
        while keeping its position in the lookup order.

        Args:
            provider: Provider instance to register.

        """
        self._registry.register(provider)
        return self

    def unregister(self, provider: ServiceProvider) -> Self:
        """Remove the registration of ``provider``'s class, if any.

        Args:
            provider: Provider instance to remove.

        """
        self._registry.unregister(provider)
        return self

    def find_provider(self, type_: Any) -> ServiceProvider:
        """Return the provider that builds ``type_`` under this view's context.

        Args:
            type_: Class or dotted class name.

        Raises:
            WireboxReflectionError: If ``type_`` names no class.
            WireboxConstructionError: If a registered provider fails in
                ``supports``.

        """
        return self._find_provider(self._reflector.load_type(type_))

    def for_context(self, context: str | Mapping[str, Any]) -> Self:
        """Return a view of this container bound to ``context``.

        The view shares registered providers, the default provider, settings
        and logger, but owns its context and resolution stack. This container
        is left untouched.

        Args:
            context: Context mapping, or a provider name as shorthand for
                ``{"provider": name}``.

        Examples:
            .. code-block:: python

                engine = container.for_context("smarty").get(TemplateEngine)

        """
        view = copy.copy(self)
        if isinstance(context, str):
            view._context = MappingProxyType({PROVIDER_CONTEXT_KEY: context})
        else:
            view._context = MappingProxyType(dict(context))
        view._stack = ResolutionStack()
        view._autowirer = Autowirer(view, self._reflector)
        return view

    # endregion Providers

    # region Resolution
    @overload
    def get(self, type_: type[T], parameters: ManualParameters | None = None) -> T | None: ...

    @overload
    def get(self, type_: str, parameters: ManualParameters | None = None) -> Any | None: ...

    def get(self, type_: Any, parameters: ManualParameters | None = None) -> Any | None:
        """Resolve ``type_`` through service providers.

        Args:
            type_: Class or dotted class name.
            parameters: Constructor values overriding autowiring, by parameter
                name or position.

        Returns:
            The instance, or ``None`` when resolution failed.

        """
        return self.resolve(type_, parameters, use_providers=True)

    @overload
    def make(self, type_: type[T], parameters: ManualParameters | None = None) -> T | None: ...

    @overload
    def make(self, type_: str, parameters: ManualParameters | None = None) -> Any | None: ...

    def make(self, type_: Any, parameters: ManualParameters | None = None) -> Any | None:
        """Construct ``type_`` with autowired arguments, bypassing providers.

        Dependencies of ``type_`` are still resolved through providers.

        Args:
            type_: Class or dotted class name.
            parameters: Constructor values overriding autowiring, by parameter
                name or position.

        Returns:
            The instance, or ``None`` when resolution failed.

        """
        return self.resolve(type_, parameters, use_providers=False)

    def resolve(
        self,
        type_: Any,
        parameters: ManualParameters | None = None,
        *,
        use_providers: bool = True,
    ) -> Any | None:
        """Resolve ``type_`` into an instance.

        Failures propagate through nested resolutions and are handled by the
        outermost call only: it logs a single message and returns ``None``.

        Args:
            type_: Class or dotted class name.
            parameters: Constructor values overriding autowiring.
            use_providers: Build through service providers; construct directly
                when false.

        Returns:
            The instance, or ``None`` when resolution failed.

        """
        outermost = self._stack.is_idle
        try:
            return self._resolve(type_, parameters, use_providers=use_providers)
        except WireboxError as error:
            if not outermost:
                raise
            self._logger.error("Failed to resolve dependency '%s': %s", describe_type(type_), error)
            return None

    def invoke(
        self,
        instance: object,
        method_name: str,
        parameters: ManualParameters | None = None,
    ) -> Any:
        """Call ``instance.method_name`` with autowired arguments.

        Failures are not caught: they propagate to the caller unchanged.

        Args:
            instance: Object owning the method.
            method_name: Name of the method to call.
            parameters: Values overriding autowiring, by name or position.

        """
        arguments = self._autowirer.get_arguments(type(instance), method_name, parameters)
        return getattr(instance, method_name)(*arguments)

    def get_arguments(
        self,
        type_: Any,
        method_name: str = CONSTRUCTOR,
        parameters: ManualParameters | None = None,
    ) -> list[Any]:
        """Autowire the arguments of ``type_.method_name`` without calling it.

        Args:
            type_: Class or dotted class name.
            method_name: Method to autowire; ``"__init__"`` for the constructor.
            parameters: Values overriding autowiring, by name or position.

        """
        return self._autowirer.get_arguments(type_, method_name, parameters)

    def can_resolve(self, type_: Any) -> bool:
        """Return whether ``type_`` is served by this container.

        True for the container's own types, for classes a registered provider
        supports under this view's context, and for constructible classes.

        Args:
            type_: Class or dotted class name.

        Raises:
            WireboxConstructionError: If a registered provider fails while
                being asked whether it supports ``type_``.

        """
        try:
            target = self._reflector.load_type(type_)
        except WireboxReflectionError:
            return False
        if self._is_own_type(target):
            return True
        if self._find_provider(target) is not self._registry.default_provider:
            return True
        return self._reflector.is_constructible(target)

    def _resolve(
        self,
        type_: Any,
        parameters: ManualParameters | None,
        *,
        use_providers: bool,
    ) -> Any:
        target = self._reflector.load_type(type_)
        if self._is_own_type(target):
            return self

        with self._stack.frame(target):
            provider = self._find_provider(target) if use_providers else None
            if provider is None or wants_autowired_arguments(provider):
                arguments = self._autowirer.get_arguments(target, CONSTRUCTOR, parameters)
            else:
                arguments = []
            return self._construct(target, arguments, provider)

    def _construct(
        self,
        target: type[Any],
        arguments: list[Any],
        provider: ServiceProvider | None,
    ) -> Any:
        if provider is self._registry.default_provider and not self._reflector.is_constructible(target):
            raise WireboxReflectionError(target, "abstract or protocol classes cannot be constructed")
        try:
            if provider is None:
                instance = self._reflector.construct_directly(target, arguments)
            else:
                instance = provider.create_instance(target, arguments)
        except WireboxError:
            raise
        except Exception as error:
            raise WireboxConstructionError(target, f"{type(error).__name__}: {error}") from error

        if instance is None:
            raise WireboxConstructionError(target, f"{provider!r} returned None")
        return instance

    def _find_provider(self, target: type[Any]) -> ServiceProvider:
        try:
            return self._registry.find(target, self._context)
        except Exception as error:
            reason = f"provider selection failed ({type(error).__name__}: {error})"
            raise WireboxConstructionError(target, reason) from error

    def _is_own_type(self, target: type[Any]) -> bool:
        return issubclass(target, IContainer) and isinstance(self, target)

    # endregion Resolution

    @property
    def context(self) -> ProviderContext:
        """Read-only context narrowing provider selection for this view."""
        return self._context

    @property
    def providers(self) -> tuple[ServiceProvider, ...]:
        """Registered providers in lookup order (the default provider excluded)."""
        return tuple(self._registry)

    @property
    def default_provider(self) -> ServiceProvider:
        return self._registry.default_provider

    @property
    def resolution_stack(self) -> tuple[type[Any], ...]:
        """Classes being resolved on the current call path, outermost first."""
        return self._stack.chain

    @property
    def settings(self) -> ContainerSettings:
        return self._settings

    def __repr__(self) -> str:
        return f"{type(self).__name__}(providers={len(self._registry)}, context={dict(self._context)!r})"


__all__ = ["Container"]
