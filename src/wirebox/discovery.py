"""Entry-point discovery of service providers.

Installed packages advertise providers under an entry-point group
(``wirebox.providers`` by default)::

    [project.entry-points."wirebox.providers"]
    redis = "myapp.providers:RedisProvider"

An entry point may name a provider class, which is built with
``container.make`` so its constructor can ask for the container or other
services, or a ready provider instance.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from importlib import metadata
from importlib.metadata import EntryPoint, EntryPoints
from typing import TYPE_CHECKING, Any, TypeAlias, cast

from wirebox._internal.type_checks import is_runtime_class
from wirebox.providers import ServiceProvider
from wirebox.settings import DEFAULT_ENTRY_POINT_GROUP

if TYPE_CHECKING:
    from wirebox.container import Container

logger = logging.getLogger(__name__)

_EntryPointSource: TypeAlias = EntryPoints | Mapping[str, Sequence[EntryPoint]]


def _select_entry_points(entries: _EntryPointSource, group: str) -> Iterable[EntryPoint]:
    if isinstance(entries, Mapping):
        return entries.get(group, ())
    if hasattr(entries, "select"):
        return entries.select(group=group)
    return ()


def _build_provider(container: Container, loaded: Any, entry: EntryPoint) -> ServiceProvider | None:
    if is_runtime_class(loaded):
        provider = container.make(loaded)
        if provider is None:
            logger.warning("Skipping provider entry point '%s': construction failed", entry.name)
            return None
    else:
        provider = loaded
    if not isinstance(provider, ServiceProvider):
        logger.warning(
            "Skipping provider entry point '%s': %r is not a service provider",
            entry.name,
            provider,
        )
        return None
    return provider


def load_providers(
    container: Container,
    group: str = DEFAULT_ENTRY_POINT_GROUP,
) -> tuple[ServiceProvider, ...]:
    """Return the providers advertised under ``group``, in discovery order.

    Entries that fail to import or do not produce a service provider are
    logged and skipped.

    Args:
        container: Container used to build provider classes.
        group: Entry-point group name to inspect.

    """
    entries = cast("_EntryPointSource", metadata.entry_points())
    providers: list[ServiceProvider] = []
    for entry in _select_entry_points(entries, group):
        try:
            loaded = entry.load()
        except (AttributeError, ImportError, ValueError, RuntimeError) as error:
            logger.warning("Skipping provider entry point '%s': %s", entry.name, error)
            continue
        provider = _build_provider(container, loaded, entry)
        if provider is not None:
            providers.append(provider)
    return tuple(providers)


def discover_providers(
    container: Container,
    group: str = DEFAULT_ENTRY_POINT_GROUP,
) -> tuple[ServiceProvider, ...]:
    """Register every provider advertised under ``group`` with ``container``.

    Args:
        container: Container receiving the registrations.
        group: Entry-point group name to inspect.

    Returns:
        The registered providers, in registration order.

    """
    providers = load_providers(container, group)
    for provider in providers:
        container.register(provider)
        logger.debug("Registered discovered provider %r from group '%s'", provider, group)
    return providers


__all__ = ["discover_providers", "load_providers"]
