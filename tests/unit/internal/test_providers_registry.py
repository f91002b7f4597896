from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from wirebox.providers import (
    BaseServiceProvider,
    DefaultServiceProvider,
    InstanceProvider,
    ProviderContext,
    ProvidersRegistry,
    ServiceProvider,
    registration_key,
    wants_autowired_arguments,
)


class _Cache:
    pass


class _Queue:
    pass


class _CacheProvider(BaseServiceProvider):
    provides = (_Cache,)

    def __init__(self, tag: str = "") -> None:
        self.tag = tag


class _QueueProvider(BaseServiceProvider):
    provides = (_Queue, _Cache)
    name = "queue"


class _CatchAllProvider:
    def supports(self, type_: type[Any], context: ProviderContext) -> bool:
        return True

    def create_instance(self, type_: type[Any], dependencies: Sequence[Any]) -> Any:
        return type_(*dependencies)


def test_registered_providers_are_service_providers() -> None:
    assert isinstance(_CacheProvider(), ServiceProvider)
    assert isinstance(_CatchAllProvider(), ServiceProvider)
    assert isinstance(DefaultServiceProvider(), ServiceProvider)
    assert not isinstance(object(), ServiceProvider)


def test_find_returns_first_supporting_provider() -> None:
    registry = ProvidersRegistry()
    queue = _QueueProvider()
    cache = _CacheProvider()
    registry.register(queue)
    registry.register(cache)

    assert registry.find(_Cache, {}) is queue
    assert registry.find(_Cache, {"provider": "other"}) is cache
    assert registry.find(_Queue, {"provider": "queue"}) is queue


def test_find_falls_back_to_default_provider() -> None:
    registry = ProvidersRegistry()
    registry.register(_CacheProvider())

    assert isinstance(registry.find(_Queue, {}), DefaultServiceProvider)
    assert registry.find_registered(_Queue, {}) is None


def test_custom_default_provider() -> None:
    default = _CatchAllProvider()
    registry = ProvidersRegistry(default)

    assert registry.find(_Cache, {}) is default
    assert registry.default_provider is default


def test_reregistering_same_class_replaces_in_place() -> None:
    registry = ProvidersRegistry()
    first = _CacheProvider("first")
    queue = _QueueProvider()
    second = _CacheProvider("second")
    registry.register(first)
    registry.register(queue)

    registry.register(second)

    assert list(registry) == [second, queue]
    assert first not in registry
    assert second in registry
    assert registry.find(_Cache, {"provider": "other"}) is second


def test_unregister_removes_by_class() -> None:
    registry = ProvidersRegistry()
    registry.register(_CacheProvider("first"))

    registry.unregister(_CacheProvider("other"))
    registry.unregister(_QueueProvider())

    assert len(registry) == 0
    assert registry.values() == []


def test_instance_providers_are_keyed_by_type_and_name() -> None:
    cache = InstanceProvider(_Cache())
    named = InstanceProvider(_Cache(), name="secondary")
    queue = InstanceProvider(_Queue())
    replacement = InstanceProvider(_Cache())
    registry = ProvidersRegistry()

    for provider in (cache, named, queue, replacement):
        registry.register(provider)

    assert list(registry) == [replacement, named, queue]
    assert registration_key(named) == (InstanceProvider, _Cache, "secondary")
    assert registration_key(_CacheProvider()) is _CacheProvider


def test_instance_provider_matches_exact_type_only() -> None:
    class _SpecialCache(_Cache):
        pass

    provider = InstanceProvider(_SpecialCache(), provides=_Cache)

    assert provider.supports(_Cache, {})
    assert not provider.supports(_SpecialCache, {})
    assert isinstance(provider.create_instance(_Cache, []), _SpecialCache)


def test_named_provider_context_matching() -> None:
    provider = _QueueProvider()

    assert provider.supports(_Queue, {})
    assert provider.supports(_Queue, {"region": "eu"})
    assert provider.supports(_Queue, {"provider": "queue"})
    assert not provider.supports(_Queue, {"provider": "other"})
    assert not provider.supports(object, {})


def test_wants_autowired_arguments() -> None:
    assert wants_autowired_arguments(_CacheProvider()) is True
    assert wants_autowired_arguments(_CatchAllProvider()) is True
    assert wants_autowired_arguments(InstanceProvider(_Cache())) is False


def test_instance_provider_repr() -> None:
    provider = InstanceProvider(_Cache(), name="main")

    assert repr(provider) == f"InstanceProvider({__name__}._Cache, name='main')"
