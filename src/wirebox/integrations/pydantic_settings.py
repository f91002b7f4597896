from __future__ import annotations

import importlib
import warnings
from collections.abc import Sequence
from typing import Any

from wirebox._internal.type_checks import is_runtime_class
from wirebox.providers import ProviderContext

_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


def _load_pydantic_settings_base() -> type[Any] | None:
    return _load_base_settings("pydantic_settings")


def _load_pydantic_v1_base() -> type[Any] | None:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message=_PYDANTIC_V1_WARNING_PATTERN,
            category=UserWarning,
        )
        return _load_base_settings("pydantic.v1")


def _load_base_settings(module_name: str) -> type[Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    base_settings = getattr(module, "BaseSettings", None)
    if isinstance(base_settings, type):
        return base_settings
    return None


def _build_settings_bases() -> tuple[type[Any], ...]:
    bases: list[type[Any]] = []
    for candidate in (_load_pydantic_settings_base(), _load_pydantic_v1_base()):
        if candidate is not None and candidate not in bases:
            bases.append(candidate)
    return tuple(bases)


SETTINGS_BASES: tuple[type[Any], ...] = _build_settings_bases()


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return whether a class is a concrete Pydantic settings model.

    Both ``pydantic_settings.BaseSettings`` and the legacy
    ``pydantic.v1.BaseSettings`` are recognized when importable. The bases
    themselves are not settings models.

    Args:
        candidate: Object to test.

    """
    if not is_runtime_class(candidate) or candidate in SETTINGS_BASES:
        return False
    try:
        return any(issubclass(candidate, base) for base in SETTINGS_BASES)
    except TypeError:
        return False


class PydanticSettingsProvider:
    """Load settings models from the environment instead of autowiring fields.

    Settings are built with no arguments so Pydantic reads them from the
    environment, and each settings class is built once per provider: every
    resolution returns the same object.
    """

    autowire = False

    def __init__(self) -> None:
        self._instances: dict[type[Any], Any] = {}

    def supports(self, type_: type[Any], context: ProviderContext) -> bool:  # noqa: ARG002
        return is_pydantic_settings_subclass(type_)

    def create_instance(self, type_: type[Any], dependencies: Sequence[Any]) -> Any:  # noqa: ARG002
        instance = self._instances.get(type_)
        if instance is None:
            instance = self._instances[type_] = type_()
        return instance


__all__ = [
    "SETTINGS_BASES",
    "PydanticSettingsProvider",
    "is_pydantic_settings_subclass",
]
