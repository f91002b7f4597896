from __future__ import annotations

import datetime
import decimal
import enum
import inspect
import pathlib
import types
import uuid
from dataclasses import dataclass
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_protocol_class(candidate: type[Any]) -> bool:
    """Return true when candidate is a ``typing.Protocol`` definition."""
    return bool(getattr(candidate, "_is_protocol", False))


@dataclass(frozen=True, slots=True)
class ObjectKindPolicy:
    """Split declared parameter types into object kinds and value kinds.

    Object kinds are resolved through the container. Value kinds (builtins and
    the well-known value classes below) are never constructed by autowiring and
    must come from a manual parameter or a default.
    """

    value_base_types: tuple[type[Any], ...] = (
        pathlib.PurePath,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
        decimal.Decimal,
        enum.Enum,
    )

    def is_object_kind(self, candidate: object) -> TypeGuard[type[Any]]:
        """Return true when a declared type should be resolved through the container.

        Args:
            candidate: Declared parameter type being classified.

        """
        if not is_runtime_class(candidate):
            return False
        if candidate.__module__ == "builtins":
            return False
        if issubclass(candidate, type):
            return False
        return not issubclass(candidate, self.value_base_types)

    def is_constructible(self, candidate: object) -> TypeGuard[type[Any]]:
        """Return true when a class can be instantiated by plain construction.

        Args:
            candidate: Class being checked.

        """
        if not is_runtime_class(candidate):
            return False
        if inspect.isabstract(candidate):
            return False
        return not is_protocol_class(candidate)


__all__ = ["ObjectKindPolicy", "is_protocol_class", "is_runtime_class"]
