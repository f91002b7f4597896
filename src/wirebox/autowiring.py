from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from wirebox.exceptions import WireboxUnresolvableParameterError
from wirebox.reflection import CONSTRUCTOR, ParameterDescriptor, Reflector

if TYPE_CHECKING:
    from wirebox.container import Container

ManualParameters = Mapping[str | int, Any]
"""Caller-supplied values keyed by parameter name (or camelCase name) or position."""

_NOT_SUPPLIED: Any = object()


def snake_to_camel(name: str) -> str:
    """Return the camelCase spelling of a snake_case name (``max_size`` -> ``maxSize``)."""
    head, *tail = name.split("_")
    return head + "".join(word[:1].upper() + word[1:] for word in tail)


class Autowirer:
    """Build argument lists for constructors and methods.

    Manual parameters always win. Object-typed parameters are resolved through
    the owning container, which is the only place autowiring recurses into
    resolution; every other parameter needs a manual value or a default.
    """

    def __init__(self, container: Container, reflector: Reflector) -> None:
        self._container = container
        self._reflector = reflector

    def get_arguments(
        self,
        type_: Any,
        method_name: str = CONSTRUCTOR,
        parameters: ManualParameters | None = None,
    ) -> list[Any]:
        """Return the arguments for ``type_.method_name`` in declared order.

        Args:
            type_: Class (or dotted class name) owning the method.
            method_name: Method to autowire; ``"__init__"`` for the constructor.
            parameters: Manual values taking precedence over autowiring.

        Raises:
            WireboxUnresolvableParameterError: If a parameter has no manual
                value, no default, and cannot be resolved.
            WireboxReflectionError: If the type or method cannot be introspected.

        """
        owner = self._reflector.load_type(type_)
        manual = parameters if parameters is not None else {}

        arguments: list[Any] = []
        for descriptor in self._reflector.describe_parameters(owner, method_name):
            value = self._manual_value(descriptor, manual)
            if value is _NOT_SUPPLIED:
                value = self._autowired_value(descriptor, owner, method_name)
            arguments.append(value)
        return arguments

    def _manual_value(self, descriptor: ParameterDescriptor, manual: ManualParameters) -> Any:
        for key in (descriptor.name, snake_to_camel(descriptor.name), descriptor.position):
            if key in manual:
                return manual[key]
        return _NOT_SUPPLIED

    def _autowired_value(
        self,
        descriptor: ParameterDescriptor,
        owner: type[Any],
        method_name: str,
    ) -> Any:
        if descriptor.is_object:
            if descriptor.has_default and not self._container.can_resolve(descriptor.annotation):
                return descriptor.default
            instance = self._container.resolve(descriptor.annotation)
            if instance is None:
                raise WireboxUnresolvableParameterError(
                    descriptor.name,
                    owner,
                    method_name,
                    chain=(*self._container.resolution_stack, descriptor.annotation),
                )
            return instance

        if descriptor.has_default:
            return descriptor.default

        raise WireboxUnresolvableParameterError(descriptor.name, owner, method_name)


__all__ = ["Autowirer", "ManualParameters", "snake_to_camel"]
