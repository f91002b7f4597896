from __future__ import annotations

from collections.abc import Sequence
from typing import Any


def describe_type(target: Any) -> str:
    """Return a readable dotted name for a class or a raw type name."""
    if isinstance(target, str):
        return target
    module = getattr(target, "__module__", None)
    qualname = getattr(target, "__qualname__", None)
    if qualname is None:
        return repr(target)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"


class WireboxError(Exception):
    """Represent a base class for all wirebox-specific failures.

    Catch this type when you want to handle any resolution failure without
    matching each concrete exception class individually.
    """


class WireboxCircularDependencyError(WireboxError):
    """Signal that a type was requested while it is already being resolved.

    Raised by ``Container.resolve`` before the type is pushed onto the
    resolution stack. ``chain`` holds the active resolution chain followed by
    the repeated type, for example ``(A, B, A)``.

    This always indicates a structural defect in the dependency graph and is
    never retryable. Typical fixes include breaking the cycle with a provider
    that builds one side lazily, or passing one side as a manual parameter.
    """

    def __init__(self, chain: Sequence[Any]) -> None:
        self.chain = tuple(chain)
        rendered = " -> ".join(describe_type(item) for item in self.chain)
        super().__init__(f"Circular dependency detected: {rendered}")


class WireboxUnresolvableParameterError(WireboxError):
    """Signal that a constructor or method parameter cannot be autowired.

    Raised by ``Autowirer.get_arguments`` when a parameter has no manual value,
    no default, and either is not an object type or its own resolution yielded
    no instance.

    Typical fixes include passing the value through ``parameters``, adding a
    default value, or registering a provider for the parameter type.
    """

    def __init__(
        self,
        parameter_name: str,
        owner: Any,
        method_name: str,
        chain: Sequence[Any] = (),
    ) -> None:
        self.parameter_name = parameter_name
        self.owner = owner
        self.method_name = method_name
        self.chain = tuple(chain)
        message = (
            f"Cannot autowire parameter '{parameter_name}' for "
            f"{describe_type(owner)}.{method_name}"
        )
        if self.chain:
            rendered = " -> ".join(describe_type(item) for item in self.chain)
            message = f"{message} (resolving {rendered})"
        super().__init__(message)


class WireboxReflectionError(WireboxError):
    """Signal that a type or method cannot be introspected or constructed.

    Raised by the reflector when a dotted type name cannot be imported, when the
    requested method does not exist, when annotations cannot be evaluated, or
    when the target is abstract, a protocol, or not a class at all.
    """

    def __init__(self, target: Any, reason: str) -> None:
        self.target = target
        super().__init__(f"Cannot reflect '{describe_type(target)}': {reason}")


class WireboxConstructionError(WireboxError):
    """Signal that the instantiation step itself failed.

    Raised when the selected provider's ``create_instance`` (or direct
    construction) raises a non-wirebox exception, or returns ``None``. The
    original exception is chained as ``__cause__``.
    """

    def __init__(self, target: Any, reason: str) -> None:
        self.target = target
        super().__init__(f"Failed to construct '{describe_type(target)}': {reason}")
