from __future__ import annotations

import importlib
import inspect
import types
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from inspect import Parameter
from typing import Annotated, Any, Final, Union, get_args, get_origin, get_type_hints

from wirebox._internal.type_checks import ObjectKindPolicy, is_runtime_class
from wirebox.exceptions import WireboxReflectionError


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final[Any] = _Missing()
"""Sentinel for a parameter without a default value."""

CONSTRUCTOR: Final = "__init__"

_MISSING_ANNOTATION: Any = object()
_IMPLICIT_FIRST_PARAMETER_NAMES = {"self", "cls"}
_UNION_ORIGINS: tuple[Any, ...] = (Union, types.UnionType)


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """Describe one autowirable parameter of a constructor or method."""

    name: str
    """Parameter name as declared."""
    position: int
    """Zero-based index in the argument list handed to the target."""
    annotation: Any
    """Normalized declared type, or ``None`` when the parameter is unannotated."""
    is_object: bool
    """True when the declared type is resolved through the container."""
    is_optional: bool
    """True when the parameter has a default or is declared as ``X | None``."""
    default: Any = MISSING
    """Default value, or ``MISSING``."""
    kind: inspect._ParameterKind = Parameter.POSITIONAL_OR_KEYWORD

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING


@dataclass(slots=True)
class Reflector:
    """Introspect classes into parameter descriptors and construct them."""

    policy: ObjectKindPolicy = field(default_factory=ObjectKindPolicy)

    def load_type(self, type_name: Any) -> type[Any]:
        """Return the class named by ``type_name``.

        Classes pass through unchanged. Strings are treated as fully qualified
        dotted names (``"package.module.Class"``; nested classes are allowed).

        Args:
            type_name: Class object or dotted class path.

        Raises:
            WireboxReflectionError: If the name cannot be imported or does not
                name a class.

        """
        if is_runtime_class(type_name):
            return type_name
        if not isinstance(type_name, str) or not type_name:
            raise WireboxReflectionError(type_name, "not a class or a dotted class name")

        parts = type_name.split(".")
        for split_at in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split_at])
            try:
                target: Any = importlib.import_module(module_name)
            except ImportError:
                continue
            except Exception as error:
                reason = f"importing '{module_name}' failed ({type(error).__name__}: {error})"
                raise WireboxReflectionError(type_name, reason) from error
            try:
                for attribute in parts[split_at:]:
                    target = getattr(target, attribute)
            except AttributeError as error:
                raise WireboxReflectionError(type_name, str(error)) from error
            if not is_runtime_class(target):
                raise WireboxReflectionError(type_name, "does not name a class")
            return target

        raise WireboxReflectionError(type_name, "no importable module in name")

    def describe_parameters(
        self,
        type_: type[Any],
        method_name: str = CONSTRUCTOR,
    ) -> list[ParameterDescriptor]:
        """Describe the autowirable parameters of ``type_.method_name``.

        The constructor is described through ``inspect.signature(type_)`` so
        dataclasses, named tuples and ``__new__``-based classes work the same as
        plain ``__init__`` classes. Variadic parameters are not described.
        Keyword-only parameters with defaults are left to their defaults.

        Args:
            type_: Class to inspect.
            method_name: Method to inspect; ``"__init__"`` for the constructor.

        Raises:
            WireboxReflectionError: If the method is missing, the signature is
                unavailable, annotations cannot be evaluated, or a required
                keyword-only parameter is declared.

        """
        if not is_runtime_class(type_):
            raise WireboxReflectionError(type_, "not a class")

        if method_name in (CONSTRUCTOR, ""):
            if type_.__init__ is object.__init__ and type_.__new__ is object.__new__:
                return []
            target: Callable[..., Any] = type_
            hint_sources = self._constructor_hint_sources(type_)
            skip_first_parameter = False
        else:
            target, skip_first_parameter = self._method_target(type_, method_name)
            hint_sources = [target]

        try:
            parameters = tuple(inspect.signature(target).parameters.values())
        except (TypeError, ValueError) as error:
            raise WireboxReflectionError(type_, f"signature unavailable ({error})") from error
        if (
            skip_first_parameter
            and parameters
            and parameters[0].name in _IMPLICIT_FIRST_PARAMETER_NAMES
        ):
            parameters = parameters[1:]

        annotations, annotation_error = self._resolved_type_hints(hint_sources)
        descriptors: list[ParameterDescriptor] = []
        for parameter in parameters:
            if parameter.kind in (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD):
                continue
            if parameter.kind is Parameter.KEYWORD_ONLY:
                if parameter.default is Parameter.empty:
                    msg = (
                        f"required keyword-only parameter '{parameter.name}' of "
                        f"{method_name or CONSTRUCTOR} cannot be passed positionally"
                    )
                    raise WireboxReflectionError(type_, msg)
                continue
            descriptors.append(
                self._describe(
                    parameter=parameter,
                    position=len(descriptors),
                    annotation=self._resolve_parameter_annotation(
                        parameter=parameter,
                        annotations=annotations,
                        annotation_error=annotation_error,
                        owner=type_,
                    ),
                ),
            )
        return descriptors

    def construct_directly(self, type_: type[Any], arguments: Sequence[Any]) -> Any:
        """Instantiate ``type_`` with positional ``arguments``, bypassing providers.

        Args:
            type_: Class to instantiate.
            arguments: Constructor arguments in declared order.

        Raises:
            WireboxReflectionError: If ``type_`` is abstract, a protocol, or not
                a class.

        """
        if not self.policy.is_constructible(type_):
            raise WireboxReflectionError(type_, "abstract or protocol classes cannot be constructed")
        return type_(*arguments)

    def is_constructible(self, type_: Any) -> bool:
        return self.policy.is_constructible(type_)

    def is_object_kind(self, type_: Any) -> bool:
        return self.policy.is_object_kind(type_)

    def _describe(
        self,
        *,
        parameter: Parameter,
        position: int,
        annotation: Any,
    ) -> ParameterDescriptor:
        default = MISSING if parameter.default is Parameter.empty else parameter.default
        declared, nullable = self._normalize_annotation(annotation)
        return ParameterDescriptor(
            name=parameter.name,
            position=position,
            annotation=declared,
            is_object=self.policy.is_object_kind(declared),
            is_optional=nullable or default is not MISSING,
            default=default,
            kind=parameter.kind,
        )

    def _normalize_annotation(self, annotation: Any) -> tuple[Any, bool]:
        if annotation is _MISSING_ANNOTATION:
            return None, False
        if get_origin(annotation) is Annotated:
            annotation = get_args(annotation)[0]
        if get_origin(annotation) in _UNION_ORIGINS:
            members = [member for member in get_args(annotation) if member is not type(None)]
            nullable = len(members) != len(get_args(annotation))
            if len(members) == 1:
                declared, _ = self._normalize_annotation(members[0])
                return declared, nullable
            return annotation, nullable
        return annotation, False

    def _method_target(
        self,
        type_: type[Any],
        method_name: str,
    ) -> tuple[Callable[..., Any], bool]:
        try:
            static_member = inspect.getattr_static(type_, method_name)
        except AttributeError as error:
            raise WireboxReflectionError(type_, f"has no method '{method_name}'") from error
        member = getattr(type_, method_name)
        if not callable(member):
            raise WireboxReflectionError(type_, f"'{method_name}' is not callable")
        return member, not isinstance(static_member, staticmethod | classmethod)

    def _constructor_hint_sources(self, type_: type[Any]) -> list[Any]:
        sources: list[Any] = [
            getattr(type_, member_name)
            for member_name in ("__init__", "__new__")
            if getattr(type_, member_name) is not getattr(object, member_name)
        ]
        sources.append(type_)
        return sources

    def _resolved_type_hints(
        self,
        sources: Sequence[Any],
    ) -> tuple[dict[str, Any], Exception | None]:
        merged: dict[str, Any] = {}
        merged_error: Exception | None = None

        for source in sources:
            try:
                hints = get_type_hints(source, include_extras=True)
            except Exception as error:
                if merged_error is None:
                    merged_error = error
                continue
            for parameter_name, parameter_annotation in hints.items():
                merged.setdefault(parameter_name, parameter_annotation)

        merged.pop("return", None)
        return merged, merged_error

    def _resolve_parameter_annotation(
        self,
        *,
        parameter: Parameter,
        annotations: dict[str, Any],
        annotation_error: Exception | None,
        owner: type[Any],
    ) -> Any:
        annotation = annotations.get(parameter.name, _MISSING_ANNOTATION)
        if annotation is not _MISSING_ANNOTATION:
            return annotation

        raw_annotation = parameter.annotation
        if raw_annotation is not Parameter.empty and not isinstance(raw_annotation, str):
            return raw_annotation

        if raw_annotation is Parameter.empty or parameter.default is not Parameter.empty:
            return _MISSING_ANNOTATION

        reason = f"cannot evaluate annotation of required parameter '{parameter.name}'"
        if annotation_error is None:
            raise WireboxReflectionError(owner, reason)
        raise WireboxReflectionError(owner, f"{reason} ({annotation_error})") from annotation_error


__all__ = ["CONSTRUCTOR", "MISSING", "ParameterDescriptor", "Reflector"]
