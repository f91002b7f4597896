from wirebox.autowiring import Autowirer
from wirebox.container import Container
from wirebox.container_context import ContainerContext, container_context
from wirebox.container_interface import IContainer
from wirebox.discovery import discover_providers
from wirebox.exceptions import (
    WireboxCircularDependencyError,
    WireboxConstructionError,
    WireboxError,
    WireboxReflectionError,
    WireboxUnresolvableParameterError,
)
from wirebox.providers import (
    BaseServiceProvider,
    DefaultServiceProvider,
    InstanceProvider,
    ProvidersRegistry,
    ServiceProvider,
)
from wirebox.reflection import MISSING, ParameterDescriptor, Reflector
from wirebox.settings import ContainerSettings

__all__ = [
    "MISSING",
    "Autowirer",
    "BaseServiceProvider",
    "Container",
    "ContainerContext",
    "ContainerSettings",
    "DefaultServiceProvider",
    "IContainer",
    "InstanceProvider",
    "ParameterDescriptor",
    "ProvidersRegistry",
    "Reflector",
    "ServiceProvider",
    "WireboxCircularDependencyError",
    "WireboxConstructionError",
    "WireboxError",
    "WireboxReflectionError",
    "WireboxUnresolvableParameterError",
    "container_context",
    "discover_providers",
]
