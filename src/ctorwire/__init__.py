from ctorwire.cache import CrossInvocationCache, InMemoryCache
from ctorwire.exceptions import (
    AmbiguousServiceError,
    ConstructorSelectionError,
    CtorWireError,
    ObjectInstantiationError,
    ParameterBindingError,
    ServiceLookupError,
    UnknownServiceError,
)
from ctorwire.generators import ClassGenerator, IdentityClassGenerator
from ctorwire.instantiator import DependencyInjectingInstantiator, Instantiator
from ctorwire.lock_mode import LockMode
from ctorwire.markers import Visibility, constructor, inject
from ctorwire.services import ServiceLookup, ServiceRegistry

__all__ = [
    "AmbiguousServiceError",
    "ClassGenerator",
    "ConstructorSelectionError",
    "CrossInvocationCache",
    "CtorWireError",
    "DependencyInjectingInstantiator",
    "IdentityClassGenerator",
    "InMemoryCache",
    "Instantiator",
    "LockMode",
    "ObjectInstantiationError",
    "ParameterBindingError",
    "ServiceLookup",
    "ServiceLookupError",
    "ServiceRegistry",
    "UnknownServiceError",
    "Visibility",
    "constructor",
    "inject",
]
