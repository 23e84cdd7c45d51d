from __future__ import annotations

from typing import Any


def type_name(cls: Any) -> str:
    """Return the fully qualified name used in error messages.

    Args:
        cls: Class or annotation to render.

    """
    qualname = getattr(cls, "__qualname__", None)
    if qualname is None:
        return repr(cls)
    module = getattr(cls, "__module__", None)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"


class CtorWireError(Exception):
    """Represent a base class for all ctorwire-specific failures.

    Catch this type when you want to handle any ctorwire error path without
    matching each concrete exception class individually.
    """


class ObjectInstantiationError(CtorWireError):
    """Signal that an instance of the requested type could not be created.

    Raised by ``DependencyInjectingInstantiator.new_instance`` for every
    failure path. The underlying failure is available as ``__cause__``: a
    ``ConstructorSelectionError``, a ``ParameterBindingError``, a
    ``ServiceLookupError`` or whatever the constructor itself raised.

    ``requested_type`` is always the type passed by the caller, even when the
    class generator substituted a generated subclass.
    """

    def __init__(self, requested_type: type[Any]) -> None:
        self.requested_type = requested_type
        super().__init__(f"Could not create an instance of type {type_name(requested_type)}.")


class ConstructorSelectionError(CtorWireError):
    """Signal that no single constructor can be selected for a class.

    Triggers are a class with several ``@inject`` constructors, several
    unannotated constructors, a single unannotated constructor that takes
    parameters, or a single non-public zero-argument constructor.

    Typical fix is marking exactly one constructor with ``@inject``.
    """

    def __init__(self, message: str, *, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(message)


class ParameterBindingError(CtorWireError):
    """Signal that supplied arguments do not fit the selected constructor.

    Raised when more values are supplied than the constructor declares, or
    when a supplied value matches none of the remaining parameter types.
    """

    def __init__(self, message: str, *, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(message)


class ServiceLookupError(CtorWireError):
    """Represent a failure to look up a service for a constructor parameter."""

    def __init__(self, service_type: Any, message: str) -> None:
        self.service_type = service_type
        super().__init__(message)


class UnknownServiceError(ServiceLookupError):
    """Signal that no registered service matches the requested type.

    Typical fixes include registering the service with ``ServiceRegistry.add``
    or passing the value directly to ``new_instance``.
    """


class AmbiguousServiceError(ServiceLookupError):
    """Signal that several registered services match the requested type.

    Typical fix is registering the service under the exact requested type with
    ``ServiceRegistry.add(service, provides=...)``.
    """
