from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from ctorwire._internal.type_checks import is_assignable
from ctorwire.exceptions import AmbiguousServiceError, UnknownServiceError, type_name

_MISSING: Any = object()


class ServiceLookup(Protocol):
    """Resolve a type to a single service value.

    Implementations raise ``UnknownServiceError`` when nothing matches and
    ``AmbiguousServiceError`` when more than one service matches.
    """

    def get(self, service_type: Any) -> Any: ...


@dataclass(slots=True)
class _Registration:
    provides: Any
    factory: Callable[[], Any] | None = None
    instance: Any = _MISSING


class ServiceRegistry:
    """Hold services keyed by type for constructor parameter lookup.

    ``get`` prefers a service registered under exactly the requested type.
    Otherwise it looks for the single service whose value is assignable to the
    requested type, then falls back to ``parent``.

    Factories registered with ``add_factory`` run on first lookup and their
    result is reused.

    Examples:
        .. code-block:: python

            registry = ServiceRegistry()
            registry.add(Settings())
            registry.add_factory(Database, lambda: Database(dsn="sqlite://"))

    """

    def __init__(self, parent: ServiceLookup | None = None) -> None:
        self._parent = parent
        self._registrations: dict[Any, _Registration] = {}
        self._lock = threading.RLock()

    def add(self, service: Any, *, provides: Any = None) -> None:
        """Register an existing service instance.

        Args:
            service: Service value.
            provides: Key to register under; defaults to ``type(service)``.

        """
        key = type(service) if provides is None else provides
        with self._lock:
            self._registrations[key] = _Registration(provides=key, instance=service)

    def add_factory(self, provides: Any, factory: Callable[[], Any]) -> None:
        """Register a factory creating the service on first lookup.

        Args:
            provides: Key to register under.
            factory: Zero-argument callable returning the service.

        """
        with self._lock:
            self._registrations[provides] = _Registration(provides=provides, factory=factory)

    def get(self, service_type: Any) -> Any:
        value = self._find(service_type)
        if value is _MISSING:
            msg = f"No service of type {type_name(service_type)} available."
            raise UnknownServiceError(service_type, msg)
        return value

    def find(self, service_type: Any, default: Any = None) -> Any:
        """Return the service for ``service_type`` or ``default`` when none matches.

        Args:
            service_type: Requested type.
            default: Value returned when no service matches.

        """
        value = self._find(service_type)
        return default if value is _MISSING else value

    def _find(self, service_type: Any) -> Any:
        with self._lock:
            exact = self._registrations.get(service_type)
            if exact is not None:
                return self._value_of(exact)

            matches = [
                registration
                for registration in self._registrations.values()
                if self._provides(registration, service_type)
            ]
            if len(matches) > 1:
                provided = ", ".join(type_name(match.provides) for match in matches)
                msg = (
                    f"Multiple services of type {type_name(service_type)} available: {provided}."
                )
                raise AmbiguousServiceError(service_type, msg)
            if matches:
                return self._value_of(matches[0])

        if self._parent is None:
            return _MISSING
        try:
            return self._parent.get(service_type)
        except UnknownServiceError:
            return _MISSING

    def _provides(self, registration: _Registration, service_type: Any) -> bool:
        if registration.instance is not _MISSING:
            return is_assignable(registration.instance, service_type)
        provides = registration.provides
        if isinstance(provides, type) and isinstance(service_type, type):
            try:
                return issubclass(provides, service_type)
            except TypeError:
                return False
        return False

    def _value_of(self, registration: _Registration) -> Any:
        factory = registration.factory
        if registration.instance is _MISSING and factory is not None:
            registration.instance = factory()
        return registration.instance

    def __len__(self) -> int:
        return len(self._registrations)


__all__ = ["ServiceLookup", "ServiceRegistry"]
