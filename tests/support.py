from __future__ import annotations

from typing import Any

from ctorwire._internal.constructors import CandidateConstructor, ReflectiveConstructorInspector
from ctorwire.services import ServiceRegistry


class MappingClassGenerator:
    """Class generator substituting configured subclasses."""

    def __init__(self, substitutes: dict[type[Any], type[Any]] | None = None) -> None:
        self.substitutes = dict(substitutes or {})
        self.generated: list[type[Any]] = []

    def generate(self, cls: type[Any]) -> type[Any]:
        self.generated.append(cls)
        return self.substitutes.get(cls, cls)


class RecordingServiceLookup:
    """Service lookup delegating to a registry and recording requested types."""

    def __init__(self, registry: ServiceRegistry) -> None:
        self.registry = registry
        self.requested: list[Any] = []

    def get(self, service_type: Any) -> Any:
        self.requested.append(service_type)
        return self.registry.get(service_type)


class CountingInspector:
    """Reflective inspector counting how often each class is inspected."""

    def __init__(self) -> None:
        self.inspected: list[type[Any]] = []
        self._inspector = ReflectiveConstructorInspector()

    def constructors_of(self, cls: type[Any]) -> tuple[CandidateConstructor, ...]:
        self.inspected.append(cls)
        return self._inspector.constructors_of(cls)
