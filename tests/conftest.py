"""Shared pytest fixtures for ctorwire tests."""

import pytest

from ctorwire.instantiator import DependencyInjectingInstantiator
from ctorwire.services import ServiceRegistry
from tests.support import CountingInspector, MappingClassGenerator, RecordingServiceLookup


@pytest.fixture()
def services() -> ServiceRegistry:
    """Empty service registry."""
    return ServiceRegistry()


@pytest.fixture()
def recording_services(services: ServiceRegistry) -> RecordingServiceLookup:
    """Lookup recording every requested type."""
    return RecordingServiceLookup(services)


@pytest.fixture()
def class_generator() -> MappingClassGenerator:
    """Class generator returning requested classes unless a substitute is configured."""
    return MappingClassGenerator()


@pytest.fixture()
def inspector() -> CountingInspector:
    """Reflective inspector counting inspected classes."""
    return CountingInspector()


@pytest.fixture()
def instantiator(
    recording_services: RecordingServiceLookup,
    class_generator: MappingClassGenerator,
    inspector: CountingInspector,
) -> DependencyInjectingInstantiator:
    """Instantiator wired to the recording lookup, mapping generator and counting inspector."""
    return DependencyInjectingInstantiator(
        recording_services,
        class_generator=class_generator,
        inspector=inspector,
    )
