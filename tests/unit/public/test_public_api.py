from __future__ import annotations

import ctorwire
from ctorwire import DependencyInjectingInstantiator, ServiceRegistry, inject


def test_all_exports_are_importable() -> None:
    for name in ctorwire.__all__:
        assert hasattr(ctorwire, name), name


def test_all_is_sorted_and_unique() -> None:
    assert list(ctorwire.__all__) == sorted(set(ctorwire.__all__))


class Clock:
    pass


class Scheduler:
    @inject
    def __init__(self, clock: Clock, interval: float) -> None:
        self.clock = clock
        self.interval = interval


def test_top_level_api_builds_instances() -> None:
    registry = ServiceRegistry()
    clock = Clock()
    registry.add(clock)
    instantiator = DependencyInjectingInstantiator(registry)

    scheduler = instantiator.new_instance(Scheduler, 0.5)

    assert scheduler.clock is clock
    assert scheduler.interval == 0.5
