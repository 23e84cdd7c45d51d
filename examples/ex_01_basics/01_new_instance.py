"""Focused example: supplied values and looked-up services in one constructor call."""

from __future__ import annotations

from ctorwire import DependencyInjectingInstantiator, ServiceRegistry, inject


class Clock:
    def now(self) -> str:
        return "12:00"


class Reminder:
    @inject
    def __init__(self, clock: Clock, message: str, repeat: int) -> None:
        self.clock = clock
        self.message = message
        self.repeat = repeat

    def describe(self) -> str:
        return f"{self.message} x{self.repeat} at {self.clock.now()}"


def main() -> None:
    registry = ServiceRegistry()
    registry.add(Clock())
    instantiator = DependencyInjectingInstantiator(registry)

    reminder = instantiator.new_instance(Reminder, 3, "stand up")

    print(f"reminder={reminder.describe()}")  # => reminder=stand up x3 at 12:00


if __name__ == "__main__":
    main()
