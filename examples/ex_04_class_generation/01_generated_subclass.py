"""Focused example: a class generator substituting a generated subclass."""

from __future__ import annotations

from typing import Any

from ctorwire import DependencyInjectingInstantiator, ObjectInstantiationError, ServiceRegistry
from ctorwire import inject


class Task:
    @inject
    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError("name must not be empty")
        self.name = name


class TracingClassGenerator:
    def __init__(self) -> None:
        self._generated: dict[type[Any], type[Any]] = {}

    def generate(self, cls: type[Any]) -> type[Any]:
        if cls not in self._generated:
            self._generated[cls] = type(f"{cls.__name__}_Traced", (cls,), {"traced": True})
        return self._generated[cls]


def main() -> None:
    instantiator = DependencyInjectingInstantiator(
        ServiceRegistry(),
        class_generator=TracingClassGenerator(),
    )

    task = instantiator.new_instance(Task, "build")
    try:
        instantiator.new_instance(Task, "")
    except ObjectInstantiationError as error:
        reported = error.requested_type.__name__

    print(f"type={type(task).__name__} traced={task.traced}")  # => type=Task_Traced traced=True
    print(f"reported={reported}")  # => reported=Task


if __name__ == "__main__":
    main()
