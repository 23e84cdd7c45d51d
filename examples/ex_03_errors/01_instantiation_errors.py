"""Focused example: every failure is reported as ``ObjectInstantiationError``."""

from __future__ import annotations

from typing import Any

from ctorwire import (
    DependencyInjectingInstantiator,
    ObjectInstantiationError,
    ServiceRegistry,
    inject,
)


class Mailer:
    pass


class Newsletter:
    @inject
    def __init__(self, mailer: Mailer, subject: str) -> None:
        self.mailer = mailer
        self.subject = subject


class Unannotated:
    def __init__(self, name: str) -> None:
        self.name = name


def _cause_name(instantiator: DependencyInjectingInstantiator, cls: type, *args: Any) -> str:
    try:
        instantiator.new_instance(cls, *args)
    except ObjectInstantiationError as error:
        return type(error.__cause__).__name__
    return "<none>"


def main() -> None:
    instantiator = DependencyInjectingInstantiator(ServiceRegistry())

    missing_service = _cause_name(instantiator, Newsletter, "hello")
    too_many = _cause_name(instantiator, Newsletter, "a", "b", "c")
    not_annotated = _cause_name(instantiator, Unannotated, "name")

    print(f"missing_service={missing_service}")  # => missing_service=UnknownServiceError
    print(f"too_many={too_many}")  # => too_many=ParameterBindingError
    print(f"not_annotated={not_annotated}")  # => not_annotated=ConstructorSelectionError


if __name__ == "__main__":
    main()
