from __future__ import annotations

import pytest

from ctorwire.markers import (
    Visibility,
    constructor,
    declared_visibility,
    inject,
    is_declared_constructor,
    is_injectable,
)


def test_inject_marks_function_and_returns_it_unchanged() -> None:
    def build(self: object) -> None:
        return None

    marked = inject(build)

    assert marked is build
    assert is_injectable(build)
    assert is_declared_constructor(build)


def test_inject_marks_classmethod_in_either_decorator_order() -> None:
    class Service:
        @inject
        @classmethod
        def outer(cls) -> None:
            return None

        @classmethod
        @inject
        def inner(cls) -> None:
            return None

    assert is_injectable(vars(Service)["outer"])
    assert is_injectable(vars(Service)["inner"])


def test_constructor_as_bare_decorator_declares_alternate_constructor() -> None:
    class Service:
        @constructor
        @classmethod
        def create(cls) -> None:
            return None

    member = vars(Service)["create"]
    assert is_declared_constructor(member)
    assert not is_injectable(member)
    assert declared_visibility(member) is None


def test_constructor_with_visibility_overrides_visibility() -> None:
    class Service:
        @constructor(visibility=Visibility.PACKAGE)
        def __init__(self) -> None:
            pass

    assert declared_visibility(Service.__init__) is Visibility.PACKAGE


def test_unmarked_function_is_neither_injectable_nor_constructor() -> None:
    def plain() -> None:
        return None

    assert not is_injectable(plain)
    assert not is_declared_constructor(plain)
    assert declared_visibility(plain) is None


def test_inject_rejects_staticmethod() -> None:
    with pytest.raises(TypeError, match="@inject cannot mark a staticmethod"):

        class Service:
            @inject
            @staticmethod
            def create() -> None:
                return None


def test_constructor_rejects_staticmethod() -> None:
    with pytest.raises(TypeError, match="@constructor cannot mark a staticmethod"):

        class Service:
            @constructor(visibility=Visibility.PUBLIC)
            @staticmethod
            def create() -> None:
                return None
