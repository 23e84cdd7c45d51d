from __future__ import annotations

from inspect import Parameter
from typing import NamedTuple, Optional

from ctorwire._internal.constructors import (
    INIT_CONSTRUCTOR_NAME,
    MISSING_ANNOTATION,
    CandidateConstructor,
    ReflectiveConstructorInspector,
)
from ctorwire.markers import Visibility, constructor, inject


class Repository:
    pass


class Plain:
    pass


class WithInit:
    def __init__(self, repository: Repository, name: str, *args: object, **kwargs: object) -> None:
        self.repository = repository
        self.name = name


class WithFactories:
    @inject
    @classmethod
    def create(cls, repository: Repository) -> WithFactories:
        return cls()

    @constructor
    @classmethod
    def _restore(cls) -> WithFactories:
        return cls()

    @classmethod
    def __build(cls) -> WithFactories:
        return cls()

    @constructor
    @classmethod
    def __hidden(cls) -> WithFactories:
        return cls()

    @classmethod
    def helper(cls) -> None:
        return None


class InheritsFactories(WithFactories):
    pass


class KeywordOnly:
    @inject
    def __init__(self, name: str, *, retries: Optional[int] = None, tag="x") -> None:
        self.name = name
        self.retries = retries
        self.tag = tag


class Point(NamedTuple):
    repository: Repository
    label: str = "origin"


class Text(str):
    pass


class BrokenHints:
    @inject
    def __init__(self, dependency: "MissingType") -> None:  # noqa: F821
        self.dependency = dependency


def _by_name(candidates: tuple[CandidateConstructor, ...]) -> dict[str, CandidateConstructor]:
    return {candidate.name: candidate for candidate in candidates}


def test_class_without_constructors_has_implicit_public_zero_argument_constructor() -> None:
    candidates = ReflectiveConstructorInspector().constructors_of(Plain)

    assert candidates == (CandidateConstructor(name=INIT_CONSTRUCTOR_NAME),)


def test_inspects_init_parameters_and_skips_variadic_parameters() -> None:
    (candidate,) = ReflectiveConstructorInspector().constructors_of(WithInit)

    assert candidate.name == INIT_CONSTRUCTOR_NAME
    assert candidate.visibility is Visibility.PUBLIC
    assert candidate.is_injectable is False
    assert [parameter.name for parameter in candidate.parameters] == ["repository", "name"]
    assert candidate.parameter_types == (Repository, str)
    assert candidate.required_parameter_count == 2


def test_collects_marked_classmethods_as_alternate_constructors() -> None:
    candidates = _by_name(ReflectiveConstructorInspector().constructors_of(WithFactories))

    assert set(candidates) == {"create", "_restore", "_WithFactories__hidden"}
    assert candidates["create"].is_injectable is True
    assert candidates["create"].parameter_types == (Repository,)
    assert candidates["_restore"].visibility is Visibility.PROTECTED
    assert candidates["_WithFactories__hidden"].visibility is Visibility.PRIVATE


def test_object_init_is_not_a_candidate_next_to_alternate_constructors() -> None:
    candidates = ReflectiveConstructorInspector().constructors_of(WithFactories)

    assert INIT_CONSTRUCTOR_NAME not in _by_name(candidates)


def test_alternate_constructors_are_inherited() -> None:
    inherited = _by_name(ReflectiveConstructorInspector().constructors_of(InheritsFactories))

    assert set(inherited) == {"create", "_restore", "_WithFactories__hidden"}
    assert inherited["_WithFactories__hidden"].visibility is Visibility.PRIVATE


def test_records_keyword_only_and_defaulted_parameters() -> None:
    (candidate,) = ReflectiveConstructorInspector().constructors_of(KeywordOnly)

    name, retries, tag = candidate.parameters
    assert name.is_required
    assert retries.is_keyword_only
    assert retries.annotation == Optional[int]
    assert retries.default is None
    assert tag.annotation is MISSING_ANNOTATION
    assert tag.kind is Parameter.KEYWORD_ONLY
    assert candidate.required_parameter_count == 1


def test_keeps_annotation_error_for_unresolvable_hints() -> None:
    (candidate,) = ReflectiveConstructorInspector().constructors_of(BrokenHints)

    assert candidate.is_injectable is True
    assert isinstance(candidate.annotation_error, NameError)
    assert candidate.annotation_error.__traceback__ is None
    assert candidate.parameters[0].annotation is MISSING_ANNOTATION


def test_visibility_override_on_init() -> None:
    class Hidden:
        @constructor(visibility=Visibility.PRIVATE)
        def __init__(self) -> None:
            pass

    (candidate,) = ReflectiveConstructorInspector().constructors_of(Hidden)

    assert candidate.visibility is Visibility.PRIVATE
    assert candidate.parameters == ()


def test_invoke_calls_alternate_constructor_on_concrete_type() -> None:
    candidates = _by_name(ReflectiveConstructorInspector().constructors_of(WithFactories))

    instance = candidates["create"].invoke(InheritsFactories, (Repository(),), {})

    assert type(instance) is InheritsFactories


def test_named_tuple_is_described_by_its_new() -> None:
    (candidate,) = ReflectiveConstructorInspector().constructors_of(Point)

    assert candidate.name == INIT_CONSTRUCTOR_NAME
    assert candidate.is_injectable is False
    assert [parameter.name for parameter in candidate.parameters] == ["repository", "label"]
    assert candidate.parameter_types == (Repository, str)
    assert candidate.required_parameter_count == 1


def test_builtin_new_keeps_implicit_zero_argument_constructor() -> None:
    candidates = ReflectiveConstructorInspector().constructors_of(Text)

    assert candidates == (CandidateConstructor(name=INIT_CONSTRUCTOR_NAME),)
