from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from inspect import Parameter
from typing import Any, Protocol, get_type_hints

from ctorwire.exceptions import ConstructorSelectionError, type_name
from ctorwire.markers import Visibility, declared_visibility, is_declared_constructor, is_injectable

MISSING_ANNOTATION: Any = object()
"""Sentinel for a parameter whose type could not be inferred."""

INIT_CONSTRUCTOR_NAME = "__init__"
_SKIPPED_PARAMETER_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)


@dataclass(frozen=True, slots=True)
class ConstructorParameter:
    """Represent one bindable parameter of a candidate constructor."""

    name: str
    annotation: Any
    """Resolved parameter type, or ``MISSING_ANNOTATION``."""
    kind: Any = Parameter.POSITIONAL_OR_KEYWORD
    default: Any = Parameter.empty

    @property
    def is_required(self) -> bool:
        return self.default is Parameter.empty

    @property
    def is_keyword_only(self) -> bool:
        return self.kind is Parameter.KEYWORD_ONLY


@dataclass(frozen=True, slots=True)
class CandidateConstructor:
    """Describe a constructor the instantiator may select for a class.

    ``name`` is ``"__init__"`` for the class constructor itself, otherwise the
    attribute name of an alternate-constructor classmethod. Candidates are
    plain data so the selection policy can be exercised with synthetic
    descriptors.
    """

    name: str
    parameters: tuple[ConstructorParameter, ...] = ()
    visibility: Visibility = Visibility.PUBLIC
    is_injectable: bool = False
    annotation_error: Exception | None = field(default=None, compare=False)
    """Error raised while evaluating the constructor's type hints, if any."""

    @property
    def required_parameter_count(self) -> int:
        return sum(1 for parameter in self.parameters if parameter.is_required)

    @property
    def parameter_types(self) -> tuple[Any, ...]:
        return tuple(parameter.annotation for parameter in self.parameters)

    def invoke(
        self,
        concrete_type: type[Any],
        args: Sequence[Any],
        kwargs: Mapping[str, Any],
    ) -> Any:
        """Run this constructor against ``concrete_type``.

        Alternate constructors are looked up on ``concrete_type`` so a generated
        subclass is bound as ``cls``.

        Args:
            concrete_type: Class to instantiate.
            args: Positional argument values in parameter order.
            kwargs: Keyword-only argument values.

        """
        if self.name == INIT_CONSTRUCTOR_NAME:
            return concrete_type(*args, **kwargs)
        factory: Callable[..., Any] = getattr(concrete_type, self.name)
        return factory(*args, **kwargs)


class ConstructorInspector(Protocol):
    """List the constructors of a type with their parameter types and visibility."""

    def constructors_of(self, cls: type[Any]) -> tuple[CandidateConstructor, ...]: ...


class ReflectiveConstructorInspector:
    """Inspect constructors through ``inspect`` and ``typing.get_type_hints``.

    Candidates are the effective ``__init__`` and every classmethod in the MRO
    marked with ``@constructor`` or ``@inject``. A class that keeps
    ``object.__init__`` but defines ``__new__`` in Python (``NamedTuple``
    included) is described by its ``__new__``. Otherwise an ``__init__``
    inherited from ``object`` is only a candidate when no alternate
    constructor is declared, mirroring the implicit default constructor.
    """

    def constructors_of(self, cls: type[Any]) -> tuple[CandidateConstructor, ...]:
        candidates = [
            self._candidate(cls=cls, name=name, func=func, default_visibility=visibility)
            for name, func, visibility in self._alternate_constructors(cls)
        ]

        init = self._class_constructor(cls)
        if init is not None:
            candidates.insert(
                0,
                self._candidate(
                    cls=cls,
                    name=INIT_CONSTRUCTOR_NAME,
                    func=init,
                    default_visibility=Visibility.PUBLIC,
                ),
            )
        elif not candidates:
            candidates.append(CandidateConstructor(name=INIT_CONSTRUCTOR_NAME))

        return tuple(candidates)

    def _class_constructor(self, cls: type[Any]) -> Callable[..., Any] | None:
        init = cls.__init__
        if init is not object.__init__:
            return init
        # Immutable types such as NamedTuple take their arguments in __new__.
        new = cls.__new__
        if new is not object.__new__ and inspect.isfunction(new):
            return new
        return None

    def _alternate_constructors(
        self,
        cls: type[Any],
    ) -> list[tuple[str, Callable[..., Any], Visibility]]:
        seen: set[str] = set()
        found: list[tuple[str, Callable[..., Any], Visibility]] = []
        for klass in cls.__mro__:
            if klass is object:
                continue
            for name, member in vars(klass).items():
                if name in seen:
                    continue
                seen.add(name)
                if isinstance(member, classmethod) and is_declared_constructor(member):
                    visibility = _visibility_from_name(klass, name)
                    found.append((name, member.__func__, visibility))
        return found

    def _candidate(
        self,
        *,
        cls: type[Any],
        name: str,
        func: Callable[..., Any],
        default_visibility: Visibility,
    ) -> CandidateConstructor:
        annotations, annotation_error = self._resolved_type_hints(func)
        if func is getattr(cls, "__new__", None):
            annotations, annotation_error = self._merge_class_hints(
                cls=cls,
                annotations=annotations,
                annotation_error=annotation_error,
            )
        try:
            bindable_parameters = self._bindable_parameters(func)
        except (TypeError, ValueError) as error:
            msg = f"Unable to inspect constructor '{name}' of class {type_name(cls)}."
            raise ConstructorSelectionError(msg, type_name=type_name(cls)) from error
        parameters = tuple(
            ConstructorParameter(
                name=parameter.name,
                annotation=self._parameter_annotation(parameter, annotations),
                kind=parameter.kind,
                default=parameter.default,
            )
            for parameter in bindable_parameters
        )
        return CandidateConstructor(
            name=name,
            parameters=parameters,
            visibility=declared_visibility(func) or default_visibility,
            is_injectable=is_injectable(func),
            annotation_error=annotation_error,
        )

    def _bindable_parameters(self, func: Callable[..., Any]) -> tuple[Parameter, ...]:
        # Plain functions here, so the first parameter is always self/cls.
        parameters = tuple(inspect.signature(func).parameters.values())[1:]
        return tuple(
            parameter for parameter in parameters if parameter.kind not in _SKIPPED_PARAMETER_KINDS
        )

    def _parameter_annotation(self, parameter: Parameter, annotations: dict[str, Any]) -> Any:
        annotation = annotations.get(parameter.name, MISSING_ANNOTATION)
        if annotation is not MISSING_ANNOTATION:
            return annotation
        raw_annotation = parameter.annotation
        if raw_annotation is not Parameter.empty and not isinstance(raw_annotation, str):
            return raw_annotation
        return MISSING_ANNOTATION

    def _resolved_type_hints(
        self,
        func: Callable[..., Any],
    ) -> tuple[dict[str, Any], Exception | None]:
        try:
            return get_type_hints(func), None
        except (AttributeError, NameError, TypeError) as error:
            # Candidates are cached; a traceback would pin the caller's frames.
            return {}, error.with_traceback(None)

    def _merge_class_hints(
        self,
        *,
        cls: type[Any],
        annotations: dict[str, Any],
        annotation_error: Exception | None,
    ) -> tuple[dict[str, Any], Exception | None]:
        # A generated __new__ is compiled outside the class's module, so
        # field annotations resolve against the class instead.
        class_annotations, class_error = self._resolved_type_hints(cls)
        merged = dict(annotations)
        for name, annotation in class_annotations.items():
            merged.setdefault(name, annotation)
        return merged, annotation_error or class_error


def _visibility_from_name(owner: type[Any], name: str) -> Visibility:
    # Class-private names are stored mangled as _Owner__name.
    if name.startswith(f"_{owner.__name__.lstrip('_')}__"):
        return Visibility.PRIVATE
    if name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


__all__ = [
    "INIT_CONSTRUCTOR_NAME",
    "MISSING_ANNOTATION",
    "CandidateConstructor",
    "ConstructorInspector",
    "ConstructorParameter",
    "ReflectiveConstructorInspector",
]
