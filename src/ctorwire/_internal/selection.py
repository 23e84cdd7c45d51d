from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, cast

if TYPE_CHECKING:
    from typing_extensions import Self

from ctorwire._internal.constructors import (
    MISSING_ANNOTATION,
    CandidateConstructor,
    ConstructorInspector,
    ReflectiveConstructorInspector,
)
from ctorwire.exceptions import ConstructorSelectionError, type_name
from ctorwire.markers import Visibility

_IMPLICITLY_SELECTABLE = (Visibility.PUBLIC, Visibility.PACKAGE)


@dataclass(frozen=True, slots=True)
class CachedConstructor:
    """Hold the outcome of constructor selection for one concrete type.

    Exactly one of ``selected`` and ``error`` is set. A failed selection is
    cached too; every access raises a new ``ConstructorSelectionError`` with
    the same message and cause. The stored error carries no traceback, so the
    cache never keeps a caller's frames or arguments alive.
    """

    selected: CandidateConstructor | None = None
    error: ConstructorSelectionError | None = None

    @classmethod
    def of(cls, selected: CandidateConstructor) -> Self:
        return cls(selected=selected)

    @classmethod
    def failed(cls, error: ConstructorSelectionError) -> Self:
        return cls(error=_detached(error))

    @property
    def constructor(self) -> CandidateConstructor:
        error = self.error
        if error is not None:
            raise ConstructorSelectionError(str(error), type_name=error.type_name) from (
                error.__cause__
            )
        return cast("CandidateConstructor", self.selected)


def _detached(error: ConstructorSelectionError) -> ConstructorSelectionError:
    # Tracebacks reference frames, and frames reference their callers.
    chained: BaseException | None = error
    seen: set[int] = set()
    while chained is not None and id(chained) not in seen:
        seen.add(id(chained))
        chained.__traceback__ = None
        chained = chained.__cause__ or chained.__context__
    return error


def select_constructor(
    candidates: Sequence[CandidateConstructor],
    *,
    class_name: str,
) -> CandidateConstructor:
    """Pick the single constructor to use from ``candidates``.

    Args:
        candidates: Constructors declared by the class.
        class_name: Name reported in failure messages.

    """
    injectable = [candidate for candidate in candidates if candidate.is_injectable]
    if len(injectable) == 1:
        return injectable[0]
    if len(injectable) > 1:
        msg = f"Class {class_name} has multiple constructors that are annotated with @inject."
        raise ConstructorSelectionError(msg, type_name=class_name)

    if len(candidates) == 1:
        only = candidates[0]
        if only.required_parameter_count == 0:
            if only.visibility in _IMPLICITLY_SELECTABLE:
                return only
            msg = (
                f"The constructor for class {class_name} should be public or package protected "
                "or annotated with @inject."
            )
            raise ConstructorSelectionError(msg, type_name=class_name)
        msg = f"The constructor for class {class_name} should be annotated with @inject."
        raise ConstructorSelectionError(msg, type_name=class_name)

    msg = f"Class {class_name} has no constructor that is annotated with @inject."
    raise ConstructorSelectionError(msg, type_name=class_name)


class ConstructorResolver:
    """Select the constructor used to instantiate a concrete type."""

    def __init__(self, inspector: ConstructorInspector | None = None) -> None:
        self._inspector = inspector or ReflectiveConstructorInspector()

    def resolve(
        self,
        concrete_type: type[Any],
        requested_type: type[Any] | None = None,
    ) -> CachedConstructor:
        """Return the cached-form selection outcome for ``concrete_type``.

        Selection failures are captured in the result instead of raised so they
        can be cached. Messages name ``requested_type`` when given, since a
        generated subclass is an implementation detail.

        Args:
            concrete_type: Class whose constructors are inspected.
            requested_type: Class originally requested by the caller.

        """
        class_name = type_name(requested_type if requested_type is not None else concrete_type)
        try:
            candidates = self._inspector.constructors_of(concrete_type)
            selected = select_constructor(candidates, class_name=class_name)
            self._validate_annotations(selected, class_name=class_name)
        except ConstructorSelectionError as error:
            return CachedConstructor.failed(error)
        return CachedConstructor.of(selected)

    def _validate_annotations(self, selected: CandidateConstructor, *, class_name: str) -> None:
        for parameter in selected.parameters:
            if parameter.annotation is not MISSING_ANNOTATION or not parameter.is_required:
                continue
            msg = (
                f"Unable to infer type for parameter '{parameter.name}' of the constructor "
                f"for class {class_name}. Add a type annotation."
            )
            if selected.annotation_error is None:
                raise ConstructorSelectionError(msg, type_name=class_name)
            msg = f"{msg} Original annotation error: {selected.annotation_error}"
            raise ConstructorSelectionError(msg, type_name=class_name) from (
                selected.annotation_error
            )


__all__ = ["CachedConstructor", "ConstructorResolver", "select_constructor"]
