from __future__ import annotations

import numbers
import types
from typing import Any, Literal, TypeGuard, Union, get_args, get_origin

_NONE_TYPE = type(None)

# Declared numeric type -> runtime types accepted for it. ``bool`` never widens
# into a numeric parameter even though it subclasses ``int``.
NUMERIC_WIDENING: dict[type[Any], tuple[type[Any], ...]] = {
    bool: (bool,),
    int: (int,),
    float: (float, int),
    complex: (complex, float, int),
}


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_assignable(value: object, declared: Any) -> bool:
    """Return true when ``value`` can be passed for a parameter declared as ``declared``.

    Args:
        value: Caller-supplied or looked-up runtime value.
        declared: Resolved parameter annotation.

    """
    if declared is Any or declared is object:
        return True
    if declared is None or declared is _NONE_TYPE:
        return value is None

    origin = get_origin(declared)
    if origin is Union or origin is types.UnionType:
        return any(is_assignable(value, member) for member in get_args(declared))
    if origin is Literal:
        return any(value == option for option in get_args(declared))
    if origin is not None:
        declared = origin

    if not is_runtime_class(declared):
        return False

    widening = NUMERIC_WIDENING.get(declared)
    if widening is not None:
        if isinstance(value, bool):
            return declared is bool
        return isinstance(value, widening)

    if isinstance(value, bool) and issubclass(declared, numbers.Number):
        return False

    try:
        return isinstance(value, declared)
    except TypeError:
        # Non runtime-checkable protocols and similar special forms.
        return False


__all__ = ["NUMERIC_WIDENING", "is_assignable", "is_runtime_class"]
