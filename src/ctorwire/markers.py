from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar, overload

F = TypeVar("F")

INJECT_MARKER_ATTR = "__ctorwire_inject__"
VISIBILITY_ATTR = "__ctorwire_visibility__"
CONSTRUCTOR_MARKER_ATTR = "__ctorwire_constructor__"


class Visibility(Enum):
    """Describe how visible a constructor is to the instantiator.

    Only ``PUBLIC`` and ``PACKAGE`` constructors are selected implicitly.
    ``PROTECTED`` and ``PRIVATE`` constructors must be marked with ``@inject``.
    """

    PUBLIC = "public"
    PACKAGE = "package"
    PROTECTED = "protected"
    PRIVATE = "private"


def _marker_target(obj: Any) -> Any:
    if isinstance(obj, classmethod):
        return obj.__func__
    return obj


def _decorated_target(obj: Any, decorator_name: str) -> Any:
    if isinstance(obj, staticmethod):
        msg = (
            f"@{decorator_name} cannot mark a staticmethod. "
            "Use __init__, __new__ or a classmethod as the constructor."
        )
        raise TypeError(msg)
    return _marker_target(obj)


def inject(func: F) -> F:
    """Mark a constructor as the one to use for dependency-injected instantiation.

    Apply to ``__init__``, to ``__new__`` of a class without its own
    ``__init__``, or to an alternate-constructor classmethod. The marked
    constructor is selected regardless of its visibility.

    Raises:
        TypeError: When applied to a staticmethod, which is never a constructor.

    Examples:
        .. code-block:: python

            class Service:
                @inject
                def __init__(self, repository: Repository, retries: int) -> None: ...

    """
    setattr(_decorated_target(func, "inject"), INJECT_MARKER_ATTR, True)
    return func


@overload
def constructor(func: F, /) -> F: ...


@overload
def constructor(
    func: None = None,
    /,
    *,
    visibility: Visibility | None = None,
) -> Callable[[F], F]: ...


def constructor(
    func: Any = None,
    /,
    *,
    visibility: Visibility | None = None,
) -> Any:
    """Declare an alternate constructor or override a constructor's visibility.

    Classmethods decorated with ``@constructor`` are candidates next to
    ``__init__``. On ``__init__`` itself only ``visibility`` has an effect.

    Args:
        func: Classmethod or ``__init__`` when used as a bare decorator.
        visibility: Explicit visibility; inferred from the name when omitted.

    """

    def decorator(target: F) -> F:
        marked = _decorated_target(target, "constructor")
        setattr(marked, CONSTRUCTOR_MARKER_ATTR, True)
        if visibility is not None:
            setattr(marked, VISIBILITY_ATTR, visibility)
        return target

    if func is None:
        return decorator
    return decorator(func)


def is_injectable(func: Any) -> bool:
    """Return true when ``func`` carries the ``@inject`` marker."""
    return getattr(_marker_target(func), INJECT_MARKER_ATTR, False) is True


def is_declared_constructor(func: Any) -> bool:
    """Return true when ``func`` is marked with ``@constructor`` or ``@inject``."""
    target = _marker_target(func)
    return getattr(target, CONSTRUCTOR_MARKER_ATTR, False) is True or is_injectable(target)


def declared_visibility(func: Any) -> Visibility | None:
    """Return the visibility set with ``@constructor(visibility=...)``, if any."""
    return getattr(_marker_target(func), VISIBILITY_ATTR, None)


__all__ = [
    "Visibility",
    "constructor",
    "declared_visibility",
    "inject",
    "is_declared_constructor",
    "is_injectable",
]
