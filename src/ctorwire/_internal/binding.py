from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from inspect import Parameter
from typing import Any

from ctorwire._internal.constructors import (
    MISSING_ANNOTATION,
    CandidateConstructor,
    ConstructorParameter,
)
from ctorwire._internal.type_checks import is_assignable
from ctorwire.exceptions import ParameterBindingError, UnknownServiceError, type_name
from ctorwire.services import ServiceLookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ArgumentVector:
    """Hold the values passed to the selected constructor.

    ``args`` follows parameter order; ``kwargs`` carries keyword-only values.
    """

    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.args) + len(self.kwargs)


class ParameterBinder:
    """Match supplied values to constructor parameters and look up the rest.

    Each parameter takes the first still-unconsumed supplied value assignable
    to its type. Parameters left without a value are looked up from
    ``services``, after every supplied value has been checked for a match.
    """

    def __init__(self, services: ServiceLookup) -> None:
        self._services = services

    def bind(
        self,
        requested_type: type[Any],
        constructor: CandidateConstructor,
        supplied: Sequence[Any],
    ) -> ArgumentVector:
        """Build the argument vector for ``constructor``.

        Args:
            requested_type: Class named in failure messages.
            constructor: Selected constructor.
            supplied: Caller-supplied values, in call order.

        """
        class_name = type_name(requested_type)
        typed = [
            parameter
            for parameter in constructor.parameters
            if parameter.annotation is not MISSING_ANNOTATION
        ]
        declared = len(constructor.parameters)
        if len(supplied) > declared:
            msg = (
                f"Too many parameters provided for constructor for class {class_name}. "
                f"Expected {declared}, received {len(supplied)}."
            )
            raise ParameterBindingError(msg, type_name=class_name)

        matched = self._match_supplied(typed, supplied, class_name=class_name)

        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter in constructor.parameters:
            value = self._value_for(parameter, matched)
            if value is Parameter.empty:
                continue
            if parameter.is_keyword_only:
                kwargs[parameter.name] = value
            else:
                args.append(value)
        return ArgumentVector(args=tuple(args), kwargs=kwargs)

    def _match_supplied(
        self,
        parameters: Sequence[ConstructorParameter],
        supplied: Sequence[Any],
        *,
        class_name: str,
    ) -> dict[str, Any]:
        consumed = [False] * len(supplied)
        matched: dict[str, Any] = {}
        for parameter in parameters:
            for index, value in enumerate(supplied):
                if consumed[index] or not is_assignable(value, parameter.annotation):
                    continue
                consumed[index] = True
                matched[parameter.name] = value
                break

        if not all(consumed):
            msg = f"Unexpected parameter provided for constructor for class {class_name}."
            raise ParameterBindingError(msg, type_name=class_name)
        return matched

    def _value_for(self, parameter: ConstructorParameter, matched: dict[str, Any]) -> Any:
        if parameter.name in matched:
            return matched[parameter.name]
        if parameter.annotation is MISSING_ANNOTATION:
            # Keep later positional arguments aligned.
            return Parameter.empty if parameter.is_keyword_only else parameter.default
        return self._lookup(parameter)

    def _lookup(self, parameter: ConstructorParameter) -> Any:
        logger.debug(
            "Looking up service for parameter '%s' of type %s",
            parameter.name,
            type_name(parameter.annotation),
        )
        try:
            return self._services.get(parameter.annotation)
        except UnknownServiceError:
            if parameter.is_required:
                raise
        if parameter.is_keyword_only:
            return Parameter.empty
        return parameter.default


__all__ = ["ArgumentVector", "ParameterBinder"]
