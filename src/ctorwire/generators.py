from __future__ import annotations

from typing import Any, Protocol


class ClassGenerator(Protocol):
    """Produce the class that is actually instantiated for a requested class.

    Implementations may return the requested class unchanged or a generated
    subclass of it. The instantiator always reports failures against the
    requested class.
    """

    def generate(self, cls: type[Any]) -> type[Any]: ...


class IdentityClassGenerator:
    """Instantiate requested classes as they are."""

    def generate(self, cls: type[Any]) -> type[Any]:
        return cls


__all__ = ["ClassGenerator", "IdentityClassGenerator"]
