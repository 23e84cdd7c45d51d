from __future__ import annotations

import logging
from typing import Any

from ctorwire._internal.selection import CachedConstructor, ConstructorResolver
from ctorwire.cache import CrossInvocationCache

logger = logging.getLogger(__name__)


class ConstructorCache:
    """Memoize constructor selection per concrete type.

    The selection policy is pure, so a cached outcome, successful or failed,
    stays valid until the underlying cache evicts it.
    """

    def __init__(
        self,
        cache: CrossInvocationCache[type[Any], CachedConstructor],
        resolver: ConstructorResolver,
    ) -> None:
        self._cache = cache
        self._resolver = resolver

    def get(self, concrete_type: type[Any], requested_type: type[Any]) -> CachedConstructor:
        """Return the selection outcome for ``concrete_type``, resolving it on a miss.

        Args:
            concrete_type: Class produced by the class generator.
            requested_type: Class originally requested, used in failure messages.

        """

        def resolve(key: type[Any]) -> CachedConstructor:
            cached = self._resolver.resolve(key, requested_type)
            if cached.error is None:
                logger.debug(
                    "Resolved constructor for %s: name=%s parameters=%d",
                    key.__qualname__,
                    cached.constructor.name,
                    len(cached.constructor.parameters),
                )
            else:
                logger.debug(
                    "Constructor selection failed for %s: %s",
                    key.__qualname__,
                    cached.error,
                )
            return cached

        return self._cache.get_or_compute(concrete_type, resolve)


__all__ = ["ConstructorCache"]
