from __future__ import annotations

import threading
from collections.abc import Callable, Hashable
from contextlib import AbstractContextManager, nullcontext
from typing import Any, Generic, Protocol, TypeVar

from ctorwire.lock_mode import LockMode

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MISSING: Any = object()


class CrossInvocationCache(Protocol[K, V]):
    """Cache shared across instantiator invocations and owned by the caller."""

    def get(self, key: K) -> V | None: ...

    def get_or_compute(self, key: K, factory: Callable[[K], V]) -> V: ...

    def put(self, key: K, value: V) -> None: ...

    def clear(self) -> None: ...


class InMemoryCache(Generic[K, V]):
    """Keep computed values in memory, computing each key at most once.

    Reads of a present key take no lock. On a miss, callers for the same key
    serialize on a per-key lock so exactly one of them runs ``factory`` and
    the rest observe its result. A ``factory`` that raises stores nothing and
    the next caller computes again.

    Examples:
        .. code-block:: python

            cache = InMemoryCache()
            value = cache.get_or_compute(Service, expensive_lookup)

    """

    def __init__(self, *, lock_mode: LockMode = LockMode.THREAD) -> None:
        self._lock_mode = lock_mode
        self._values: dict[K, V] = {}
        self._key_locks: dict[K, threading.Lock] = {}
        self._lock = threading.Lock()

    @property
    def lock_mode(self) -> LockMode:
        return self._lock_mode

    def get(self, key: K) -> V | None:
        return self._values.get(key)

    def get_or_compute(self, key: K, factory: Callable[[K], V]) -> V:
        value = self._values.get(key, _MISSING)
        if value is not _MISSING:
            return value

        with self._key_lock(key):
            value = self._values.get(key, _MISSING)
            if value is not _MISSING:
                return value
            try:
                value = factory(key)
                self._values[key] = value
            finally:
                self._release_key_lock(key)
        return value

    def put(self, key: K, value: V) -> None:
        self._values[key] = value

    def clear(self) -> None:
        with self._lock:
            self._values.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def _key_lock(self, key: K) -> AbstractContextManager[Any]:
        if self._lock_mode is LockMode.NONE:
            return nullcontext()
        with self._lock:
            return self._key_locks.setdefault(key, threading.Lock())

    def _release_key_lock(self, key: K) -> None:
        if self._lock_mode is LockMode.NONE:
            return
        with self._lock:
            self._key_locks.pop(key, None)


__all__ = ["CrossInvocationCache", "InMemoryCache"]
