from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for the constructor resolution cache.

    Use ``THREAD`` when instantiators are shared between threads, which is the
    default. ``NONE`` removes lock acquisition from the miss path for
    single-threaded callers.
    """

    THREAD = "thread"
    """Guard cache misses with ``threading.Lock`` so each key is computed once."""

    NONE = "none"
    """Disable locking around cache reads/writes."""
