# Overview: Mutual-exclusion helpers shared by the in-memory stores.

from __future__ import annotations

import threading
from functools import wraps


class LockedStore:
    """
    Base for stores that own one collection behind one lock.

    Every public operation of a subclass is wrapped with @synchronized, so a
    create/update/delete runs to completion before any other operation on
    the same store can observe or touch the collection.
    """

    def __init__(self) -> None:
        # Re-entrant: a synchronized method may call another one on self
        self._lock = threading.RLock()


def synchronized(method):
    """Run a LockedStore method while holding the store's lock."""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper
