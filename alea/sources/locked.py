"""
Locked Byte Source
===================

Explicit sharing wrapper: one :class:`threading.Lock` per shared source.
Each :meth:`get_bytes` call runs under the lock, so a multi-byte draw is
never interleaved with another thread's draw.
"""

from __future__ import annotations

import threading

from alea.sources.base import RandomByteSource


class LockedByteSource(RandomByteSource):
    """Serialises access to *inner* so several samplers can share it."""

    def __init__(self, inner: RandomByteSource) -> None:
        self._inner = inner
        self._lock = threading.Lock()

    @property
    def inner(self) -> RandomByteSource:
        return self._inner

    def _read(self, count: int) -> bytes:
        with self._lock:
            return self._inner.get_bytes(count)

    def close(self) -> None:
        with self._lock:
            self._inner.close()
