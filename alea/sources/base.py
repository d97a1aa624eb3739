"""
Random Byte Source Interface
=============================

Abstract capability consumed by every randomness consumer in Alea: a
source hands out exactly the number of bytes requested, or fails with
:class:`~alea.core.errors.ExhaustedSourceError`.

Sources are stateful.  A source shared between threads must be wrapped in
:class:`~alea.sources.locked.LockedByteSource` (or guarded by the caller's
own lock); nothing in Alea synchronises access implicitly.
"""

from __future__ import annotations

import abc

from alea.core.errors import InvalidArgumentError


class RandomByteSource(abc.ABC):
    """Produces random bytes on demand.

    Subclasses implement :meth:`_read`; :meth:`get_bytes` validates the
    request so every variant behaves identically for ``count <= 0``.
    """

    def get_bytes(self, count: int) -> bytes:
        """Return exactly *count* bytes.

        Raises:
            InvalidArgumentError: If *count* is negative.
            ExhaustedSourceError: If the source cannot produce the bytes.
        """
        if count < 0:
            raise InvalidArgumentError(f"count must be >= 0, got {count}")
        if count == 0:
            return b""
        return self._read(count)

    @abc.abstractmethod
    def _read(self, count: int) -> bytes:
        """Produce *count* (> 0) bytes."""

    def close(self) -> None:
        """Release any resources held by the source."""

    def __enter__(self) -> RandomByteSource:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
