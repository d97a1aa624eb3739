"""
Fixed Byte Source
==================

Replays a caller-supplied buffer.  Lets tests drive the sampler and
shuffler through exact byte sequences, including the rejection path.
"""

from __future__ import annotations

from alea.core.errors import ExhaustedSourceError
from alea.sources.base import RandomByteSource


class FixedByteSource(RandomByteSource):
    """Hands out the bytes of *data* in order, then fails.

    Usage::

        src = FixedByteSource(bytes.fromhex("ffffffff07000000"))
        UniformIntegerSampler(src).sample_below(3)   # rejects, then 1
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        """Number of bytes not yet handed out."""
        return len(self._data) - self._pos

    def _read(self, count: int) -> bytes:
        if count > self.remaining:
            raise ExhaustedSourceError(
                f"requested {count} bytes, only {self.remaining} left"
            )
        out = self._data[self._pos:self._pos + count]
        self._pos += count
        return out
