"""
Uniform Integer Sampler
========================

Turns raw bytes from a :class:`~alea.sources.base.RandomByteSource` into
unbiased integers and doubles.

Byte order: every multi-byte draw is interpreted as an unsigned
**little-endian** integer.

Bounded sampling uses rejection to remove modulo bias.  With
``U = 2**32 - 1``, taking ``raw % bound`` directly over-represents the
outcomes below ``U % bound`` whenever ``2**32`` is not a multiple of
*bound*.  Draws at or above ``threshold = U - (U % bound)`` are therefore
discarded; the expected number of draws is below 2 for every bound.

Reference:
    - Knuth, D. E. (1997). The Art of Computer Programming, Volume 2:
      Seminumerical Algorithms (3rd ed.), Section 3.4.1.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

from alea.core.errors import ExhaustedSourceError, InvalidArgumentError
from alea.sources.base import RandomByteSource

T = TypeVar("T")

U32_MAX: int = 0xFFFFFFFF
_MANTISSA_SHIFT: int = 11           # 64 - 53 mantissa bits of a double
_DOUBLE_SCALE: float = float(1 << 53)


class UniformIntegerSampler:
    """Unbiased sampling on top of a borrowed byte source.

    The sampler never closes *source*.  It holds no lock: if *source* is
    shared with other samplers across threads, wrap it in
    :class:`~alea.sources.locked.LockedByteSource` first.

    Usage::

        sampler = UniformIntegerSampler(SecureByteSource())
        die = sampler.sample_below(6) + 1
        u = sampler.sample_double()
    """

    def __init__(self, source: RandomByteSource) -> None:
        self._source = source

    @property
    def source(self) -> RandomByteSource:
        return self._source

    def _draw(self, count: int) -> int:
        data = self._source.get_bytes(count)
        if len(data) != count:
            raise ExhaustedSourceError(
                f"short read: requested {count} bytes, got {len(data)}"
            )
        return int.from_bytes(data, "little")

    def sample_uint32(self) -> int:
        """Return a uniformly random integer in ``[0, 2**32)``."""
        return self._draw(4)

    def sample_below(self, bound: int) -> int:
        """Return a uniformly random integer in ``[0, bound)``.

        Args:
            bound: Exclusive upper limit, ``1 <= bound <= 2**32 - 1``.

        Raises:
            InvalidArgumentError: If *bound* is out of range.
        """
        if isinstance(bound, bool) or not isinstance(bound, int):
            raise InvalidArgumentError(
                f"bound must be an integer, got {type(bound).__name__}"
            )
        if bound < 1 or bound > U32_MAX:
            raise InvalidArgumentError(
                f"bound must be in [1, {U32_MAX}], got {bound}"
            )

        threshold = U32_MAX - (U32_MAX % bound)
        while True:
            raw = self.sample_uint32()
            if raw < threshold:
                return raw % bound

    def sample_double(self) -> float:
        """Return a uniformly random double in ``[0, 1)``.

        The top 53 bits of a 64-bit draw fill the mantissa exactly.
        """
        return (self._draw(8) >> _MANTISSA_SHIFT) / _DOUBLE_SCALE

    def pick_from(self, sequence: Sequence[T]) -> T:
        """Return a uniformly chosen element of *sequence*."""
        if len(sequence) == 0:
            raise InvalidArgumentError("cannot pick from an empty sequence")
        return sequence[self.sample_below(len(sequence))]
