"""
Seeded Byte Source
===================

Deterministic, cryptographically strong byte stream derived from a seed.
The stream is the PBKDF2-HMAC-SHA1 output (empty password, seed as salt)
read sequentially: successive :meth:`get_bytes` calls continue where the
previous call stopped, so the concatenation of every read equals
``hashlib.pbkdf2_hmac("sha1", b"", seed, iterations, total_length)``.

Same seed, same stream: suitable for reproducible shuffles and tests.

Reference:
    - RFC 8018 (2017). PKCS #5: Password-Based Cryptography
      Specification Version 2.1, Section 5.2 (PBKDF2).
"""

from __future__ import annotations

import hashlib

from alea.core.errors import ExhaustedSourceError, InvalidArgumentError
from alea.sources.base import RandomByteSource


class SeededByteSource(RandomByteSource):
    """PBKDF2-HMAC-SHA1 keystream keyed by a seed.

    Output is produced by :func:`hashlib.pbkdf2_hmac` into a buffer. When
    a read runs past the buffer, the stream is recomputed at (at least)
    twice the previous length and the part not yet handed out is kept.

    Args:
        seed:            Seed bytes (used as the PBKDF2 salt).
        iterations:      PBKDF2 iteration count per 20-byte block.
        min_seed_bytes:  Shortest seed accepted.
    """

    DIGEST_SIZE: int = 20
    MAX_LENGTH: int = (2**32 - 1) * DIGEST_SIZE
    INITIAL_LENGTH: int = 4 * DIGEST_SIZE

    def __init__(
        self,
        seed: bytes,
        iterations: int = 1000,
        *,
        min_seed_bytes: int = 8,
    ) -> None:
        if seed is None or len(seed) == 0:
            raise InvalidArgumentError("seed cannot be empty")
        if len(seed) < min_seed_bytes:
            raise InvalidArgumentError(
                f"seed needs to be at least {min_seed_bytes} bytes long, "
                f"got {len(seed)}"
            )
        if iterations < 1:
            raise InvalidArgumentError(
                f"iterations must be >= 1, got {iterations}"
            )

        self._salt = bytes(seed)
        self._iterations = iterations
        self._position = 0      # bytes handed out so far
        self._generated = 0     # length of the last derived stream
        self._buffer = bytearray()

    @property
    def iterations(self) -> int:
        return self._iterations

    def _refill(self, needed: int) -> None:
        """Derive at least *needed* stream bytes, keeping the unread tail."""
        if needed > self.MAX_LENGTH:
            raise ExhaustedSourceError(
                "seeded stream exhausted: PBKDF2 block counter overflow"
            )
        length = min(
            max(needed, 2 * self._generated, self.INITIAL_LENGTH), self.MAX_LENGTH
        )
        stream = hashlib.pbkdf2_hmac(
            "sha1", b"", self._salt, self._iterations, length
        )
        self._buffer = bytearray(stream[self._position:])
        self._generated = length

    def _read(self, count: int) -> bytes:
        if len(self._buffer) < count:
            self._refill(self._position + count)

        out = bytes(self._buffer[:count])
        del self._buffer[:count]
        self._position += count
        return out
