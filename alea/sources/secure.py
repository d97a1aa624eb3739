"""
Secure Byte Source
===================

Cryptographically secure randomness from the operating system CSPRNG
(``getrandom(2)`` / ``/dev/urandom`` / ``BCryptGenRandom``) via
:mod:`secrets`.

Reference:
    - Python documentation, ``secrets`` -- Generate secure random numbers
      for managing secrets. https://docs.python.org/3/library/secrets.html
"""

from __future__ import annotations

import secrets

from alea.core.errors import ExhaustedSourceError
from alea.sources.base import RandomByteSource


class SecureByteSource(RandomByteSource):
    """OS-backed cryptographically secure byte source."""

    def _read(self, count: int) -> bytes:
        try:
            return secrets.token_bytes(count)
        except (OSError, NotImplementedError) as exc:
            raise ExhaustedSourceError(
                f"operating system entropy source failed for {count} bytes"
            ) from exc
