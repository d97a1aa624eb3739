"""
Alea Byte Sources
==================

Implementations of the :class:`RandomByteSource` capability: secure
(OS CSPRNG), seeded (deterministic PBKDF2 stream), fixed (replay buffer)
and a lock wrapper for explicit sharing.
"""

from alea.sources.base import RandomByteSource
from alea.sources.fixed import FixedByteSource
from alea.sources.locked import LockedByteSource
from alea.sources.secure import SecureByteSource
from alea.sources.seeded import SeededByteSource

__all__ = [
    "RandomByteSource",
    "FixedByteSource",
    "LockedByteSource",
    "SecureByteSource",
    "SeededByteSource",
]
