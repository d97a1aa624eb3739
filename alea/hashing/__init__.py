"""
Alea Password Hashing
======================

PBKDF2-HMAC-SHA1 hashing with salts drawn from a random byte source.
"""

from alea.hashing.pbkdf2 import HashRecord, Pbkdf2Sha1Hash

__all__ = ["HashRecord", "Pbkdf2Sha1Hash"]
