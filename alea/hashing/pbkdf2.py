"""
PBKDF2 Password Hashing
========================

Salted password hashing with PBKDF2-HMAC-SHA1.  The salt is drawn from a
:class:`~alea.sources.base.RandomByteSource`; the stored string carries
every parameter needed to verify it later::

    sha1:<iterations>:<hash bytes>:<base64 salt>:<base64 hash>

Verification re-derives the hash with the stored parameters and compares
in constant time.

References:
    - RFC 8018 (2017). PKCS #5: Password-Based Cryptography
      Specification Version 2.1, Section 5.2.
    - NIST SP 800-132 (2010). Recommendation for Password-Based Key
      Derivation.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from dataclasses import dataclass
from typing import Optional

from alea_common.logger import get_logger

from alea.core.errors import HashFormatError, InvalidArgumentError
from alea.sources.base import RandomByteSource
from alea.sources.secure import SecureByteSource

_log = get_logger("hashing")


@dataclass(frozen=True, slots=True)
class HashRecord:
    """Parsed form of a stored password hash string."""

    DELIMITER = ":"

    algorithm: str
    iterations: int
    hash_size: int
    salt: bytes
    digest: bytes

    def __str__(self) -> str:
        return self.DELIMITER.join(
            (
                self.algorithm,
                str(self.iterations),
                str(self.hash_size),
                base64.b64encode(self.salt).decode("ascii"),
                base64.b64encode(self.digest).decode("ascii"),
            )
        )

    def matches(self, other: HashRecord) -> bool:
        """Constant-time comparison of the two digests."""
        return hmac.compare_digest(self.digest, other.digest)

    @classmethod
    def parse(cls, hashed: str) -> HashRecord:
        """Parse ``algorithm:iterations:size:salt:hash``.

        Raises:
            HashFormatError: If any field is missing or malformed.
        """
        parts = [p for p in hashed.split(cls.DELIMITER) if p]
        if len(parts) != 5:
            raise HashFormatError(
                f"expected 5 fields in hash string, got {len(parts)}"
            )
        algorithm, iterations_s, size_s, salt_s, digest_s = parts

        try:
            iterations = int(iterations_s)
        except ValueError as exc:
            raise HashFormatError("could not parse iteration count") from exc
        if iterations <= 0:
            raise HashFormatError("iteration count must be positive")

        try:
            salt = base64.b64decode(salt_s, validate=True)
        except binascii.Error as exc:
            raise HashFormatError("invalid salt") from exc
        try:
            digest = base64.b64decode(digest_s, validate=True)
        except binascii.Error as exc:
            raise HashFormatError("invalid hash") from exc

        try:
            hash_size = int(size_s)
        except ValueError as exc:
            raise HashFormatError("could not parse hash size") from exc
        if hash_size != len(digest):
            raise HashFormatError("invalid hash size")

        return cls(algorithm, iterations, hash_size, salt, digest)


class Pbkdf2Sha1Hash:
    """PBKDF2-HMAC-SHA1 password hasher.

    Usage::

        hasher = Pbkdf2Sha1Hash()
        stored = hasher.hash("correct horse")
        Pbkdf2Sha1Hash.verify_hash("correct horse", stored)   # True

    Args:
        salt_bytes: Salt length drawn per hash.
        iterations: PBKDF2 iteration count.
        hash_bytes: Length of the derived hash.
        source:     Salt source; defaults to :class:`SecureByteSource`.
    """

    ALGORITHM: str = "sha1"
    DEFAULT_SALT_BYTES: int = 24
    DEFAULT_ITERATIONS: int = 64000
    DEFAULT_HASH_BYTES: int = 18

    def __init__(
        self,
        salt_bytes: int = DEFAULT_SALT_BYTES,
        iterations: int = DEFAULT_ITERATIONS,
        hash_bytes: int = DEFAULT_HASH_BYTES,
        source: Optional[RandomByteSource] = None,
    ) -> None:
        for name, value in (
            ("salt_bytes", salt_bytes),
            ("iterations", iterations),
            ("hash_bytes", hash_bytes),
        ):
            if value < 1:
                raise InvalidArgumentError(f"{name} must be >= 1, got {value}")

        self._salt_bytes = salt_bytes
        self._iterations = iterations
        self._hash_bytes = hash_bytes
        self._source = source or SecureByteSource()

    def hash(self, plain_text: str) -> str:
        """Hash *plain_text* with a fresh salt and return the stored form."""
        salt = self._source.get_bytes(self._salt_bytes)
        record = self._derive(plain_text, salt, self._iterations, self._hash_bytes)
        _log.debug(
            "Derived %d-byte hash with %d iterations",
            self._hash_bytes,
            self._iterations,
        )
        return str(record)

    @classmethod
    def verify_hash(cls, plain_text: str, hashed: str) -> bool:
        """Check *plain_text* against a string produced by :meth:`hash`.

        Raises:
            HashFormatError: If *hashed* cannot be parsed or names an
                algorithm other than ``sha1``.
        """
        original = HashRecord.parse(hashed)
        if original.algorithm != cls.ALGORITHM:
            raise HashFormatError(f"unsupported algorithm {original.algorithm!r}")
        candidate = cls._derive(
            plain_text, original.salt, original.iterations, original.hash_size
        )
        return original.matches(candidate)

    @classmethod
    def _derive(
        cls, password: str, salt: bytes, iterations: int, size: int
    ) -> HashRecord:
        digest = hashlib.pbkdf2_hmac(
            cls.ALGORITHM, password.encode("utf-8"), salt, iterations, dklen=size
        )
        return HashRecord(cls.ALGORITHM, iterations, size, salt, digest)
