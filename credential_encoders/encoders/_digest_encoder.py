# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Generic iterated message digest password encoder."""

import hashlib
import hmac
import secrets
from dataclasses import dataclass

from ._base import (
    SaltedHash,
    decode_bytes,
    encode_bytes,
    ensure_password_length,
    is_password_too_long,
)

_SCHEME = "digest"


@dataclass(frozen=True)
class MessageDigestPasswordEncoder:
    """Salted and iterated digest using any ``hashlib`` algorithm."""

    algorithm: str = "sha512"
    encode_as_base64: bool = True
    iterations: int = 5000
    salt_len: int = 16

    def __post_init__(self) -> None:
        """Validate the parameters.

        The algorithm name is only checked when a digest is computed.

        Raises
        ------
        TypeError
            If a numeric parameter is not an integer.
        ValueError
            If a parameter is out of range.
        """
        if not isinstance(self.algorithm, str):
            raise TypeError("algorithm must be a string")
        for name in ("iterations", "salt_len"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an integer")
            if value < 1:
                raise ValueError(f"{name} must be positive")

    @property
    def is_supported(self) -> bool:
        """Check if ``hashlib`` has a fixed length digest of this name."""
        try:
            # variable length digests (shake_*) need a length
            hashlib.new(self.algorithm).digest()
        except (ValueError, TypeError):
            return False
        return True

    def _digest(self, plain: str, salt: bytes, iterations: int) -> bytes:
        if not self.is_supported:
            raise ValueError(
                f'The algorithm "{self.algorithm}" is not supported.'
            )
        salted = plain.encode("utf-8") + salt
        digest = hashlib.new(self.algorithm, salted).digest()
        for _ in range(1, iterations):
            digest = hashlib.new(self.algorithm, digest + salted).digest()
        return digest

    def hash(self, plain: str) -> str:
        """Hash password using the configured digest.

        Parameters
        ----------
        plain : str
            The plain secret to hash.

        Returns
        -------
        str
            The hashed secret.

        Raises
        ------
        ValueError
            If the algorithm is not supported by ``hashlib``.
        """
        ensure_password_length(plain)
        salt = secrets.token_bytes(self.salt_len)
        digest = self._digest(plain, salt, self.iterations)
        return SaltedHash(
            scheme=_SCHEME,
            algorithm=self.algorithm,
            iterations=self.iterations,
            salt=salt,
            key=encode_bytes(digest, self.encode_as_base64),
        ).format()

    def verify(self, plain: str, stored: str) -> bool:
        """Verify password against a digest hash.

        Parameters
        ----------
        plain : str
            The plain secret to check.
        stored : str
            The stored hashed secret.

        Returns
        -------
        bool
            True if the verification succeeds, false otherwise.
        """
        if is_password_too_long(plain):
            return False
        parsed = SaltedHash.parse(stored, _SCHEME)
        if parsed is None or parsed.algorithm != self.algorithm:
            return False
        if not self.is_supported:
            return False
        stored_digest = decode_bytes(parsed.key, self.encode_as_base64)
        if not stored_digest:
            return False
        digest = self._digest(plain, parsed.salt, parsed.iterations)
        return hmac.compare_digest(digest, stored_digest)

    def needs_rehash(self, stored: str) -> bool:
        """Check if the stored hashed secret needs rehash.

        Parameters
        ----------
        stored : str
            The stored hash

        Returns
        -------
        bool
            True if secret needs rehash, False otherwise
        """
        parsed = SaltedHash.parse(stored, _SCHEME)
        if parsed is None:
            return True
        return (
            parsed.algorithm != self.algorithm
            or parsed.iterations != self.iterations
        )


__all__ = ["MessageDigestPasswordEncoder"]
