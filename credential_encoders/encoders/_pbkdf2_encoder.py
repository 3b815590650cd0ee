# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

# pylint: disable=line-too-long
# flake8: noqa: E501

"""PBKDF2 password encoder."""

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

_SCHEME = "pbkdf2"


@dataclass(frozen=True)
class Pbkdf2PasswordEncoder:
    """PBKDF2-HMAC password encoder."""

    hash_algorithm: str = "sha512"
    encode_as_base64: bool = True
    iterations: int = 1000
    key_length: int = 40
    salt_len: int = 16

    def __post_init__(self) -> None:
        """Validate the parameters.

        Raises
        ------
        TypeError
            If a numeric parameter is not an integer.
        ValueError
            If the algorithm is unsupported or a parameter is out of range.
        """
        if not isinstance(self.hash_algorithm, str):
            raise TypeError("hash_algorithm must be a string")
        for name in ("iterations", "key_length", "salt_len"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an integer")
            if value < 1:
                raise ValueError(f"{name} must be positive")
        try:
            hashlib.pbkdf2_hmac(self.hash_algorithm, b"", b"salt", 1)
        except ValueError as exc:
            raise ValueError(
                f'The algorithm "{self.hash_algorithm}" is not supported.'
            ) from exc

    def _derive(self, plain: str, salt: bytes, iterations: int, dklen: int) -> bytes:
        return hashlib.pbkdf2_hmac(
            self.hash_algorithm,
            plain.encode("utf-8"),
            salt,
            iterations,
            dklen=dklen,
        )

    def hash(self, plain: str) -> str:
        """Hash password using PBKDF2.

        Parameters
        ----------
        plain : str
            The plain secret to hash.

        Returns
        -------
        str
            The hashed secret.
        """
        ensure_password_length(plain)
        salt = secrets.token_bytes(self.salt_len)
        key = self._derive(plain, salt, self.iterations, self.key_length)
        return SaltedHash(
            scheme=_SCHEME,
            algorithm=self.hash_algorithm,
            iterations=self.iterations,
            salt=salt,
            key=encode_bytes(key, self.encode_as_base64),
        ).format()

    def verify(self, plain: str, stored: str) -> bool:
        """Verify password against a PBKDF2 hash.

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
        if parsed is None or parsed.algorithm != self.hash_algorithm:
            return False
        stored_key = decode_bytes(parsed.key, self.encode_as_base64)
        if not stored_key:
            return False
        key = self._derive(plain, parsed.salt, parsed.iterations, len(stored_key))
        return hmac.compare_digest(key, stored_key)

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
        stored_key = decode_bytes(parsed.key, self.encode_as_base64)
        return (
            stored_key is None
            or parsed.algorithm != self.hash_algorithm
            or parsed.iterations != self.iterations
            or len(stored_key) != self.key_length
        )


__all__ = ["Pbkdf2PasswordEncoder"]
