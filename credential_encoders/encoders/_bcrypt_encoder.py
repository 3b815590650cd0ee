# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Bcrypt password encoder."""

import re
from dataclasses import dataclass

import bcrypt

from ._base import ensure_password_length, is_password_too_long

_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
_BCRYPT_COST_RE = re.compile(r"^\$2[aby]\$(\d{2})\$")


def _to_bcrypt_bytes(plain: str) -> bytes:
    # bcrypt only looks at the first 72 bytes; pyca/bcrypt>=4.1 refuses more
    return plain.encode("utf-8")[:72]


@dataclass(frozen=True)
class BCryptPasswordEncoder:
    """Bcrypt password encoder."""

    cost: int = 13

    def __post_init__(self) -> None:
        """Validate the cost.

        Raises
        ------
        TypeError
            If the cost is not an integer.
        ValueError
            If the cost is not within 4 and 31.
        """
        if isinstance(self.cost, bool) or not isinstance(self.cost, int):
            raise TypeError("cost must be an integer")
        if self.cost < 4 or self.cost > 31:
            raise ValueError("Cost must be in the range of 4-31.")

    def hash(self, plain: str) -> str:
        """Hash password using bcrypt.

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
        salt = bcrypt.gensalt(rounds=self.cost)
        return bcrypt.hashpw(_to_bcrypt_bytes(plain), salt).decode("utf-8")

    def verify(self, plain: str, stored: str) -> bool:
        """Verify password against bcrypt hash.

        Parameters
        ----------
        plain : str
            The plain secret to verify.
        stored : str
            The stored hash.

        Returns
        -------
        bool
            True if verified, False if not.
        """
        if is_password_too_long(plain):
            return False
        if not stored.startswith(_BCRYPT_PREFIXES):
            return False
        try:
            return bcrypt.checkpw(
                _to_bcrypt_bytes(plain), stored.encode("utf-8")
            )
        except ValueError:
            return False

    def needs_rehash(self, stored: str) -> bool:
        """Check if the stored hash was made with another cost.

        Parameters
        ----------
        stored : str
            The stored hash

        Returns
        -------
        bool
            True if secret needs rehash, False otherwise
        """
        match = _BCRYPT_COST_RE.match(stored)
        if not match:
            return True
        return int(match.group(1)) != self.cost


__all__ = ["BCryptPasswordEncoder"]
