# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Plaintext password encoder (testing and legacy stores only)."""

import hmac
from dataclasses import dataclass

from ._base import ensure_password_length, is_password_too_long


@dataclass(frozen=True)
class PlaintextPasswordEncoder:
    """Stores passwords as they are."""

    ignore_case: bool = False

    def hash(self, plain: str) -> str:
        """Return the password unchanged.

        Parameters
        ----------
        plain : str
            The plain secret.

        Returns
        -------
        str
            The same secret.
        """
        ensure_password_length(plain)
        return plain

    def verify(self, plain: str, stored: str) -> bool:
        """Compare the password with the stored one.

        Parameters
        ----------
        plain : str
            The plain secret to check.
        stored : str
            The stored secret.

        Returns
        -------
        bool
            True if both match.
        """
        if is_password_too_long(plain):
            return False
        if self.ignore_case:
            plain, stored = plain.lower(), stored.lower()
        return hmac.compare_digest(
            plain.encode("utf-8"), stored.encode("utf-8")
        )

    def needs_rehash(self, stored: str) -> bool:  # pylint: disable=no-self-use,unused-argument
        """Plaintext values never need rehash.

        Parameters
        ----------
        stored : str
            The stored secret.

        Returns
        -------
        bool
            Always False.
        """
        return False


__all__ = ["PlaintextPasswordEncoder"]
