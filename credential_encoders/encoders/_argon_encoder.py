# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

# pylint: disable=invalid-name
# pyright: reportConstantRedefinition=false,reportRedeclaration=false,reportAssignmentType=false
"""Argon2i password encoder."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ._base import ensure_password_length, is_password_too_long

HAS_ARGON = False
try:
    from argon2 import (  # type: ignore[unused-ignore, import-not-found, import-untyped]
        PasswordHasher,
        Type,
    )
    from argon2.exceptions import (  # type: ignore[unused-ignore, import-not-found, import-untyped]
        InvalidHashError,
        VerificationError,
    )

    HAS_ARGON = True

    @dataclass(frozen=True)
    class Argon2iPasswordEncoder:
        """Argon2i password encoder.

        Parameters left to None use the argon2-cffi defaults.
        """

        memory_cost: Optional[int] = None
        time_cost: Optional[int] = None
        threads: Optional[int] = None

        _ph: PasswordHasher = field(init=False, repr=False, compare=False)

        def __post_init__(self) -> None:
            """Build the underlying hasher.

            Raises
            ------
            TypeError
                If a parameter is not an integer.
            ValueError
                If a parameter is not positive.
            """
            kwargs: Dict[str, Any] = {}
            for name, option in (
                ("memory_cost", "memory_cost"),
                ("time_cost", "time_cost"),
                ("threads", "parallelism"),
            ):
                value = getattr(self, name)
                if value is None:
                    continue
                if isinstance(value, bool) or not isinstance(value, int):
                    raise TypeError(f"{name} must be an integer")
                if value < 1:
                    raise ValueError(f"{name} must be positive")
                kwargs[option] = value
            object.__setattr__(
                self, "_ph", PasswordHasher(type=Type.I, **kwargs)
            )

        def hash(self, plain: str) -> str:
            """Hash password using argon2i.

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
            return self._ph.hash(plain)

        def verify(self, plain: str, stored: str) -> bool:
            """Verify password against argon2i hash.

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
            if not stored.startswith("$argon2i$"):
                return False
            try:
                return self._ph.verify(stored, plain)
            except (VerificationError, InvalidHashError):
                return False

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
            if not stored.startswith("$argon2i$"):
                return True
            try:
                return self._ph.check_needs_rehash(stored)
            except (InvalidHashError, ValueError):
                return True

except ImportError:  # pragma: no cover
    Argon2iPasswordEncoder = None  # type: ignore

__all__ = ["Argon2iPasswordEncoder", "HAS_ARGON"]
