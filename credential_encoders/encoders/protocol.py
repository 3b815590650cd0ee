# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

# pylint: disable=unnecessary-ellipsis

"""Password encoder and encoder-aware entity protocols."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class PasswordEncoder(Protocol):  # pragma: no cover
    """Protocol for password encoder implementations.

    Only ``hash`` and ``verify`` are required; encoders that can tell
    outdated hashes apart also implement ``SupportsRehash``.
    """

    def hash(self, plain: str) -> str:
        """Hash a plain text password.

        Parameters
        ----------
        plain : str
            The plain text password
        """
        ...

    def verify(self, plain: str, stored: str) -> bool:
        """Verify a plain text password against a stored hash.

        Parameters
        ----------
        plain : str
            The plain text password
        stored : str
            The stored hash
        """
        ...


@runtime_checkable
class SupportsRehash(Protocol):  # pragma: no cover
    """Protocol for encoders that detect outdated stored hashes."""

    def needs_rehash(self, stored: str) -> bool:
        """Check if the stored hashed secret needs rehash.

        Parameters
        ----------
        stored : str
            The stored hash
        """
        ...


@runtime_checkable
class EncoderAware(Protocol):  # pragma: no cover
    """Protocol for entities that pick their own encoder."""

    def preferred_encoder_name(self) -> Optional[str]:
        """Get the name of the encoder to use for this entity.

        Returns
        -------
        Optional[str]
            The registry key to use, or None to fall back to type matching.
        """
        ...


__all__ = ["EncoderAware", "PasswordEncoder", "SupportsRehash"]
