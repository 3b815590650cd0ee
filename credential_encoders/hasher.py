# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Hash and verify the password of an entity with its configured encoder."""

import logging
from typing import Any

from .encoders import SupportsRehash
from .registry import EncoderRegistry, describe_entity

LOG = logging.getLogger(__name__)


class UserPasswordHasher:
    """Dispatch password operations to the encoder of each entity."""

    def __init__(self, registry: EncoderRegistry) -> None:
        """Initialize the hasher.

        Parameters
        ----------
        registry : EncoderRegistry
            The registry to resolve encoders from.
        """
        self._registry = registry

    @property
    def registry(self) -> EncoderRegistry:
        """The encoder registry."""
        return self._registry

    def hash_password(self, entity: Any, plain: str) -> str:
        """Hash a password for an entity.

        Parameters
        ----------
        entity : Any
            The entity (instance, class or type name).
        plain : str
            The plain secret to hash.

        Returns
        -------
        str
            The hashed secret.
        """
        return self._registry.resolve(entity).hash(plain)

    def is_password_valid(self, entity: Any, plain: str, stored: str) -> bool:
        """Verify a password for an entity.

        Parameters
        ----------
        entity : Any
            The entity (instance, class or type name).
        plain : str
            The plain secret to check.
        stored : str
            The stored hashed secret.

        Returns
        -------
        bool
            True if the verification succeeds, false otherwise.
        """
        valid = self._registry.resolve(entity).verify(plain, stored)
        if not valid:
            LOG.debug("Invalid credentials for %s", describe_entity(entity))
        return valid

    def needs_rehash(self, entity: Any, stored: str) -> bool:
        """Check if the stored hash of an entity should be upgraded.

        Encoders without a ``needs_rehash`` method never ask for one.

        Parameters
        ----------
        entity : Any
            The entity (instance, class or type name).
        stored : str
            The stored hash

        Returns
        -------
        bool
            True if secret needs rehash, False otherwise
        """
        encoder = self._registry.resolve(entity)
        if not isinstance(encoder, SupportsRehash):
            return False
        return encoder.needs_rehash(stored)


__all__ = ["UserPasswordHasher"]
