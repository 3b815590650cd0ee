# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Resolve the password encoder of an entity.

Resolution has two tiers. An entity implementing ``EncoderAware`` may name
its encoder explicitly; otherwise the registry keys are scanned in insertion
order and the first one found in the entity's type ancestry wins. Class
keys also match virtual subclasses (``ABC.register``) of the entity's type.
The selected entry is built from its declarative spec on first use and the
encoder is cached for every later lookup of the same key.
"""

import logging
import threading
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from ..encoders import EncoderAware, PasswordEncoder
from ..errors import (
    ConfigurationError,
    InvalidEncoderSpecError,
    NoEncoderConfiguredError,
    UnknownEncoderNameError,
)
from .ancestry import TypeCatalog, type_ancestry, type_name
from .factories import EncoderFactories

LOG = logging.getLogger(__name__)

EncoderEntry = Union[PasswordEncoder, Mapping[str, Any]]
"""A ready encoder or the declarative spec to build one."""


def describe_entity(entity: Any) -> str:
    """Get the descriptor of an entity for messages.

    Parameters
    ----------
    entity : Any
        An entity instance, a class or a type name.

    Returns
    -------
    str
        The type name (or the bare name itself).
    """
    if isinstance(entity, str):
        return entity
    if isinstance(entity, type):
        return type_name(entity)
    return type_name(type(entity))


class _Slot:
    """One registry entry, realized at most once."""

    __slots__ = ("key", "spec", "encoder", "lock")

    def __init__(
        self,
        key: str,
        spec: Optional[Mapping[str, Any]],
        encoder: Optional[PasswordEncoder],
    ) -> None:
        self.key = key
        self.spec = spec
        self.encoder = encoder
        self.lock = threading.Lock()

    @classmethod
    def from_entry(cls, key: str, entry: EncoderEntry) -> "_Slot":
        if isinstance(entry, PasswordEncoder):
            return cls(key, None, entry)
        if isinstance(entry, Mapping):
            return cls(key, MappingProxyType(dict(entry)), None)
        raise InvalidEncoderSpecError(
            f'The entry of "{key}" must be a mapping or a password encoder',
            entry,
        )


class EncoderRegistry:
    """Registry of password encoders keyed by type name."""

    def __init__(
        self,
        encoders: Mapping[Union[str, type], EncoderEntry],
        factories: Optional[EncoderFactories] = None,
        catalog: Optional[TypeCatalog] = None,
    ) -> None:
        """Initialize the registry.

        Parameters
        ----------
        encoders : Mapping[Union[str, type], EncoderEntry]
            Ordered ``key -> encoder or spec`` mapping. Class keys are
            stored under their fully-qualified name.
        factories : Optional[EncoderFactories]
            The factories used to build declarative entries.
        catalog : Optional[TypeCatalog]
            Ancestry of entities passed by name.

        Raises
        ------
        ConfigurationError
            If a key is not a class or a non empty string.
        """
        self._factories = factories or EncoderFactories()
        self._catalog = catalog if catalog is not None else TypeCatalog()
        self._slots: Dict[str, _Slot] = {}
        self._key_types: Dict[str, type] = {}
        for key, entry in encoders.items():
            if isinstance(key, type):
                name = self._catalog.add_type(key)
                self._key_types[name] = key
            elif isinstance(key, str) and key:
                name = key
            else:
                raise ConfigurationError(f"Invalid encoder key: {key!r}.")
            self._slots[name] = _Slot.from_entry(name, entry)

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        factories: Optional[EncoderFactories] = None,
    ) -> "EncoderRegistry":
        """Build a registry from loaded configuration.

        Parameters
        ----------
        config : Mapping[str, Any]
            ``{"encoders": {key: spec}, "types": {tag: [parents]}}``
        factories : Optional[EncoderFactories]
            Custom factories, if any.

        Returns
        -------
        EncoderRegistry
            The registry.

        Raises
        ------
        ConfigurationError
            If a section has the wrong shape.
        """
        encoders = config.get("encoders") or {}
        types = config.get("types") or {}
        if not isinstance(encoders, Mapping):
            raise ConfigurationError('"encoders" must be a mapping.')
        if not isinstance(types, Mapping):
            raise ConfigurationError('"types" must be a mapping.')
        try:
            catalog = TypeCatalog.from_mapping(types)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc
        return cls(encoders, factories=factories, catalog=catalog)

    @property
    def catalog(self) -> TypeCatalog:
        """The type catalog used for entities passed by name."""
        return self._catalog

    @property
    def factories(self) -> EncoderFactories:
        """The factories used to build declarative entries."""
        return self._factories

    def keys(self) -> List[str]:
        """Get the registry keys in registration order.

        Returns
        -------
        List[str]
            The keys.
        """
        return list(self._slots)

    def __contains__(self, key: object) -> bool:
        return key in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def is_realized(self, key: str) -> bool:
        """Check if the encoder of a key has been built.

        Parameters
        ----------
        key : str
            The registry key.

        Returns
        -------
        bool
            True if the key holds an encoder instance.

        Raises
        ------
        UnknownEncoderNameError
            If the key is not registered.
        """
        slot = self._slots.get(key)
        if slot is None:
            raise UnknownEncoderNameError(key)
        return slot.encoder is not None

    def _ancestry_of(self, entity: Any) -> Tuple[str, ...]:
        if isinstance(entity, str):
            return self._catalog.ancestry(entity)
        if isinstance(entity, type):
            return type_ancestry(entity)
        return type_ancestry(type(entity))

    def _is_subtype(self, entity_type: Optional[type], key: str) -> bool:
        key_type = self._key_types.get(key)
        if entity_type is None or key_type is None:
            return False
        return issubclass(entity_type, key_type)

    def selector_for(self, entity: Any) -> str:
        """Find the registry key to use for an entity.

        Parameters
        ----------
        entity : Any
            An entity instance, a class, or a type name.

        Returns
        -------
        str
            The selected registry key.

        Raises
        ------
        UnknownEncoderNameError
            If the entity names an encoder that is not registered.
        NoEncoderConfiguredError
            If no key matches the entity.
        """
        if not isinstance(entity, (str, type)) and isinstance(
            entity, EncoderAware
        ):
            name = entity.preferred_encoder_name()
            if name is not None:
                if name not in self._slots:
                    raise UnknownEncoderNameError(
                        str(name), describe_entity(entity)
                    )
                LOG.debug(
                    "Entity %s selected encoder %s",
                    describe_entity(entity),
                    name,
                )
                return name
        ancestry = self._ancestry_of(entity)
        entity_type: Optional[type] = None
        if not isinstance(entity, str):
            entity_type = entity if isinstance(entity, type) else type(entity)
        for key in self._slots:
            if key in ancestry or self._is_subtype(entity_type, key):
                LOG.debug(
                    "Matched encoder %s for %s", key, describe_entity(entity)
                )
                return key
        raise NoEncoderConfiguredError(describe_entity(entity))

    def realize(self, key: str) -> PasswordEncoder:
        """Get the encoder of a key, building it on first use.

        Parameters
        ----------
        key : str
            The registry key.

        Returns
        -------
        PasswordEncoder
            The (cached) encoder.

        Raises
        ------
        UnknownEncoderNameError
            If the key is not registered.
        InvalidEncoderSpecError
            If the encoder cannot be built; the entry stays unrealized.
        """
        slot = self._slots.get(key)
        if slot is None:
            raise UnknownEncoderNameError(key)
        encoder = slot.encoder
        if encoder is not None:
            return encoder
        with slot.lock:
            if slot.encoder is None:
                # spec is only cleared once the encoder is set
                spec: Mapping[str, Any] = slot.spec  # type: ignore[assignment]
                try:
                    built = self._factories.create(spec)
                except InvalidEncoderSpecError as exc:
                    LOG.error("Cannot build the encoder for %s: %s", key, exc)
                    raise
                slot.encoder = built
                slot.spec = None
                LOG.info(
                    "Realized %s encoder for %s", type(built).__name__, key
                )
            return slot.encoder

    def resolve(self, entity: Any) -> PasswordEncoder:
        """Get the encoder to use for an entity.

        Parameters
        ----------
        entity : Any
            An entity instance, a class, or a type name.

        Returns
        -------
        PasswordEncoder
            The encoder.
        """
        return self.realize(self.selector_for(entity))


__all__ = ["EncoderEntry", "EncoderRegistry", "describe_entity"]
