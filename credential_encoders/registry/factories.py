# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

# pylint: disable=too-complex,broad-exception-caught
# flake8: noqa: C901
"""Encoder factories and construction from declarative specs."""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..encoders import (
    HAS_ARGON,
    Argon2iPasswordEncoder,
    BCryptPasswordEncoder,
    MessageDigestPasswordEncoder,
    PasswordEncoder,
    Pbkdf2PasswordEncoder,
    PlaintextPasswordEncoder,
)
from ..errors import InvalidEncoderSpecError
from .presets import MESSAGE_DIGEST_KIND, expand_preset

LOG = logging.getLogger(__name__)

EncoderFactory = Callable[..., PasswordEncoder]
"""Anything that builds an encoder from positional arguments."""


def _argon2i_factory(
    memory_cost: Optional[int] = None,
    time_cost: Optional[int] = None,
    threads: Optional[int] = None,
) -> PasswordEncoder:
    if not HAS_ARGON or Argon2iPasswordEncoder is None:  # pragma: no cover
        raise ValueError("Argon2i requires argon2-cffi to be installed.")
    return Argon2iPasswordEncoder(
        memory_cost=memory_cost, time_cost=time_cost, threads=threads
    )


def _is_missing(spec: Mapping[str, Any], key: str) -> bool:
    return spec.get(key) is None


class EncoderFactories:
    """Kind name to encoder factory table."""

    def __init__(self, register_defaults: bool = True) -> None:
        """Initialize the table.

        Parameters
        ----------
        register_defaults : bool
            Whether to register the built-in encoder kinds.
        """
        self._factories: Dict[str, EncoderFactory] = {}
        if register_defaults:
            self.register("plaintext", PlaintextPasswordEncoder)
            self.register("pbkdf2", Pbkdf2PasswordEncoder)
            self.register("bcrypt", BCryptPasswordEncoder)
            self.register("argon2i", _argon2i_factory)
            self.register(MESSAGE_DIGEST_KIND, MessageDigestPasswordEncoder)

    def register(self, kind: str, factory: EncoderFactory) -> None:
        """Register (or replace) the factory of a kind.

        Parameters
        ----------
        kind : str
            The kind name used as ``class`` in specs.
        factory : EncoderFactory
            The factory.

        Raises
        ------
        TypeError
            If the factory is not callable.
        """
        if not callable(factory):
            raise TypeError(f'The factory for "{kind}" is not callable.')
        self._factories[kind] = factory

    def get(self, kind: str) -> Optional[EncoderFactory]:
        """Get the factory of a kind.

        Parameters
        ----------
        kind : str
            The kind name.

        Returns
        -------
        Optional[EncoderFactory]
            The factory if registered.
        """
        return self._factories.get(kind)

    @property
    def kinds(self) -> List[str]:
        """List the registered kinds."""
        return list(self._factories)

    def __contains__(self, kind: object) -> bool:
        return kind in self._factories

    def create(self, spec: Mapping[str, Any]) -> PasswordEncoder:
        """Build an encoder from a declarative spec.

        Parameters
        ----------
        spec : Mapping[str, Any]
            Either ``{"class": ..., "arguments": [...]}`` or
            ``{"algorithm": ..., <parameters>}``.

        Returns
        -------
        PasswordEncoder
            The new encoder.

        Raises
        ------
        InvalidEncoderSpecError
            If the spec is incomplete, names an unknown kind or the
            factory fails.
        """
        config: Mapping[str, Any] = spec
        if not _is_missing(spec, "algorithm"):
            config = expand_preset(spec)
        if _is_missing(config, "class"):
            raise InvalidEncoderSpecError(
                '"class" must be set', config, field="class"
            )
        if _is_missing(config, "arguments"):
            raise InvalidEncoderSpecError(
                '"arguments" must be set', config, field="arguments"
            )
        arguments = config["arguments"]
        if not isinstance(arguments, (list, tuple)):
            raise InvalidEncoderSpecError(
                '"arguments" must be a list', config, field="arguments"
            )
        target = config["class"]
        factory: Optional[EncoderFactory]
        if isinstance(target, str):
            factory = self.get(target)
            if factory is None:
                raise InvalidEncoderSpecError(
                    f'Unknown encoder class "{target}"', config, field="class"
                )
        elif callable(target):
            factory = target
        else:
            raise InvalidEncoderSpecError(
                '"class" must be a kind name or a callable',
                config,
                field="class",
            )
        try:
            encoder = factory(*arguments)
        except Exception as exc:
            raise InvalidEncoderSpecError(
                f"Cannot create the encoder ({exc})", config
            ) from exc
        if not isinstance(encoder, PasswordEncoder):
            raise InvalidEncoderSpecError(
                f"{type(encoder).__name__} is not a password encoder", config
            )
        LOG.debug("Created %s", type(encoder).__name__)
        return encoder


__all__ = ["EncoderFactories", "EncoderFactory"]
