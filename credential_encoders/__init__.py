# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Resolve, build and cache the password encoder of an entity."""

from ._version import __version__
from .encoders import (
    Argon2iPasswordEncoder,
    BCryptPasswordEncoder,
    EncoderAware,
    MessageDigestPasswordEncoder,
    PasswordEncoder,
    Pbkdf2PasswordEncoder,
    PlaintextPasswordEncoder,
    SupportsRehash,
)
from .errors import (
    BadCredentialsError,
    ConfigurationError,
    InvalidEncoderSpecError,
    NoEncoderConfiguredError,
    UnknownEncoderNameError,
)
from .hasher import UserPasswordHasher
from .registry import (
    EncoderFactories,
    EncoderRegistry,
    TypeCatalog,
    expand_preset,
)

__all__ = [
    "__version__",
    "Argon2iPasswordEncoder",
    "BCryptPasswordEncoder",
    "BadCredentialsError",
    "ConfigurationError",
    "EncoderAware",
    "EncoderFactories",
    "EncoderRegistry",
    "InvalidEncoderSpecError",
    "MessageDigestPasswordEncoder",
    "NoEncoderConfiguredError",
    "PasswordEncoder",
    "Pbkdf2PasswordEncoder",
    "PlaintextPasswordEncoder",
    "SupportsRehash",
    "TypeCatalog",
    "UnknownEncoderNameError",
    "UserPasswordHasher",
    "expand_preset",
]
