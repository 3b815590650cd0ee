# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Password encoders (hash and verify strategies)."""

from ._argon_encoder import HAS_ARGON, Argon2iPasswordEncoder
from ._base import MAX_PASSWORD_LENGTH
from ._bcrypt_encoder import BCryptPasswordEncoder
from ._digest_encoder import MessageDigestPasswordEncoder
from ._pbkdf2_encoder import Pbkdf2PasswordEncoder
from ._plaintext_encoder import PlaintextPasswordEncoder
from .protocol import EncoderAware, PasswordEncoder, SupportsRehash

__all__ = [
    "HAS_ARGON",
    "MAX_PASSWORD_LENGTH",
    "Argon2iPasswordEncoder",
    "BCryptPasswordEncoder",
    "EncoderAware",
    "MessageDigestPasswordEncoder",
    "PasswordEncoder",
    "Pbkdf2PasswordEncoder",
    "PlaintextPasswordEncoder",
    "SupportsRehash",
]
