# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Shared helpers for the salted password encoders."""

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Optional

from ..errors import BadCredentialsError

MAX_PASSWORD_LENGTH = 4096

_SALTED_RE = re.compile(
    r"^([a-z0-9]+)_([A-Za-z0-9_.-]+)\$i=(\d+)\$([A-Za-z0-9+/=]+)\$([A-Za-z0-9+/=]+)$"  # pylint: disable=line-too-long # noqa: E501
)


def is_password_too_long(plain: str) -> bool:
    """Check if the plain password exceeds the accepted length.

    Parameters
    ----------
    plain : str
        The plain password.

    Returns
    -------
    bool
        True if the password is too long.
    """
    return len(plain) > MAX_PASSWORD_LENGTH


def ensure_password_length(plain: str) -> None:
    """Reject passwords that are too long to hash.

    Parameters
    ----------
    plain : str
        The plain password.

    Raises
    ------
    BadCredentialsError
        If the password is longer than MAX_PASSWORD_LENGTH.
    """
    if is_password_too_long(plain):
        raise BadCredentialsError("Invalid password.")


def encode_bytes(raw: bytes, as_base64: bool) -> str:
    """Render derived bytes as base64 or hex.

    Parameters
    ----------
    raw : bytes
        The bytes to render.
    as_base64 : bool
        Whether to use base64 (hex otherwise).

    Returns
    -------
    str
        The rendered text.
    """
    if as_base64:
        return base64.b64encode(raw).decode("ascii")
    return raw.hex()


def decode_bytes(text: str, as_base64: bool) -> Optional[bytes]:
    """Decode text produced by ``encode_bytes``.

    Parameters
    ----------
    text : str
        The rendered text.
    as_base64 : bool
        Whether the text is base64 (hex otherwise).

    Returns
    -------
    Optional[bytes]
        The raw bytes, or None if the text is malformed.
    """
    try:
        if as_base64:
            return base64.b64decode(text.encode("ascii"), validate=True)
        return bytes.fromhex(text)
    except (binascii.Error, ValueError):
        return None


@dataclass(frozen=True)
class SaltedHash:
    """A parsed ``<scheme>_<alg>$i=<iterations>$<salt>$<key>`` string."""

    scheme: str
    algorithm: str
    iterations: int
    salt: bytes
    key: str

    def format(self) -> str:
        """Render the stored representation.

        Returns
        -------
        str
            The stored hash string.
        """
        salt = base64.b64encode(self.salt).decode("ascii")
        return (
            f"{self.scheme}_{self.algorithm}$i={self.iterations}$"
            f"{salt}${self.key}"
        )

    @classmethod
    def parse(cls, stored: str, scheme: str) -> Optional["SaltedHash"]:
        """Parse a stored hash of the given scheme.

        Parameters
        ----------
        stored : str
            The stored hash string.
        scheme : str
            The expected scheme prefix (e.g. ``pbkdf2``).

        Returns
        -------
        Optional[SaltedHash]
            The parsed hash, or None if it does not match.
        """
        match = _SALTED_RE.match(stored)
        if not match or match.group(1) != scheme:
            return None
        salt = decode_bytes(match.group(4), as_base64=True)
        if salt is None:
            return None
        return cls(
            scheme=scheme,
            algorithm=match.group(2),
            iterations=int(match.group(3)),
            salt=salt,
            key=match.group(5),
        )


__all__ = [
    "MAX_PASSWORD_LENGTH",
    "SaltedHash",
    "decode_bytes",
    "encode_bytes",
    "ensure_password_length",
    "is_password_too_long",
]
