# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Errors raised while resolving, building or using password encoders."""

import json
from typing import Any, Mapping, Optional


class ConfigurationError(RuntimeError):
    """Base class for encoder misconfiguration (never transient)."""


class UnknownEncoderNameError(ConfigurationError):
    """An entity asked for an encoder name that is not configured."""

    def __init__(self, name: str, descriptor: Optional[str] = None) -> None:
        self.name = name
        self.descriptor = descriptor
        message = f'The encoder "{name}" was not configured'
        if descriptor:
            message += f' (requested by "{descriptor}")'
        super().__init__(message + ".")


class NoEncoderConfiguredError(ConfigurationError):
    """No registry key matches the entity's type or identifier."""

    def __init__(self, descriptor: str) -> None:
        self.descriptor = descriptor
        super().__init__(
            f'No encoder has been configured for account "{descriptor}".'
        )


def render_spec(spec: Any) -> str:
    """Render a declarative spec for error messages.

    Parameters
    ----------
    spec : Any
        The spec to render.

    Returns
    -------
    str
        The JSON representation (non JSON values use their repr).
    """
    if isinstance(spec, Mapping):
        spec = dict(spec)
    try:
        return json.dumps(spec, default=repr, sort_keys=False)
    except (TypeError, ValueError):  # pragma: no cover
        return repr(spec)


class InvalidEncoderSpecError(ConfigurationError):
    """A declarative spec cannot be turned into an encoder."""

    def __init__(
        self,
        reason: str,
        spec: Mapping[str, Any] | Any,
        field: Optional[str] = None,
    ) -> None:
        self.reason = reason
        self.spec = spec
        self.field = field
        super().__init__(f"{reason} in {render_spec(spec)}.")


class BadCredentialsError(ValueError):
    """The plain credential was rejected by an encoder."""


__all__ = [
    "BadCredentialsError",
    "ConfigurationError",
    "InvalidEncoderSpecError",
    "NoEncoderConfiguredError",
    "UnknownEncoderNameError",
    "render_spec",
]
