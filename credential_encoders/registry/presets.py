# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Algorithm presets.

A preset turns ``{"algorithm": <name>, <parameters>}`` into the normalized
``{"class": <kind>, "arguments": [...]}`` form. Names without a preset are
handed to the generic message digest encoder as its algorithm.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple

from ..errors import InvalidEncoderSpecError

MESSAGE_DIGEST_KIND = "message_digest"


@dataclass(frozen=True)
class Preset:
    """Target kind and ordered ``(parameter, default)`` pairs."""

    kind: str
    parameters: Tuple[Tuple[str, Any], ...]

    def arguments(self, spec: Mapping[str, Any]) -> List[Any]:
        """Collect the positional arguments from a spec.

        Parameters
        ----------
        spec : Mapping[str, Any]
            The declarative spec.

        Returns
        -------
        List[Any]
            The constructor arguments, in order.
        """
        return [spec.get(name, default) for name, default in self.parameters]


PRESETS: Dict[str, Preset] = {
    "plaintext": Preset("plaintext", (("ignore_case", False),)),
    "pbkdf2": Preset(
        "pbkdf2",
        (
            ("hash_algorithm", "sha512"),
            ("encode_as_base64", True),
            ("iterations", 5000),
            ("key_length", 40),
        ),
    ),
    "bcrypt": Preset("bcrypt", (("cost", 13),)),
    "argon2i": Preset(
        "argon2i",
        (
            ("memory_cost", None),
            ("time_cost", None),
            ("threads", None),
        ),
    ),
}

FALLBACK_PRESET = Preset(
    MESSAGE_DIGEST_KIND,
    (
        ("algorithm", None),
        ("encode_as_base64", True),
        ("iterations", 5000),
    ),
)


def get_preset(algorithm: str) -> Preset:
    """Get the preset for an algorithm name.

    Parameters
    ----------
    algorithm : str
        The algorithm name.

    Returns
    -------
    Preset
        The matching preset, or the message digest fallback.
    """
    return PRESETS.get(algorithm, FALLBACK_PRESET)


def expand_preset(spec: Mapping[str, Any]) -> Dict[str, Any]:
    """Expand an ``algorithm`` spec into ``class`` and ``arguments``.

    Parameters
    ----------
    spec : Mapping[str, Any]
        A spec with an ``algorithm`` entry.

    Returns
    -------
    Dict[str, Any]
        A new ``{"class": ..., "arguments": [...]}`` dict.

    Raises
    ------
    InvalidEncoderSpecError
        If the algorithm is missing or not a string.
    """
    algorithm = spec.get("algorithm")
    if not isinstance(algorithm, str) or not algorithm:
        raise InvalidEncoderSpecError(
            '"algorithm" must be a non empty string', spec, field="algorithm"
        )
    preset = get_preset(algorithm)
    return {"class": preset.kind, "arguments": preset.arguments(spec)}


__all__ = [
    "FALLBACK_PRESET",
    "MESSAGE_DIGEST_KIND",
    "PRESETS",
    "Preset",
    "expand_preset",
    "get_preset",
]
