# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Encoder registry: selection, presets and lazy construction."""

from .ancestry import TypeCatalog, type_ancestry, type_name
from .encoder_registry import EncoderEntry, EncoderRegistry, describe_entity
from .factories import EncoderFactories, EncoderFactory
from .presets import PRESETS, Preset, expand_preset, get_preset

__all__ = [
    "PRESETS",
    "EncoderEntry",
    "EncoderFactories",
    "EncoderFactory",
    "EncoderRegistry",
    "Preset",
    "TypeCatalog",
    "describe_entity",
    "expand_preset",
    "get_preset",
    "type_ancestry",
    "type_name",
]
