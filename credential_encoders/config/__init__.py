# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.
"""Configuration module for the credential encoders."""

from ._common import ENV_PREFIX, ROOT_DIR, get_value
from ._encoders import get_config_file, merge_config, read_config_file
from .settings import Settings
from .settings_manager import SettingsManager

__all__ = [
    "Settings",
    "SettingsManager",
    "ENV_PREFIX",
    "ROOT_DIR",
    "get_config_file",
    "get_value",
    "merge_config",
    "read_config_file",
]
