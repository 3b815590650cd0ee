# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.
# pylint: disable=missing-return-doc,missing-yield-doc,missing-param-doc
"""Shared fixtures for tests."""

import json
import os
import sys
from collections.abc import Generator
from pathlib import Path
from typing import Any, Callable, Dict
from unittest.mock import patch

import pytest

from credential_encoders.config import ENV_PREFIX, SettingsManager

DOT_ENV_PATH_DOTTED = "credential_encoders.config.settings.DOT_ENV_PATH"
HERE = Path(__file__).parent

WriteConfigCallable = Callable[[Dict[str, Any]], Path]


@pytest.fixture(scope="function", autouse=True, name="isolated_env")
def isolated_env_fixture(tmp_path: Path) -> Generator[None, None, None]:
    """Run each test without prefixed env vars, CLI args or a .env file."""
    original_env = {
        key: value for key, value in os.environ.items()
        if key.startswith(ENV_PREFIX)
    }
    for key in original_env:
        os.environ.pop(key, None)
    original_argv = sys.argv[:]
    sys.argv = [str(HERE / "conftest.py")]
    SettingsManager.reset_settings()
    with patch(DOT_ENV_PATH_DOTTED, tmp_path / ".env"):
        yield
    SettingsManager.reset_settings()
    sys.argv = original_argv
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            os.environ.pop(key, None)
    os.environ.update(original_env)


@pytest.fixture(name="write_config")
def write_config_fixture(tmp_path: Path) -> WriteConfigCallable:
    """Get a callable writing an encoders configuration file."""

    def _write(data: Dict[str, Any]) -> Path:
        path = tmp_path / "encoders.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
