# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Encoder related configuration.

Environment variables (with prefix CREDENTIAL_ENCODERS_)
--------------------------------------------------------
CONFIG_FILE (str) # default: None
ENCODERS (json object) # default: {}
TYPES (json object) # default: {}

Command line arguments (no prefix)
----------------------------------
--config-file (str)

The configuration file is a json object::

    {
        "encoders": {"app.models.AdminUser": {"algorithm": "bcrypt", "cost": 12}},
        "types": {"app.models.SuperAdmin": ["app.models.AdminUser"]}
    }
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping

from ..errors import ConfigurationError
from ._common import get_value


def get_config_file() -> str | None:
    """Get the path of the encoders configuration file.

    Returns
    -------
    str | None
        The configuration file path
    """
    value = get_value("--config-file", "CONFIG_FILE", str, None)
    if not value:  # skip empty strings
        return None
    return value


def _section(data: Mapping[str, Any], name: str, source: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f'"{name}" must be an object in {source}.')
    return section


def read_config_file(path: str | Path) -> Dict[str, Dict[str, Any]]:
    """Read the encoders configuration file.

    Parameters
    ----------
    path : str | Path
        The json file to read.

    Returns
    -------
    Dict[str, Dict[str, Any]]
        The ``encoders`` and ``types`` sections (in file order).

    Raises
    ------
    ConfigurationError
        If the file cannot be read or has the wrong shape.
    """
    file_path = Path(path)
    try:
        with file_path.open("r", encoding="utf-8") as f_open:
            data = json.load(f_open)
    except OSError as exc:
        raise ConfigurationError(
            f"Cannot read the encoders configuration {file_path}: {exc}"
        ) from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"Invalid json in the encoders configuration {file_path}: {exc}"
        ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{file_path} must contain a json object.")
    types = _section(data, "types", str(file_path))
    for tag, parents in types.items():
        if not isinstance(parents, list):
            raise ConfigurationError(
                f'The parents of "{tag}" must be a list in {file_path}.'
            )
    return {
        "encoders": _section(data, "encoders", str(file_path)),
        "types": types,
    }


def merge_config(
    *sources: Mapping[str, Mapping[str, Any]],
) -> Dict[str, Dict[str, Any]]:
    """Merge configuration sections, later sources winning.

    Keys keep the position of their first appearance.

    Parameters
    ----------
    *sources : Mapping[str, Mapping[str, Any]]
        The ``{"encoders": ..., "types": ...}`` sources.

    Returns
    -------
    Dict[str, Dict[str, Any]]
        The merged configuration.
    """
    encoders: Dict[str, Any] = {}
    types: Dict[str, List[str]] = {}
    for source in sources:
        encoders.update(source.get("encoders", {}))
        types.update(source.get("types", {}))
    return {"encoders": encoders, "types": types}
