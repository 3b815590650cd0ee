# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Credential encoders settings module."""

import logging
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from ..errors import ConfigurationError
from ._common import DOT_ENV_PATH, ENV_PREFIX
from ._encoders import get_config_file, merge_config, read_config_file

LOG = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings class."""

    log_level: str = "INFO"
    config_file: Optional[str] = Field(default_factory=get_config_file)
    # inline entries, applied after the ones of the config file
    encoders: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    types: Dict[str, List[str]] = Field(default_factory=dict)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        cli_parse_args=False,  # we use typer
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, value: Any) -> str:
        """Validate the log level.

        Parameters
        ----------
        value : Any
            The value to validate

        Returns
        -------
        str
            The upper-cased log level

        Raises
        ------
        ValueError
            If the log level is not a known one
        """
        level = str(value).upper()
        if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"Invalid log level: {value}")
        return level

    @classmethod
    def load(cls, **overrides: Any) -> "Settings":
        """Load the settings.

        Parameters
        ----------
        **overrides : Any
            Values taking precedence over the environment.

        Returns
        -------
        Settings
            The settings instance

        Raises
        ------
        ConfigurationError
            If the environment holds invalid values.
        """
        if DOT_ENV_PATH.exists():
            load_dotenv(DOT_ENV_PATH, override=False)
        values = {key: value for key, value in overrides.items() if value}
        try:
            return cls(**values)
        except (ValidationError, SettingsError) as exc:
            raise ConfigurationError(f"Invalid settings: {exc}") from exc

    def load_config(self) -> Dict[str, Dict[str, Any]]:
        """Load the encoders configuration.

        The configuration file (if any) comes first, inline
        ``encoders`` and ``types`` are merged on top of it.

        Returns
        -------
        Dict[str, Dict[str, Any]]
            ``{"encoders": {...}, "types": {...}}``
        """
        sources = []
        if self.config_file:
            LOG.debug("Loading encoders from %s", self.config_file)
            sources.append(read_config_file(self.config_file))
        sources.append({"encoders": self.encoders, "types": self.types})
        return merge_config(*sources)
