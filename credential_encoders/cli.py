# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

"""Command line interface module."""

# flake8: noqa: E501
# pylint: disable=too-many-arguments,too-many-positional-arguments
import logging
import logging.config
from typing import NoReturn, Optional

import typer

from credential_encoders._logging import LogLevel, get_log_level, get_logging_config
from credential_encoders._version import __version__
from credential_encoders.config import Settings
from credential_encoders.errors import ConfigurationError
from credential_encoders.hasher import UserPasswordHasher
from credential_encoders.registry import PRESETS, EncoderRegistry
from credential_encoders.registry.presets import FALLBACK_PRESET

APP_NAME = "credential-encoders"
APP_HELP = "Resolve and use the password encoder configured for an entity type"
CONFIG_ERROR_EXIT_CODE = 2

LOG = logging.getLogger(__name__)

app = typer.Typer(
    name=APP_NAME,
    help=APP_HELP,
    add_completion=False,
    no_args_is_help=True,
    add_help_option=True,
    pretty_exceptions_short=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{APP_NAME} {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Optional[str] = typer.Option(
        None,
        "--config-file",
        "-c",
        help="Json file with the encoders and types configuration",
    ),
    log_level: LogLevel = typer.Option(
        default=get_log_level(),
        help="The log level",
        case_sensitive=False,
    ),
    version: bool = typer.Option(  # pylint: disable=unused-argument
        False,
        "--version",
        help="Show the version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Credential encoders command line interface."""
    logging.config.dictConfig(get_logging_config(log_level.value))
    try:
        settings = Settings.load(
            config_file=config_file, log_level=log_level.value
        )
    except ConfigurationError as exc:
        _fail(exc)
    ctx.obj = settings


def _fail(exc: ConfigurationError) -> NoReturn:
    typer.secho(str(exc), fg=typer.colors.RED, err=True)
    raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE)


def _get_hasher(ctx: typer.Context) -> UserPasswordHasher:
    settings: Settings = ctx.obj
    try:
        registry = EncoderRegistry.from_config(settings.load_config())
    except ConfigurationError as exc:
        _fail(exc)
    LOG.debug("Loaded %d encoder(s)", len(registry))
    return UserPasswordHasher(registry)


@app.command()
def resolve(
    ctx: typer.Context,
    entity: str = typer.Argument(..., help="The entity type name"),
) -> None:
    """Show the encoder selected for an entity type."""
    registry = _get_hasher(ctx).registry
    try:
        key = registry.selector_for(entity)
        encoder = registry.realize(key)
    except ConfigurationError as exc:
        _fail(exc)
    typer.echo(f"{key}: {type(encoder).__name__}")


@app.command(name="hash")
def hash_(
    ctx: typer.Context,
    entity: str = typer.Argument(..., help="The entity type name"),
    password: str = typer.Option(
        ...,
        prompt=True,
        hide_input=True,
        help="The plain password",
    ),
) -> None:
    """Hash a password with the encoder of an entity type."""
    hasher = _get_hasher(ctx)
    try:
        typer.echo(hasher.hash_password(entity, password))
    except ConfigurationError as exc:
        _fail(exc)
    except ValueError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def verify(
    ctx: typer.Context,
    entity: str = typer.Argument(..., help="The entity type name"),
    stored: str = typer.Argument(..., help="The stored hash"),
    password: str = typer.Option(
        ...,
        prompt=True,
        hide_input=True,
        help="The plain password",
    ),
) -> None:
    """Verify a password with the encoder of an entity type."""
    hasher = _get_hasher(ctx)
    try:
        valid = hasher.is_password_valid(entity, password, stored)
    except ConfigurationError as exc:
        _fail(exc)
    if not valid:
        typer.echo("invalid")
        raise typer.Exit(code=1)
    typer.echo("valid")
    if hasher.needs_rehash(entity, stored):
        typer.echo("needs rehash")


@app.command()
def presets() -> None:
    """List the algorithm presets and their arguments."""
    for algorithm, preset in PRESETS.items():
        arguments = ", ".join(
            f"{name}={default!r}" for name, default in preset.parameters
        )
        typer.echo(f"{algorithm} -> {preset.kind}({arguments})")
    arguments = ", ".join(
        f"{name}={default!r}" for name, default in FALLBACK_PRESET.parameters
    )
    typer.echo(f"<other> -> {FALLBACK_PRESET.kind}({arguments})")


if __name__ == "__main__":
    app()
