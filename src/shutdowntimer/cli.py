"""Shutdown timer settings CLI.

This module provides a command-line interface for inspecting and
changing the persisted shutdown timer settings, plus configuration
helpers.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Final, Optional

import typer

from shutdowntimer.config import StoreConfig
from shutdowntimer.errors import SettingsError
from shutdowntimer.keys import ConfigKey, SettingValue, spec_for
from shutdowntimer.store import SettingsStore

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Shutdown timer settings CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "shutdowntimer.cli"

# Options shared by the commands
CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
KEY_ARGUMENT = typer.Argument(..., help="Settings key (delay, elapsed-time, forced, action)")
VALUE_ARGUMENT = typer.Argument(..., help="New value")

_TRUE_WORDS: Final = {"true", "yes", "on", "1"}
_FALSE_WORDS: Final = {"false", "no", "off", "0"}


def _open_store(config: Optional[Path], debug: bool) -> SettingsStore:
    cfg = StoreConfig.load(config)
    logging.basicConfig(
        level=logging.DEBUG if debug else getattr(logging, cfg.log_level),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    return SettingsStore(config=cfg)


def _fail(exc: Exception) -> typer.Exit:
    typer.secho(str(exc), fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


def parse_value(key: ConfigKey | str, raw: str) -> SettingValue:
    """Convert command-line text to the type of ``key``.

    Raises:
        InvalidArgumentError: If ``key`` is unknown
        ValueError: If ``raw`` cannot be read as the key's type
    """
    spec = spec_for(key)
    if spec.value_type is bool:
        word = raw.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"'{raw}' is not a boolean (use true/false)")
    return int(raw)


def _format(value: SettingValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@app.command()
def show(config: Optional[Path] = CONFIG_OPTION, debug: bool = DEBUG_OPTION) -> None:
    """Print every setting."""
    try:
        store = _open_store(config, debug)
    except (SettingsError, RuntimeError, FileNotFoundError) as exc:
        raise _fail(exc) from exc

    for key, value in store.snapshot().items():
        typer.echo(f"{key.value}: {_format(value)}")


@app.command()
def get(
    key: str = KEY_ARGUMENT,
    config: Optional[Path] = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Print the value of one setting."""
    try:
        store = _open_store(config, debug)
        typer.echo(_format(store.get(key)))
    except (SettingsError, RuntimeError, FileNotFoundError) as exc:
        raise _fail(exc) from exc


@app.command("set")
def set_value(
    key: str = KEY_ARGUMENT,
    value: str = VALUE_ARGUMENT,
    config: Optional[Path] = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Change one setting."""
    try:
        store = _open_store(config, debug)
        store.set(key, parse_value(key, value))
    except (SettingsError, ValueError, RuntimeError, FileNotFoundError) as exc:
        raise _fail(exc) from exc
    typer.secho(f"{key} = {_format(store.get(key))}", fg=typer.colors.GREEN)


@app.command()
def reset(
    key: str = KEY_ARGUMENT,
    config: Optional[Path] = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Restore the default of one setting."""
    try:
        store = _open_store(config, debug)
        store.reset(key)
    except (SettingsError, RuntimeError, FileNotFoundError) as exc:
        raise _fail(exc) from exc
    typer.secho(f"{key} = {_format(store.get(key))}", fg=typer.colors.GREEN)


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        StoreConfig.load(file)
        typer.echo("✅ Config valid")
    except (RuntimeError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


# ───────────────────────── module entrypoint ────────────────────────────────
def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
