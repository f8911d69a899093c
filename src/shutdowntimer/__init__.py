"""Validated access to the shutdown timer's persisted settings."""

from shutdowntimer.errors import (
    InvalidArgumentError,
    NotWritableError,
    SchemaNotFoundError,
    SettingsError,
    WriteFailedError,
)
from shutdowntimer.keys import ConfigKey
from shutdowntimer.store import SettingsStore

__all__ = [
    "ConfigKey",
    "InvalidArgumentError",
    "NotWritableError",
    "SchemaNotFoundError",
    "SettingsError",
    "SettingsStore",
    "WriteFailedError",
]
