"""Typed, validated access to the shutdown timer settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Final, Optional

from shutdowntimer.backends import SettingsBackend, YamlFileBackend
from shutdowntimer.config import StoreConfig
from shutdowntimer.constants import SCHEMA_DIR, SCHEMA_ID
from shutdowntimer.errors import (
    InvalidArgumentError,
    NotWritableError,
    SchemaNotFoundError,
    WriteFailedError,
)
from shutdowntimer.keys import KEY_SPECS, ConfigKey, SettingValue, spec_for
from shutdowntimer.schema import Schema, SchemaSource

logger: Final = logging.getLogger(__name__)


class SettingsStore:
    """Reads and writes the settings of the shutdown timer.

    The store owns a single handle to the backing store for its whole
    lifetime. Create one instance and pass it to whatever needs
    settings access; nothing here is global.

    Writes follow the same sequence for every key:

    1. validate the value (``InvalidArgumentError``, nothing touched)
    2. ask the backend whether the key is writable right now
       (``NotWritableError``, no write attempted)
    3. write (``WriteFailedError`` if the backend rejects it)
    4. flush, so the value is durable when the setter returns
       (``WriteFailedError`` if persisting fails)

    Examples:
        store = SettingsStore()
        store.set_delay(15)
        store.bind_key(ConfigKey.DELAY, lambda minutes: print(minutes))
    """

    def __init__(
        self,
        backend: Optional[SettingsBackend] = None,
        config: Optional[StoreConfig] = None,
        schema_id: str = SCHEMA_ID,
    ) -> None:
        """Bind the store to its backend.

        Args:
            backend: Backing store to use; a YamlFileBackend described by
                ``config`` is created when omitted
            config: Runtime configuration for the default backend; loaded
                with ``StoreConfig.load()`` when omitted. Ignored when
                ``backend`` is given.
            schema_id: Schema to look up when creating the default backend

        Raises:
            SchemaNotFoundError: If the schema cannot be found
            FileNotFoundError: If ``SHUTDOWNTIMER_CONFIG`` names a missing file
            RuntimeError: If the schema does not declare the expected keys
            TypeError: If ``backend`` does not implement SettingsBackend
        """
        if backend is None:
            config = config or StoreConfig.load()
            schema = self.find_schema(schema_id, config.schema_dir)
            backend = YamlFileBackend(schema, config.store_path, config.locked_keys)
        elif not isinstance(backend, SettingsBackend):
            raise TypeError(f"{type(backend).__name__} is not a SettingsBackend")

        self._check_schema(backend.schema)
        self._backend = backend
        logger.debug("Settings store bound to schema %s", backend.schema.id)

    @staticmethod
    def find_schema(schema_id: str = SCHEMA_ID, schema_dir: Optional[Path] = None) -> Schema:
        """Look up a schema, bundled directory first.

        Args:
            schema_id: Identifier of the schema
            schema_dir: Extra directory searched before the bundled one

        Returns:
            The schema

        Raises:
            SchemaNotFoundError: If no source defines ``schema_id``
        """
        source = SchemaSource.from_directory(SCHEMA_DIR, parent=SchemaSource.default())
        if schema_dir is not None:
            source = SchemaSource.from_directory(schema_dir, parent=source)

        schema = source.lookup(schema_id)
        if schema is None:
            raise SchemaNotFoundError(schema_id)
        return schema

    @staticmethod
    def _check_schema(schema: Schema) -> None:
        for key, spec in KEY_SPECS.items():
            declared = schema.keys.get(key.value)
            if declared is None:
                raise RuntimeError(f"Schema {schema.id} does not declare key '{key.value}'")
            if declared.python_type is not spec.value_type:
                raise RuntimeError(
                    f"Schema {schema.id} declares '{key.value}' as {declared.type}, "
                    f"expected {spec.value_type.__name__}"
                )

    # ---- generic access ----
    def get(self, key: ConfigKey | str) -> SettingValue:
        """Current value of ``key``.

        Raises:
            InvalidArgumentError: If ``key`` is not a settings key
        """
        spec = spec_for(key)
        return self._backend.get_value(spec.key.value)

    def set(self, key: ConfigKey | str, value: Any) -> None:
        """Validate, write and flush a new value for ``key``.

        Raises:
            InvalidArgumentError: If ``key`` is unknown or ``value`` is invalid
            NotWritableError: If the backend does not allow writing ``key``
            WriteFailedError: If the backend could not store the value
        """
        spec = spec_for(key)
        value = spec.validate(value)
        self._write(spec.key.value, lambda name: self._backend.set_value(name, value))
        logger.debug("Set '%s' to %r", spec.key.value, value)

    def reset(self, key: ConfigKey | str) -> None:
        """Restore the schema default of ``key``.

        Raises:
            InvalidArgumentError: If ``key`` is unknown
            NotWritableError: If the backend does not allow writing ``key``
            WriteFailedError: If the backend could not store the value
        """
        name = spec_for(key).key.value
        self._write(name, self._backend.reset)
        logger.debug("Reset '%s' to its default", name)

    def snapshot(self) -> dict[ConfigKey, SettingValue]:
        """All current values, keyed by ConfigKey."""
        return {key: self._backend.get_value(key.value) for key in ConfigKey}

    def _write(self, name: str, write: Callable[[str], bool]) -> None:
        if not self._backend.is_writable(name):
            raise NotWritableError(name)
        if not write(name):
            raise WriteFailedError(name)
        try:
            self._backend.sync()
        except OSError as exc:
            raise WriteFailedError(name, exc) from exc

    # ---- forced ----
    def get_forced(self) -> bool:
        """Whether the action is forced."""
        return bool(self._backend.get_value(ConfigKey.FORCED.value))

    def set_forced(self, status: bool) -> None:
        """Set the forced option.

        Raises:
            InvalidArgumentError: If ``status`` is not a bool
        """
        self.set(ConfigKey.FORCED, status)

    # ---- action ----
    def get_action(self) -> int:
        """Action to take when the timer fires."""
        return int(self._backend.get_value(ConfigKey.ACTION.value))

    def set_action(self, action: int) -> None:
        """Set the action to take when the timer fires.

        Raises:
            InvalidArgumentError: If ``action`` is not an integer >= 0
        """
        self.set(ConfigKey.ACTION, action)

    # ---- delay ----
    def get_delay(self) -> int:
        """Delay until the timer fires, in minutes."""
        return int(self._backend.get_value(ConfigKey.DELAY.value))

    def set_delay(self, delay: int) -> None:
        """Set the delay in minutes.

        Raises:
            InvalidArgumentError: If ``delay`` is not an integer > 1
        """
        self.set(ConfigKey.DELAY, delay)

    # ---- elapsed time ----
    def get_elapsed_time(self) -> int:
        """Minutes elapsed since the current timeout interval was set."""
        return int(self._backend.get_value(ConfigKey.ELAPSED_TIME.value))

    def set_elapsed_time(self, time: int) -> None:
        """Set the minutes elapsed since the current timeout interval was set.

        Raises:
            InvalidArgumentError: If ``time`` is not an integer >= 0
        """
        self.set(ConfigKey.ELAPSED_TIME, time)

    # ---- notifications ----
    def bind_key(self, key: ConfigKey | str, callback: Callable[[SettingValue], None]) -> None:
        """Call ``callback`` with the new value each time ``key`` changes.

        The callback receives the value already decoded to the key's type
        (``int`` or ``bool``). Callbacks for the same key run in the order
        they were bound. Bindings are permanent.

        Args:
            key: Key to watch
            callback: Function called with the new value

        Raises:
            InvalidArgumentError: If ``key`` is not a non-empty string naming a
                schema key, or ``callback`` is not callable
        """
        if not isinstance(key, str) or not key:
            raise InvalidArgumentError(f"The 'key' should be a non-empty string. Got: {key!r}")
        if not callable(callback):
            raise InvalidArgumentError(f"'callback' needs to be callable. Got: {callback!r}")

        name = key.value if isinstance(key, ConfigKey) else key
        if not self._backend.schema.has_key(name):
            raise InvalidArgumentError(f"Unknown settings key: {name!r}", name)

        self._backend.connect(name, callback)
        logger.debug("Bound callback %r to '%s'", callback, name)
