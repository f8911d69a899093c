"""Backing store persisted to a YAML file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Final, Iterable

import yaml

from shutdowntimer.backends.dispatch import ChangeHandler, ChangeNotifier
from shutdowntimer.keys import SettingValue
from shutdowntimer.schema import Schema
from shutdowntimer.utils.file import atomic_write_text, is_path_writable

logger: Final = logging.getLogger(__name__)


class YamlFileBackend:
    """Stores values in a YAML file, one mapping per schema id.

    The file looks like::

        org.gnome.shell.extensions.shutdowntimer:
          delay: 60
          forced: false

    Keys missing from the file read as the schema default. Writes are
    applied in memory (and notified) immediately and reach the disk on
    :meth:`sync`. If the sync fails, every pending write is rolled back
    to the last values on disk. Sections belonging to other schemas are
    preserved.

    A key is writable unless it is listed in ``locked_keys`` or the file
    cannot be written by this process.
    """

    def __init__(self, schema: Schema, path: Path, locked_keys: Iterable[str] = ()) -> None:
        """Initialize and read the current file contents.

        Args:
            schema: Schema the store is bound to
            path: YAML file holding the values (created on first sync)
            locked_keys: Keys administratively locked against writes

        Raises:
            RuntimeError: If the file exists but cannot be parsed
        """
        self.schema = schema
        self.path = Path(path).expanduser()
        self.locked_keys = frozenset(locked_keys)
        self._notifier = ChangeNotifier()
        self._document, self._values = self._load()
        # Last values known to be on disk
        self._durable: dict[str, SettingValue] = dict(self._values)
        self._dirty = False

    # ---- backend protocol ----
    def get_value(self, key: str) -> SettingValue:
        if not self.schema.has_key(key):
            raise KeyError(key)
        return self._values[key]

    def set_value(self, key: str, value: SettingValue) -> bool:
        if not self.is_writable(key) or not self.schema.accepts(key, value):
            return False
        self._dirty = True
        self._store(key, value)
        return True

    def is_writable(self, key: str) -> bool:
        if not self.schema.has_key(key) or key in self.locked_keys:
            return False
        return is_path_writable(self.path)

    def reset(self, key: str) -> bool:
        if not self.schema.has_key(key):
            return False
        return self.set_value(key, self.schema.default(key))

    def connect(self, key: str, handler: ChangeHandler) -> None:
        if not self.schema.has_key(key):
            raise KeyError(key)
        self._notifier.connect(key, handler)

    def sync(self) -> None:
        """Write pending changes to disk.

        Raises:
            OSError: If the file cannot be written; pending writes are
                rolled back (and notified) before this is raised
        """
        if not self._dirty:
            return
        document = dict(self._document)
        document[self.schema.id] = dict(self._values)
        try:
            atomic_write_text(self.path, yaml.safe_dump(document, sort_keys=False))
        except OSError:
            logger.warning("Could not write %s, discarding pending changes", self.path)
            self._dirty = False
            self._replace_values(dict(self._durable))
            raise
        self._document = document
        self._durable = dict(self._values)
        self._dirty = False
        logger.debug("Synced settings to %s", self.path)

    # ---- external changes ----
    def reload(self) -> list[str]:
        """Re-read the file and notify keys changed by another writer.

        Returns:
            Names of the keys whose value changed

        Raises:
            RuntimeError: If the file cannot be parsed; current values are kept
        """
        document, values = self._load()
        self._document = document
        self._durable = dict(values)
        self._dirty = False
        return self._replace_values(values)

    # ---- helpers ----
    def _load(self) -> tuple[dict[str, Any], dict[str, SettingValue]]:
        values = self.schema.defaults()
        if not self.path.exists():
            return {}, values

        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise RuntimeError(f"Unable to read settings file {self.path}: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise RuntimeError(f"Settings file {self.path} must contain a mapping")

        section = data.get(self.schema.id) or {}
        if not isinstance(section, dict):
            raise RuntimeError(f"Section '{self.schema.id}' in {self.path} must be a mapping")

        for key, value in section.items():
            if self.schema.accepts(key, value):
                values[key] = value
            else:
                # Unknown keys and mistyped values fall back to the default
                logger.warning("Ignoring stored value %r for key '%s'", value, key)
        return data, values

    def _replace_values(self, values: dict[str, SettingValue]) -> list[str]:
        changed = [key for key, value in values.items() if self._values.get(key) != value]
        self._values = values
        for key in changed:
            self._notifier.emit(key, values[key])
        return changed

    def _store(self, key: str, value: SettingValue) -> None:
        old = self._values.get(key)
        self._values[key] = value
        if old != value:
            logger.debug("Key '%s' changed: %r -> %r", key, old, value)
            self._notifier.emit(key, value)
