"""In-process backing store."""

from __future__ import annotations

import logging
from typing import Final, Mapping, Optional

from shutdowntimer.backends.dispatch import ChangeHandler, ChangeNotifier
from shutdowntimer.keys import SettingValue
from shutdowntimer.schema import Schema

logger: Final = logging.getLogger(__name__)


class MemoryBackend:
    """Backing store that keeps values in memory.

    Useful for tests and previews: keys can be locked to simulate an
    administrative policy, and writes or flushes can be made to fail.
    Values written by "another writer" can be simulated with
    :meth:`apply_external`.
    """

    def __init__(
        self, schema: Schema, values: Optional[Mapping[str, SettingValue]] = None
    ) -> None:
        """Initialize with schema defaults overlaid by ``values``.

        Args:
            schema: Schema the store is bound to
            values: Initial values for some or all keys

        Raises:
            ValueError: If an initial value does not match the schema
        """
        self.schema = schema
        self._values: dict[str, SettingValue] = schema.defaults()
        for key, value in (values or {}).items():
            if not schema.accepts(key, value):
                raise ValueError(f"Initial value {value!r} does not fit key '{key}'")
            self._values[key] = value

        self._durable: dict[str, SettingValue] = dict(self._values)
        self._locked: set[str] = set()
        self._notifier = ChangeNotifier()
        self.fail_writes = False
        self.fail_sync = False
        self.sync_count = 0

    # ---- locks ----
    def lock(self, key: str) -> None:
        self._locked.add(key)

    def unlock(self, key: str) -> None:
        self._locked.discard(key)

    # ---- backend protocol ----
    def get_value(self, key: str) -> SettingValue:
        if not self.schema.has_key(key):
            raise KeyError(key)
        return self._values[key]

    def set_value(self, key: str, value: SettingValue) -> bool:
        if self.fail_writes or not self.is_writable(key):
            return False
        if not self.schema.accepts(key, value):
            return False
        self._store(key, value)
        return True

    def is_writable(self, key: str) -> bool:
        return self.schema.has_key(key) and key not in self._locked

    def reset(self, key: str) -> bool:
        if not self.schema.has_key(key):
            return False
        return self.set_value(key, self.schema.default(key))

    def connect(self, key: str, handler: ChangeHandler) -> None:
        if not self.schema.has_key(key):
            raise KeyError(key)
        self._notifier.connect(key, handler)

    def sync(self) -> None:
        if self.fail_sync:
            # Pending writes are lost, as with a failed flush to disk
            for key, value in self._durable.items():
                self._store(key, value)
            raise OSError("sync failed")
        self._durable = dict(self._values)
        self.sync_count += 1

    # ---- helpers ----
    def apply_external(self, key: str, value: SettingValue) -> None:
        """Change a value as another writer would, ignoring locks."""
        if not self.schema.accepts(key, value):
            raise ValueError(f"Value {value!r} does not fit key '{key}'")
        self._durable[key] = value
        self._store(key, value)

    def _store(self, key: str, value: SettingValue) -> None:
        old = self._values.get(key)
        self._values[key] = value
        if old != value:
            logger.debug("Key '%s' changed: %r -> %r", key, old, value)
            self._notifier.emit(key, value)
