# src/shutdowntimer/backends/protocols.py
from __future__ import annotations

from typing import Protocol, runtime_checkable

from shutdowntimer.backends.dispatch import ChangeHandler
from shutdowntimer.keys import SettingValue
from shutdowntimer.schema import Schema


@runtime_checkable
class SettingsBackend(Protocol):
    """Protocol defining the capabilities of a backing store.

    The store is bound to one schema. Every key the schema declares has
    exactly one slot whose type never changes. Runtime checking lets the
    settings store verify an injected backend before using it.
    """

    schema: Schema

    def get_value(self, key: str) -> SettingValue:
        """Return the current value of ``key``.

        Raises:
            KeyError: If the schema does not declare ``key``
        """
        ...

    def set_value(self, key: str, value: SettingValue) -> bool:
        """Write ``value`` to ``key``.

        Returns:
            True if the write was accepted, False otherwise
        """
        ...

    def is_writable(self, key: str) -> bool:
        """Whether a write to ``key`` would currently be permitted."""
        ...

    def reset(self, key: str) -> bool:
        """Restore the schema default of ``key``.

        Returns:
            True if the write was accepted, False otherwise
        """
        ...

    def connect(self, key: str, handler: ChangeHandler) -> None:
        """Call ``handler`` with the new value each time ``key`` changes."""
        ...

    def sync(self) -> None:
        """Make every accepted write durable before returning.

        Raises:
            OSError: If the pending changes cannot be persisted
        """
        ...
