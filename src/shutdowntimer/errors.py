"""Exception classes for settings access.

Every failure a caller can observe while reading or writing a setting is
one of the classes below. They propagate straight to the caller; the
store never retries or logs them on its own.
"""

from __future__ import annotations

from typing import Optional


class SettingsError(Exception):
    """Base class for settings store failures.

    Carries the key the failure relates to (if any) alongside the
    human-readable message.
    """

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            key: Settings key involved in the failure
        """
        super().__init__(message)
        self.message: str = message
        self.key: Optional[str] = key


class InvalidArgumentError(SettingsError, ValueError):
    """Raised when a value has the wrong type or is out of range.

    Also raised for an invalid key or callback passed to ``bind_key``.
    Nothing has been changed when this is raised.
    """


class NotWritableError(SettingsError):
    """Raised when the backing store refuses writes to a key (e.g. a lock)."""

    def __init__(self, key: str) -> None:
        super().__init__(f"The key '{key}' is not writable.", key)


class WriteFailedError(SettingsError):
    """Raised when the backing store accepted a write but could not persist it."""

    def __init__(self, key: str, original_error: Optional[Exception] = None) -> None:
        """Initialize with write failure details.

        Args:
            key: The key that could not be written
            original_error: The underlying exception, when there was one
        """
        super().__init__(f"Couldn't set the key '{key}'", key)
        self.original_error = original_error


class SchemaNotFoundError(SettingsError):
    """Raised at construction time when the schema cannot be located."""

    def __init__(self, schema_id: str) -> None:
        super().__init__(f"Settings schema '{schema_id}' not found")
        self.schema_id = schema_id
