"""Common utility functions for the shutdowntimer package."""

from shutdowntimer.utils.file import atomic_write_text, ensure_directory_exists, is_path_writable

__all__ = [
    "atomic_write_text",
    "ensure_directory_exists",
    "is_path_writable",
]
