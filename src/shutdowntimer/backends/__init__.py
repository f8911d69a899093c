"""Backing stores holding the persisted setting values.

This package provides:
- SettingsBackend: Protocol every backing store implements
- MemoryBackend: In-process store for tests and previews
- YamlFileBackend: Store persisted to a YAML file
"""

from shutdowntimer.backends.dispatch import ChangeHandler, ChangeNotifier
from shutdowntimer.backends.memory import MemoryBackend
from shutdowntimer.backends.protocols import SettingsBackend
from shutdowntimer.backends.yaml_file import YamlFileBackend

__all__ = [
    "ChangeHandler",
    "ChangeNotifier",
    "MemoryBackend",
    "SettingsBackend",
    "YamlFileBackend",
]
