import pytest

from shutdowntimer.backends import MemoryBackend
from shutdowntimer.schema import Schema
from shutdowntimer.store import SettingsStore


@pytest.fixture
def schema() -> Schema:
    return SettingsStore.find_schema()


@pytest.fixture
def backend(schema: Schema) -> MemoryBackend:
    return MemoryBackend(schema, {"delay": 10})


@pytest.fixture
def store(backend: MemoryBackend) -> SettingsStore:
    return SettingsStore(backend)
