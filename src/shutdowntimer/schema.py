"""Schema definitions and lookup.

A schema declares which keys a settings store holds, the type of each
key and its default value. Schemas are YAML files named after their id
(``<schema-id>.yaml``) and are found through a chain of
:class:`SchemaSource` objects, each rooted at one or more directories.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Final, Literal, Optional, Sequence

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from shutdowntimer.constants import SCHEMA_DIRS_ENV_VAR, SYSTEM_SCHEMA_DIRS
from shutdowntimer.keys import SettingValue

logger: Final = logging.getLogger(__name__)

SCHEMA_SUFFIX: Final = ".yaml"


class SchemaKey(BaseModel):
    """Declaration of a single key: its type and default value."""

    type: Literal["int", "bool"]
    default: SettingValue
    summary: str = ""
    description: str = ""

    @model_validator(mode="after")
    def check_default_matches_type(self) -> SchemaKey:
        if self.type == "bool" and not isinstance(self.default, bool):
            raise ValueError("default of a bool key must be true or false")
        if self.type == "int" and isinstance(self.default, bool):
            raise ValueError("default of an int key must be an integer")
        return self

    @property
    def python_type(self) -> type:
        """Python type of the key's values."""
        return bool if self.type == "bool" else int


class Schema(BaseModel):
    """A named collection of typed keys."""

    id: str = Field(..., min_length=1, description="Schema identifier")
    keys: dict[str, SchemaKey] = Field(..., min_length=1)

    def has_key(self, key: str) -> bool:
        return key in self.keys

    def default(self, key: str) -> SettingValue:
        """Default value of ``key``.

        Raises:
            KeyError: If the schema does not declare ``key``
        """
        return self.keys[key].default

    def defaults(self) -> dict[str, SettingValue]:
        """Default values of every key."""
        return {name: spec.default for name, spec in self.keys.items()}

    def accepts(self, key: str, value: object) -> bool:
        """Whether ``value`` has the type declared for ``key``."""
        spec = self.keys.get(key)
        if spec is None:
            return False
        if spec.type == "bool":
            return isinstance(value, bool)
        return isinstance(value, int) and not isinstance(value, bool)

    @classmethod
    def load(cls, path: Path) -> Schema:
        """Load a schema from a YAML file.

        Args:
            path: Path to the schema file

        Returns:
            Validated Schema object

        Raises:
            RuntimeError: If the file cannot be parsed or is invalid
        """
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise RuntimeError(f"Unable to read schema YAML {path}: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid schema {path}:\n{err}") from err


class SchemaSource:
    """Looks up schemas by id in a set of directories.

    Sources can be chained: a lookup that misses in this source's own
    directories falls through to ``parent`` when done recursively.

    Examples:
        source = SchemaSource.from_directory(
            Path("schemas"), parent=SchemaSource.default()
        )
        schema = source.lookup("org.gnome.shell.extensions.shutdowntimer")
    """

    def __init__(
        self, directories: Sequence[Path], parent: Optional[SchemaSource] = None
    ) -> None:
        """Initialize the source.

        Args:
            directories: Directories searched in order
            parent: Source consulted when a recursive lookup misses here
        """
        self.directories = [Path(d) for d in directories]
        self.parent = parent

    @classmethod
    def from_directory(
        cls, directory: Path, parent: Optional[SchemaSource] = None
    ) -> SchemaSource:
        """Create a source rooted at a single directory."""
        return cls([directory], parent)

    @classmethod
    def default(cls) -> SchemaSource:
        """Source over the system schema directories.

        ``SHUTDOWNTIMER_SCHEMA_DIRS`` (an ``os.pathsep`` separated list)
        replaces the built-in system directories when set.
        """
        env_dirs = os.environ.get(SCHEMA_DIRS_ENV_VAR)
        if env_dirs:
            return cls([Path(p) for p in env_dirs.split(os.pathsep) if p])
        return cls(list(SYSTEM_SCHEMA_DIRS))

    def lookup(self, schema_id: str, recursive: bool = True) -> Optional[Schema]:
        """Find a schema by id.

        Args:
            schema_id: Identifier of the schema
            recursive: Also search the parent chain

        Returns:
            The schema, or None if no source in the chain defines it

        Raises:
            RuntimeError: If a matching file exists but is invalid
        """
        for directory in self.directories:
            candidate = directory / f"{schema_id}{SCHEMA_SUFFIX}"
            if candidate.is_file():
                schema = Schema.load(candidate)
                if schema.id != schema_id:
                    raise RuntimeError(
                        f"Schema file {candidate} declares id '{schema.id}', "
                        f"expected '{schema_id}'"
                    )
                logger.debug("Loaded schema %s from %s", schema_id, candidate)
                return schema

        if recursive and self.parent is not None:
            return self.parent.lookup(schema_id, recursive=True)
        return None

    def list_schemas(self, recursive: bool = True) -> list[str]:
        """Ids of every schema visible from this source."""
        found: list[str] = []
        for directory in self.directories:
            if not directory.is_dir():
                continue
            for path in sorted(directory.glob(f"*{SCHEMA_SUFFIX}")):
                if path.stem not in found:
                    found.append(path.stem)
        if recursive and self.parent is not None:
            for schema_id in self.parent.list_schemas(recursive=True):
                if schema_id not in found:
                    found.append(schema_id)
        return found
