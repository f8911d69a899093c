"""Runtime configuration loaded from config.yaml."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from shutdowntimer.constants import CONFIG_ENV_VAR, DEFAULT_STORE_PATH
from shutdowntimer.keys import ConfigKey

# Load environment variables from .env file(s)
load_dotenv()


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class StoreConfig(BaseModel):
    """Where the settings live and which keys are locked.

    Every field has a default, so a missing config file simply yields
    the defaults.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/shutdowntimer/config.yaml").expanduser(),
        Path("/etc/shutdowntimer/config.yaml"),
    ]

    store_path: Path = Field(DEFAULT_STORE_PATH, description="YAML file holding the values")
    schema_dir: Optional[Path] = Field(
        None, description="Directory searched for the schema before the bundled one"
    )
    locked_keys: list[str] = Field(
        default_factory=list, description="Keys that may not be written (admin lockdown)"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ---- validators ----
    @field_validator("store_path", "schema_dir")
    @classmethod
    def expand_user(cls, v: Optional[Path]) -> Optional[Path]:
        return v.expanduser() if v is not None else None

    @field_validator("locked_keys")
    @classmethod
    def validate_locked_keys(cls, v: list[str]) -> list[str]:
        """Reject keys the schema does not know."""
        known = {key.value for key in ConfigKey}
        unknown = [key for key in v if key not in known]
        if unknown:
            raise ValueError(f"unknown keys in locked_keys: {', '.join(unknown)}")
        return v

    @classmethod
    def load(cls, path: Optional[Path] = None) -> StoreConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated StoreConfig object; defaults when no file is found
            in the default locations

        Raises:
            FileNotFoundError: If an explicit or environment-provided path is missing
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        if path is None:
            # Check environment variable first
            env_path = os.environ.get(CONFIG_ENV_VAR)
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(f"Config file from {CONFIG_ENV_VAR} not found: {path}")
            else:
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    return cls()
        elif not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw)
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data or {})
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
