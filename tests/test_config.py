from pathlib import Path

import pytest

from shutdowntimer.config import StoreConfig

GOOD_YAML = """
store_path: ${SETTINGS_DIR}/settings.yaml
locked_keys:
  - delay
log_level: DEBUG
"""

BAD_YAML = """
locked_keys:
  - volume
"""


def test_valid_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SETTINGS_DIR", str(tmp_path))
    cfg_file = tmp_path / "good.yaml"
    cfg_file.write_text(GOOD_YAML)

    cfg = StoreConfig.load(cfg_file)
    assert cfg.store_path == tmp_path / "settings.yaml"
    assert cfg.locked_keys == ["delay"]
    assert cfg.log_level == "DEBUG"


def test_invalid_config(tmp_path: Path) -> None:
    cfg_file = tmp_path / "bad.yaml"
    cfg_file.write_text(BAD_YAML)
    with pytest.raises(RuntimeError):
        StoreConfig.load(cfg_file)


def test_empty_config_gives_defaults(tmp_path: Path) -> None:
    cfg_file = tmp_path / "empty.yaml"
    cfg_file.write_text("")
    cfg = StoreConfig.load(cfg_file)
    assert cfg.locked_keys == []
    assert cfg.schema_dir is None


def test_missing_env_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHUTDOWNTIMER_CONFIG", str(tmp_path / "nope.yaml"))
    with pytest.raises(FileNotFoundError):
        StoreConfig.load()


def test_no_config_anywhere(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SHUTDOWNTIMER_CONFIG", raising=False)
    monkeypatch.setattr(StoreConfig, "DEFAULT_CONFIG_PATHS", [tmp_path / "config.yaml"])
    assert StoreConfig.load() == StoreConfig()
