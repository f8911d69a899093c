from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from shutdowntimer.cli import app, parse_value
from shutdowntimer.constants import SCHEMA_ID

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        yaml.safe_dump(
            {"store_path": str(tmp_path / "settings.yaml"), "locked_keys": ["action"]}
        )
    )
    return cfg


def test_show_prints_every_key(config_file: Path) -> None:
    result = runner.invoke(app, ["show", "--config", str(config_file)])
    assert result.exit_code == 0
    assert "delay: 60" in result.output
    assert "forced: false" in result.output


def test_set_then_get(config_file: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["set", "delay", "15", "--config", str(config_file)])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["get", "delay", "--config", str(config_file)])
    assert result.exit_code == 0
    assert result.output.strip() == "15"

    data = yaml.safe_load((tmp_path / "settings.yaml").read_text())
    assert data[SCHEMA_ID]["delay"] == 15


def test_set_invalid_value(config_file: Path) -> None:
    result = runner.invoke(app, ["set", "delay", "1", "--config", str(config_file)])
    assert result.exit_code == 1


def test_set_locked_key(config_file: Path) -> None:
    result = runner.invoke(app, ["set", "action", "2", "--config", str(config_file)])
    assert result.exit_code == 1


def test_reset(config_file: Path) -> None:
    runner.invoke(app, ["set", "forced", "true", "--config", str(config_file)])
    result = runner.invoke(app, ["reset", "forced", "--config", str(config_file)])
    assert result.exit_code == 0
    assert "forced = false" in result.output


def test_get_unknown_key(config_file: Path) -> None:
    result = runner.invoke(app, ["get", "volume", "--config", str(config_file)])
    assert result.exit_code == 1


def test_config_validate(config_file: Path, tmp_path: Path) -> None:
    assert runner.invoke(app, ["config", "validate", str(config_file)]).exit_code == 0

    bad = tmp_path / "bad.yaml"
    bad.write_text("log_level: LOUD\n")
    assert runner.invoke(app, ["config", "validate", str(bad)]).exit_code == 1


@pytest.mark.parametrize(
    "key, raw, expected",
    [("forced", "yes", True), ("forced", "off", False), ("delay", "30", 30)],
)
def test_parse_value(key: str, raw: str, expected: object) -> None:
    assert parse_value(key, raw) == expected


def test_parse_value_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        parse_value("forced", "maybe")
    with pytest.raises(ValueError):
        parse_value("delay", "soon")
