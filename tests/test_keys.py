import pytest

from shutdowntimer.errors import InvalidArgumentError
from shutdowntimer.keys import KEY_SPECS, ConfigKey, spec_for


def test_config_key_values() -> None:
    assert [k.value for k in ConfigKey] == ["delay", "elapsed-time", "forced", "action"]
    assert str(ConfigKey.ELAPSED_TIME) == "elapsed-time"
    assert ConfigKey("forced") is ConfigKey.FORCED


def test_every_key_has_a_spec() -> None:
    assert set(KEY_SPECS) == set(ConfigKey)
    assert KEY_SPECS[ConfigKey.FORCED].value_type is bool
    assert KEY_SPECS[ConfigKey.DELAY].value_type is int


@pytest.mark.parametrize(
    "key, value",
    [
        (ConfigKey.DELAY, 2),
        (ConfigKey.DELAY, 1440),
        (ConfigKey.ELAPSED_TIME, 0),
        (ConfigKey.ACTION, 0),
        (ConfigKey.ACTION, 3),
        (ConfigKey.FORCED, True),
        (ConfigKey.FORCED, False),
    ],
)
def test_valid_values_pass(key: ConfigKey, value: object) -> None:
    assert spec_for(key).validate(value) == value


@pytest.mark.parametrize(
    "key, value",
    [
        (ConfigKey.DELAY, 1),
        (ConfigKey.DELAY, 0),
        (ConfigKey.DELAY, "5"),
        (ConfigKey.DELAY, 5.5),
        (ConfigKey.DELAY, None),
        (ConfigKey.DELAY, True),
        (ConfigKey.ELAPSED_TIME, -1),
        (ConfigKey.ACTION, -3),
        (ConfigKey.ACTION, "0"),
        (ConfigKey.FORCED, 1),
        (ConfigKey.FORCED, "true"),
        (ConfigKey.FORCED, None),
    ],
)
def test_invalid_values_rejected(key: ConfigKey, value: object) -> None:
    with pytest.raises(InvalidArgumentError) as info:
        spec_for(key).validate(value)
    assert info.value.key == key.value
    assert repr(value) in str(info.value)


def test_spec_for_accepts_plain_strings() -> None:
    assert spec_for("elapsed-time").key is ConfigKey.ELAPSED_TIME


def test_spec_for_unknown_key() -> None:
    with pytest.raises(InvalidArgumentError):
        spec_for("volume")
