"""Settings keys and the value rules attached to each of them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Final, Union

from pydantic import Field, StrictBool, StrictInt, TypeAdapter, ValidationError

from shutdowntimer.errors import InvalidArgumentError

SettingValue = Union[int, bool]


class ConfigKey(str, Enum):
    """Keys of the shutdown timer schema.

    The enum values are the identifiers used by the backing store, so a
    member can be passed anywhere a plain key string is expected.
    """

    DELAY = "delay"  # minutes until the timer fires
    ELAPSED_TIME = "elapsed-time"  # minutes already elapsed
    FORCED = "forced"
    ACTION = "action"  # action selector (0 = first action)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class KeySpec:
    """Type and range rule for a single key."""

    key: ConfigKey
    value_type: type
    adapter: TypeAdapter[Any]
    requirement: str

    def validate(self, value: Any) -> SettingValue:
        """Check a candidate value against this key's rule.

        Args:
            value: Value supplied by the caller

        Returns:
            The value, unchanged

        Raises:
            InvalidArgumentError: If the type or range is wrong
        """
        try:
            return self.adapter.validate_python(value)
        except ValidationError as err:
            raise InvalidArgumentError(
                f"'{self.key.value}' should be {self.requirement}. Got: {value!r}",
                self.key.value,
            ) from err


KEY_SPECS: Final[dict[ConfigKey, KeySpec]] = {
    ConfigKey.DELAY: KeySpec(
        ConfigKey.DELAY,
        int,
        TypeAdapter(Annotated[StrictInt, Field(gt=1)]),
        "an integer greater than 1",
    ),
    ConfigKey.ELAPSED_TIME: KeySpec(
        ConfigKey.ELAPSED_TIME,
        int,
        TypeAdapter(Annotated[StrictInt, Field(ge=0)]),
        "an integer equal or greater than 0",
    ),
    ConfigKey.FORCED: KeySpec(
        ConfigKey.FORCED,
        bool,
        TypeAdapter(StrictBool),
        "a boolean",
    ),
    ConfigKey.ACTION: KeySpec(
        ConfigKey.ACTION,
        int,
        TypeAdapter(Annotated[StrictInt, Field(ge=0)]),
        "an integer equal or greater than 0",
    ),
}


def spec_for(key: ConfigKey | str) -> KeySpec:
    """Return the rule for ``key``.

    Raises:
        InvalidArgumentError: If ``key`` is not one of the schema keys
    """
    try:
        return KEY_SPECS[ConfigKey(key)]
    except ValueError as err:
        raise InvalidArgumentError(f"Unknown settings key: {key!r}", str(key)) from err
