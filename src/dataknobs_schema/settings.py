"""Validator settings, loadable from dictionaries or dataknobs configs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import TYPE_CHECKING, Any

from dataknobs_common import ConfigurationError

if TYPE_CHECKING:
    from dataknobs_config import Config

logger = logging.getLogger(__name__)


class MultipleOfMode(Enum):
    """How ``multipleOf`` divisibility is decided for non-integers."""

    # exact comparison of the shortest decimal representations
    DECIMAL = "decimal"
    # naive floating-point remainder, (value / multipleOf) % 1 != 0
    FLOAT = "float"


# Keys a config entry may carry that are not settings
_METADATA_KEYS = {"type", "name", "factory", "class", "schema"}

_TRUE_STRINGS = ("1", "true", "yes", "on")
_FALSE_STRINGS = ("0", "false", "no", "off")


@dataclass
class ValidatorSettings:
    """Settings that shape how schemas are compiled.

    Attributes:
        multiple_of_mode: Divisibility test used by ``multipleOf``
        eager_compile: Compile every reachable sub-schema up front, so schema
            errors surface at compile time rather than on first use
    """

    multiple_of_mode: MultipleOfMode = MultipleOfMode.DECIMAL
    eager_compile: bool = True

    def __post_init__(self) -> None:
        try:
            self.multiple_of_mode = MultipleOfMode(self.multiple_of_mode)
        except ValueError:
            raise ConfigurationError(
                f"Unknown multiple_of_mode: {self.multiple_of_mode}",
                context={"setting": "multiple_of_mode", "value": self.multiple_of_mode},
            ) from None
        if isinstance(self.eager_compile, str):
            flag = self.eager_compile.strip().lower()
            if flag in _TRUE_STRINGS:
                self.eager_compile = True
            elif flag in _FALSE_STRINGS:
                self.eager_compile = False
            else:
                raise ConfigurationError(
                    f"Invalid eager_compile value: {self.eager_compile}",
                    context={"setting": "eager_compile", "value": self.eager_compile},
                )

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ValidatorSettings:
        """Create settings from a dictionary, ignoring unknown keys.

        Args:
            data: Settings dictionary (may include config metadata keys)

        Returns:
            ValidatorSettings instance
        """
        if not data:
            return cls()

        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key in known:
                values[key] = value
            elif key not in _METADATA_KEYS:
                logger.warning(f"Ignoring unknown validator setting: {key}")
        return cls(**values)

    @classmethod
    def from_config(cls, config: Config, name_or_index: str | int = 0) -> ValidatorSettings:
        """Create settings from a ``validator`` entry of a dataknobs Config.

        Environment overrides such as
        ``DATAKNOBS_VALIDATOR__DEFAULT__MULTIPLE_OF_MODE`` are applied by the
        Config itself.

        Args:
            config: Loaded configuration
            name_or_index: Name or index of the validator entry

        Returns:
            ValidatorSettings instance
        """
        return cls.from_dict(config.get("validator", name_or_index))

    def to_dict(self) -> dict[str, Any]:
        return {
            "multiple_of_mode": self.multiple_of_mode.value,
            "eager_compile": self.eager_compile,
        }
