"""Key/value pairs and value stringification."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any

import numpy as np

from propfile.errors import EmptyKeyError


def validate_key(key: str) -> None:
    """Raise EmptyKeyError when key is empty after trimming."""
    if not key.strip():
        msg = "invalid key name. the key cannot be empty"
        raise EmptyKeyError(msg)


def _float_str(value: float) -> str:
    """Shortest round-trip scientific form: 1.5 -> 1.5e+00, 100.0 -> 1e+02."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return np.format_float_scientific(value, unique=True, trim="-", exp_digits=2)


def to_property_str(value: Any) -> str:
    """Canonical string form of a stored value. None is the absence marker."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # bool before int: bool is an Integral
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, (float, np.floating)):
        return _float_str(float(value))
    return str(value)


@dataclass(frozen=True)
class Pair:
    """Read-only key/value entry. The value may be any object, including None."""

    key: str
    value: Any = None

    def __post_init__(self) -> None:
        validate_key(self.key)

    @property
    def value_str(self) -> str:
        return to_property_str(self.value)

    def __str__(self) -> str:
        return f"[{self.key} = {self.value}]"


@dataclass
class MutablePair:
    """Key/value entry whose value can be replaced in place."""

    key: str
    value: Any = None

    def __post_init__(self) -> None:
        validate_key(self.key)

    @property
    def value_str(self) -> str:
        return to_property_str(self.value)

    def set_value(self, value: Any) -> Any:
        """Replace the value. Returns the old one."""
        old = self.value
        self.value = value
        return old

    def __str__(self) -> str:
        return f"[{self.key} = {self.value}]"
