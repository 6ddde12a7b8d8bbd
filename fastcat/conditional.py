"""Device comparing its input signal against a fixed value."""

from __future__ import annotations

import enum
import operator
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from fastcat.device_base import ConfigError, DeviceBase, DeviceError, DeviceState, parse_value


class ConditionalType(enum.Enum):
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    EQ = "=="
    NE = "!="


_COMPARATORS: dict[ConditionalType, Callable[[float, float], bool]] = {
    ConditionalType.LT: operator.lt,
    ConditionalType.LE: operator.le,
    ConditionalType.GT: operator.gt,
    ConditionalType.GE: operator.ge,
    ConditionalType.EQ: operator.eq,
    ConditionalType.NE: operator.ne,
}


def conditional_type_from_string(text: str) -> ConditionalType:
    """Return the comparison named by an operator string such as ``"<="``."""
    try:
        return ConditionalType(text)
    except ValueError:
        raise ConfigError(f"{text} is not a known ConditionalType") from None


@dataclass
class ConditionalState(DeviceState):
    output: bool = False


class Conditional(DeviceBase):
    """Outputs whether ``signal <op> compare_rhs_value`` holds."""

    state: ConditionalState

    def __init__(self) -> None:
        super().__init__(ConditionalState())
        self.conditional_type: ConditionalType | None = None
        self.compare_rhs_value = 0.0

    def configure(self, node: Mapping[str, Any]) -> None:
        self._parse_name(node)
        self.conditional_type = conditional_type_from_string(
            str(parse_value(node, "conditional_type"))
        )
        self.compare_rhs_value = float(parse_value(node, "compare_rhs_value"))
        self._parse_single_signal(node, "Conditional")

    def read(self) -> None:
        value = self._read_input()
        if self.conditional_type is None:
            raise DeviceError(f"Conditional '{self.name}' is not configured")
        compare = _COMPARATORS[self.conditional_type]
        self.state.output = compare(value, self.compare_rhs_value)