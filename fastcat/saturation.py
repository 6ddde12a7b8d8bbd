"""Device clamping its input signal between two limits."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fastcat.device_base import DeviceBase, DeviceState, parse_value


@dataclass
class SaturationState(DeviceState):
    output: float = 0.0


class Saturation(DeviceBase):
    """Outputs the input signal limited to ``[lower_limit, upper_limit]``."""

    state: SaturationState

    def __init__(self) -> None:
        super().__init__(SaturationState())
        self.lower_limit = 0.0
        self.upper_limit = 0.0

    def configure(self, node: Mapping[str, Any]) -> None:
        self._parse_name(node)
        self.lower_limit = float(parse_value(node, "lower_limit"))
        self.upper_limit = float(parse_value(node, "upper_limit"))
        self._parse_single_signal(node, "Saturation")

    def read(self) -> None:
        value = self._read_input()
        if value > self.upper_limit:
            self.state.output = self.upper_limit
        elif value < self.lower_limit:
            self.state.output = self.lower_limit
        else:
            self.state.output = value