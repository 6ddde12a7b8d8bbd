"""Device implementing a two-threshold Schmitt trigger."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fastcat.device_base import DeviceBase, DeviceState, parse_value


@dataclass
class SchmittTriggerState(DeviceState):
    output: float = 0.0


class SchmittTrigger(DeviceBase):
    """Switches on above the high threshold and off below the low one."""

    state: SchmittTriggerState

    def __init__(self) -> None:
        super().__init__(SchmittTriggerState())
        self.low_threshold = 0.0
        self.high_threshold = 0.0

    def configure(self, node: Mapping[str, Any]) -> None:
        self._parse_name(node)
        self.low_threshold = float(parse_value(node, "low_threshold"))
        self.high_threshold = float(parse_value(node, "high_threshold"))
        self._parse_single_signal(node, "Schmitt Trigger")

    def read(self) -> None:
        value = self._read_input()
        if self.state.output > 0:
            if value < self.low_threshold:
                self.state.output = 0.0
        elif value > self.high_threshold:
            self.state.output = 1.0