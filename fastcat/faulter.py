"""Device that raises a system fault while its input signal is non-zero."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fastcat.device_base import (
    CommandError,
    ConfigError,
    DeviceBase,
    DeviceState,
    FaultType,
    parse_value,
)


@dataclass
class FaulterState(DeviceState):
    fault_active: bool = False
    enable: bool = False


@dataclass(frozen=True)
class FaulterEnableCmd:
    enable: bool


class Faulter(DeviceBase):
    """Triggers an all-device fault when enabled and its signal is non-zero."""

    state: FaulterState

    def __init__(self) -> None:
        super().__init__(FaulterState())
        self.start_enabled = True

    def configure(self, node: Mapping[str, Any]) -> None:
        self._parse_name(node)
        start_enabled = parse_value(node, "start_enabled")
        if not isinstance(start_enabled, bool):
            raise ConfigError("'start_enabled' must be true or false")
        self.start_enabled = start_enabled
        self.state.enable = start_enabled
        self._parse_single_signal(node, "Faulter")

    def read(self) -> None:
        self.state.fault_active = abs(self._read_input()) > 0

    def process(self) -> FaultType:
        if self.state.fault_active and self.state.enable:
            return FaultType.ALL_DEVICE_FAULT
        return FaultType.NO_FAULT

    def write(self, cmd: Any) -> None:
        if not isinstance(cmd, FaulterEnableCmd):
            raise CommandError("Bad command to Faulter device")
        self.state.enable = cmd.enable

    def fault(self) -> None:
        super().fault()
        self.state.enable = False

    def reset(self) -> None:
        super().reset()
        if self.start_enabled:
            self.state.enable = True