"""Common device machinery: states, signals, configuration helpers and the base class."""

from __future__ import annotations

import abc
import enum
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

log = logging.getLogger(__name__)

#: Observed-device name marking a signal that carries a constant value.
FIXED_VALUE = "FIXED_VALUE"


class FaultType(enum.Enum):
    """Outcome of a device's process step."""

    NO_FAULT = "NO_FAULT"
    ALL_DEVICE_FAULT = "ALL_DEVICE_FAULT"


class DeviceError(Exception):
    """Raised when a device cannot do what was asked of it."""


class ConfigError(DeviceError, ValueError):
    """Raised when a device configuration is missing or invalid."""


class CommandError(DeviceError):
    """Raised when a device rejects a command."""


@dataclass
class DeviceState:
    """State data shared by every device."""

    name: str = ""
    time: float = 0.0


def parse_value(node: Any, key: str) -> Any:
    """Return the value stored under ``key`` in a configuration mapping."""
    if not isinstance(node, Mapping):
        raise ConfigError(f"configuration node for '{key}' is not a mapping")
    try:
        return node[key]
    except KeyError:
        raise ConfigError(f"missing required key '{key}'") from None


@dataclass
class Signal:
    """An input value that a device takes from another device or a constant."""

    observed_device_name: str
    request_signal_name: str = ""
    value: float = 0.0
    source: Callable[[], float] | None = field(default=None, repr=False, compare=False)

    def update(self) -> float:
        """Refresh ``value`` from the source and return it."""
        if self.source is None:
            if self.observed_device_name == FIXED_VALUE:
                return self.value
            raise DeviceError(
                f"signal '{self.request_signal_name}' of device "
                f"'{self.observed_device_name}' is not connected"
            )
        self.value = float(self.source())
        return self.value


def parse_signals(node: Any) -> list[Signal]:
    """Build the signal list described under the ``signals`` key."""
    entries = parse_value(node, "signals")
    if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
        raise ConfigError("'signals' must be a list")
    signals = []
    for entry in entries:
        device = str(parse_value(entry, "observed_device_name"))
        if device == FIXED_VALUE:
            signals.append(Signal(device, value=float(parse_value(entry, "fixed_value"))))
        else:
            signals.append(Signal(device, str(parse_value(entry, "request_signal_name"))))
    return signals


class DeviceBase(abc.ABC):
    """Base class of every device run by the fastcat loop."""

    def __init__(self, state: DeviceState | None = None) -> None:
        self.name = ""
        self.loop_period = 0.0
        self.device_fault_active = False
        self.state = state if state is not None else DeviceState()
        self.signals: list[Signal] = []
        self.cmd_queue: Any = None

    @property
    def time(self) -> float:
        return self.state.time

    @time.setter
    def time(self, value: float) -> None:
        self.state.time = value

    @abc.abstractmethod
    def configure(self, node: Mapping[str, Any]) -> None:
        """Configure the device from a parsed configuration mapping."""

    @abc.abstractmethod
    def read(self) -> None:
        """Update the device state."""

    def process(self) -> FaultType:
        return FaultType.NO_FAULT

    def write(self, cmd: Any) -> None:
        raise CommandError(f"Commands are not supported by device {self.name}")

    def fault(self) -> None:
        log.warning("Faulting device %s", self.name)
        self.device_fault_active = True

    def reset(self) -> None:
        log.info("Resetting device %s", self.name)
        self.device_fault_active = False

    def register_cmd_queue(self, cmd_queue: Any) -> None:
        self.cmd_queue = cmd_queue

    def _parse_name(self, node: Mapping[str, Any]) -> None:
        self.name = str(parse_value(node, "name"))
        self.state.name = self.name

    def _parse_single_signal(self, node: Mapping[str, Any], kind: str) -> None:
        signals = parse_signals(node)
        if len(signals) != 1:
            raise ConfigError(f"Expecting exactly one signal for {kind}")
        self.signals = signals

    def _read_input(self) -> float:
        if not self.signals:
            raise DeviceError(f"device '{self.name}' has no configured signals")
        return self.signals[0].update()