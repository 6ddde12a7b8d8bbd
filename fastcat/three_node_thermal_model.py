"""Three-node thermal model estimating internal motor temperatures."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from fastcat.device_base import (
    CommandError,
    ConfigError,
    DeviceBase,
    DeviceState,
    FaultType,
    parse_signals,
    parse_value,
)

log = logging.getLogger(__name__)

_NUM_NODES = 4
_NUM_SIGNALS = 2
_NODE_3_TEMP_IDX = 0
_MOTOR_CURRENT_IDX = 1


@dataclass
class ThreeNodeThermalModelState(DeviceState):
    node_1_temp: float = 0.0
    node_2_temp: float = 0.0
    node_3_temp: float = 0.0
    node_4_temp: float = 0.0


@dataclass(frozen=True)
class SeedThermalModelTemperatureCmd:
    seed_temperature: float


class ThreeNodeThermalModel(DeviceBase):
    """Predicts winding temperatures from motor current and a measured node.

    Signals: the node 3 temperature first, then the motor current.
    """

    state: ThreeNodeThermalModelState

    def __init__(self) -> None:
        super().__init__(ThreeNodeThermalModelState())
        self.thermal_mass_node_1 = 0.0
        self.thermal_mass_node_2 = 0.0
        self.thermal_res_nodes_1_to_2 = 0.0
        self.thermal_res_nodes_2_to_3 = 0.0
        self.winding_res = 0.0
        self.winding_thermal_cor = 0.0
        self.k1 = 0.0
        self.k2 = 0.0
        self.k3 = 0.0
        self.max_allowable_temps = [0.0] * _NUM_NODES
        self.persistence_limit = 0
        self.ref_temp = 0.0
        self.motor_current = 0.0
        self.motor_res = 0.0
        self.node_temps = [0.0] * _NUM_NODES
        self.node_overtemp_persistences = [0] * _NUM_NODES
        self.last_time = self.state.time

    def configure(self, node: Mapping[str, Any]) -> None:
        self._parse_name(node)
        for key in (
            "thermal_mass_node_1",
            "thermal_mass_node_2",
            "thermal_res_nodes_1_to_2",
            "thermal_res_nodes_2_to_3",
            "winding_res",
            "winding_thermal_cor",
            "k1",
            "k2",
            "k3",
        ):
            setattr(self, key, float(parse_value(node, key)))

        persistence_limit = int(parse_value(node, "persistence_limit"))
        if persistence_limit < 0:
            raise ConfigError("'persistence_limit' must not be negative")
        self.persistence_limit = persistence_limit

        self.ref_temp = float(parse_value(node, "ref_temp"))
        self.node_temps = [self.ref_temp] * _NUM_NODES

        limits = parse_value(node, "max_allowable_temps")
        if isinstance(limits, (str, bytes)) or not isinstance(limits, Sequence):
            raise ConfigError("'max_allowable_temps' must be a list")
        if len(limits) != _NUM_NODES:
            raise ConfigError("There must be exactly 4 temperature limit values provided")
        self.max_allowable_temps = [float(v) for v in limits]

        signals = parse_signals(node)
        if len(signals) != _NUM_SIGNALS:
            raise ConfigError(
                f"Expecting exactly {_NUM_SIGNALS} signals for Three Node Thermal Model device"
            )
        self.signals = signals

    def read(self) -> None:
        values = [signal.update() for signal in self.signals[:_NUM_SIGNALS]]
        if len(values) != _NUM_SIGNALS:
            raise ConfigError(
                f"Expecting exactly {_NUM_SIGNALS} signals for Three Node Thermal Model device"
            )
        self.node_temps[2] = values[_NODE_3_TEMP_IDX]
        self.motor_current = values[_MOTOR_CURRENT_IDX]

    def process(self) -> FaultType:
        temps = self.node_temps
        dt = self.state.time - self.last_time

        self.motor_res = self.winding_res * (
            1 + self.winding_thermal_cor * (temps[0] - self.ref_temp)
        )
        q_in = self.motor_current * self.motor_current * self.motor_res
        q_1_to_2 = (temps[0] - temps[1]) / self.thermal_res_nodes_1_to_2
        q_2_to_3 = (temps[1] - temps[2]) / self.thermal_res_nodes_2_to_3

        temps[0] += (q_in - q_1_to_2) * (dt / self.thermal_mass_node_1)
        temps[1] += (q_1_to_2 - q_2_to_3) * (dt / self.thermal_mass_node_2)
        temps[3] = (self.k1 * temps[0] + self.k2 * temps[1] + self.k3 * temps[2]) / (
            self.k1 + self.k2 + self.k3
        )

        for idx, (temp, limit) in enumerate(zip(temps, self.max_allowable_temps)):
            if temp > limit:
                self.node_overtemp_persistences[idx] += 1
            else:
                self.node_overtemp_persistences[idx] = 0
            if self.node_overtemp_persistences[idx] > self.persistence_limit:
                log.error("Node %d temperature exceeded safety limit -- faulting", idx + 1)
                return FaultType.ALL_DEVICE_FAULT

        self.state.node_1_temp = temps[0]
        self.state.node_2_temp = temps[1]
        self.state.node_3_temp = temps[2]
        self.state.node_4_temp = temps[3]
        self.last_time = self.state.time
        return FaultType.NO_FAULT

    def write(self, cmd: Any) -> None:
        if not isinstance(cmd, SeedThermalModelTemperatureCmd):
            raise CommandError(
                f"Command not supported by Three Node Thermal Model device {self.name}"
            )
        self.node_temps = [float(cmd.seed_temperature)] * _NUM_NODES