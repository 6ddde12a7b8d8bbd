"""PID controller device activated by command."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fastcat.device_base import CommandError, DeviceBase, DeviceState, parse_value

log = logging.getLogger(__name__)


@dataclass
class PidState(DeviceState):
    kp_term: float = 0.0
    ki_term: float = 0.0
    kd_term: float = 0.0
    output: float = 0.0
    active: bool = False


@dataclass(frozen=True)
class PidActivateCmd:
    setpoint: float = 0.0
    deadband: float = 0.0
    persistence_duration: float = 0.0
    max_duration: float = 0.0


def _divide(numerator: float, denominator: float) -> float:
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator)


class Pid(DeviceBase):
    """Drives its input signal toward a commanded setpoint while active."""

    state: PidState

    def __init__(self) -> None:
        super().__init__(PidState())
        self.kp = 0.0
        self.ki = 0.0
        self.kd = 0.0
        self.windup_limit = 0.0
        self.activate_cmd = PidActivateCmd()
        self.activation_time = 0.0
        self.error = 0.0
        self.prev_error = 0.0
        self.integral_error = 0.0
        self._persistence_counter = 0

    def configure(self, node: Mapping[str, Any]) -> None:
        self._parse_name(node)
        self.kp = float(parse_value(node, "kp"))
        self.ki = float(parse_value(node, "ki"))
        self.kd = float(parse_value(node, "kd"))
        self.windup_limit = float(parse_value(node, "windup_limit"))
        self._parse_single_signal(node, "Pid")

    def read(self) -> None:
        value = self._read_input()
        cmd = self.activate_cmd
        state = self.state

        if state.active and state.time - self.activation_time > cmd.max_duration:
            log.info(
                "PID controller reached max duration %f sec, deactivating controller",
                cmd.max_duration,
            )
            state.active = False

        self.error = cmd.setpoint - value

        if state.active and abs(self.error) < cmd.deadband:
            self._persistence_counter = (self._persistence_counter + 1) % 256
            if self._persistence_counter * self.loop_period > cmd.persistence_duration:
                log.info("Pid controller converged, deactivating controller")
                state.active = False
        else:
            self._persistence_counter = 0

        self.integral_error += self.error * self.loop_period
        if self.integral_error > self.windup_limit:
            self.integral_error = self.windup_limit

        if state.active:
            state.kp_term = self.kp * self.error
            state.ki_term = self.ki * self.integral_error
            state.kd_term = _divide(self.kd * (self.error - self.prev_error), self.loop_period)
            state.output = state.kp_term + state.ki_term + state.kd_term
        else:
            state.kp_term = 0.0
            state.ki_term = 0.0
            state.kd_term = 0.0
            state.output = 0.0
            self.integral_error = 0.0
        self.prev_error = self.error

    def write(self, cmd: Any) -> None:
        if not isinstance(cmd, PidActivateCmd):
            raise CommandError("Bad command to Pid device")
        if self.device_fault_active:
            raise CommandError(
                f"Unable to Activate PID ({self.name}) with an active fault, reset first"
            )
        self.state.active = True
        self.activate_cmd = cmd
        self.activation_time = self.state.time

    def fault(self) -> None:
        self.state.active = False
        super().fault()