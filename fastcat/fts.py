"""Force-torque sensor device computing a wrench from calibrated input signals."""

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

#: Number of wrench dimensions: three forces followed by three torques.
FTS_N_DIMS = 6

_AXES = ("x", "y", "z")


@dataclass
class FtsState(DeviceState):
    raw_fx: float = 0.0
    raw_fy: float = 0.0
    raw_fz: float = 0.0
    raw_tx: float = 0.0
    raw_ty: float = 0.0
    raw_tz: float = 0.0
    tared_fx: float = 0.0
    tared_fy: float = 0.0
    tared_fz: float = 0.0
    tared_tx: float = 0.0
    tared_ty: float = 0.0
    tared_tz: float = 0.0

    @property
    def raw(self) -> tuple[float, ...]:
        """Raw wrench as ``(fx, fy, fz, tx, ty, tz)``."""
        return (self.raw_fx, self.raw_fy, self.raw_fz, self.raw_tx, self.raw_ty, self.raw_tz)

    @property
    def tared(self) -> tuple[float, ...]:
        """Tared wrench as ``(fx, fy, fz, tx, ty, tz)``."""
        return (
            self.tared_fx,
            self.tared_fy,
            self.tared_fz,
            self.tared_tx,
            self.tared_ty,
            self.tared_tz,
        )


@dataclass(frozen=True)
class FtsTareCmd:
    """Zero the tared wrench at the current reading."""


@dataclass(frozen=True)
class FtsEnableGuardFaultCmd:
    enable: bool


class Fts(DeviceBase):
    """Multiplies its input signals by a calibration matrix to produce a wrench.

    The device faults the system when any force or torque component exceeds
    its configured per-axis maximum, unless the guard has been disabled.
    """

    state: FtsState

    def __init__(self) -> None:
        super().__init__(FtsState())
        self.calibration: list[list[float]] = []
        self.wrench = [0.0] * FTS_N_DIMS
        self.sig_offset = [0.0] * FTS_N_DIMS
        self.enable_fts_guard_fault = True
        self.max_force = [0.0, 0.0, 0.0]
        self.max_torque = [0.0, 0.0, 0.0]

    def configure(self, node: Mapping[str, Any]) -> None:
        self._parse_name(node)
        if "max_force" in node:
            raise ConfigError(
                "fastcat no longer accept L2 norm, configure your yaml values per axis"
            )
        self.max_force = [float(parse_value(node, f"max_force_{a}")) for a in _AXES]
        self.max_torque = [float(parse_value(node, f"max_torque_{a}")) for a in _AXES]

        signals = parse_signals(node)
        if len(signals) < FTS_N_DIMS:
            raise ConfigError(f"Expecting at least {FTS_N_DIMS} signals for FTS")

        entries = parse_value(node, "calibration_matrix")
        if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
            raise ConfigError("'calibration_matrix' must be a list")
        if len(entries) % FTS_N_DIMS != 0:
            raise ConfigError(
                f"Calibration matrix size ({len(entries)}) not a multiple of {FTS_N_DIMS}"
            )
        n = len(signals)
        if len(entries) > FTS_N_DIMS * n:
            raise ConfigError(
                f"Calibration matrix size ({len(entries)}) exceeds "
                f"{FTS_N_DIMS} x {n} entries"
            )
        values = [float(v) for v in entries]
        values += [0.0] * (FTS_N_DIMS * n - len(values))
        self.calibration = [values[row * n:(row + 1) * n] for row in range(FTS_N_DIMS)]
        log.debug(
            "FTS Cal Matrix = \n%s",
            "\n".join("\t" + "".join(f" {c:f} " for c in row) for row in self.calibration),
        )
        self.signals = signals

    def read(self) -> None:
        values = [signal.update() for signal in self.signals]
        self.wrench = [
            sum(c * v for c, v in zip(row, values)) for row in self.calibration
        ] or [0.0] * FTS_N_DIMS
        self._publish(self.wrench)

    def _publish(self, wrench: Sequence[float]) -> None:
        state = self.state
        (state.raw_fx, state.raw_fy, state.raw_fz,
         state.raw_tx, state.raw_ty, state.raw_tz) = wrench
        tared = [w + o for w, o in zip(wrench, self.sig_offset)]
        (state.tared_fx, state.tared_fy, state.tared_fz,
         state.tared_tx, state.tared_ty, state.tared_tz) = tared

    def process(self) -> FaultType:
        if self.device_fault_active or not self.enable_fts_guard_fault:
            return FaultType.NO_FAULT
        raw = self.state.raw
        limits = [*self.max_force, *self.max_torque]
        if any(limit < abs(value) for limit, value in zip(limits, raw)):
            log.error(
                "Force or torque measured by device %s exceeded maximum allowable "
                "magnitude. Force: [x]: %f / %f, [y]: %f / %f, [z]: %f / %f "
                "Torque: [x]: %f / %f, [y]: %f / %f, [z]: %f / %f",
                self.name,
                *(item for pair in zip(raw, limits) for item in pair),
            )
            return FaultType.ALL_DEVICE_FAULT
        return FaultType.NO_FAULT

    def write(self, cmd: Any) -> None:
        if isinstance(cmd, FtsTareCmd):
            if self.device_fault_active:
                raise CommandError(
                    "Taring FTS is not permited with a active fault, reset first"
                )
            self.sig_offset = [-w for w in self.wrench]
        elif isinstance(cmd, FtsEnableGuardFaultCmd):
            self.enable_fts_guard_fault = bool(cmd.enable)
        else:
            raise CommandError("That command type is not supported!")