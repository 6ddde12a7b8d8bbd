"""Device mapping its input through a piecewise-linear lookup table."""

from __future__ import annotations

import bisect
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from fastcat.device_base import ConfigError, DeviceBase, DeviceError, DeviceState, parse_value

log = logging.getLogger(__name__)


@dataclass
class LinearInterpolationState(DeviceState):
    output: float = 0.0
    is_saturated: bool = False


def _parse_float_list(node: Mapping[str, Any], key: str) -> list[float]:
    values = parse_value(node, key)
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise ConfigError(f"'{key}' must be a list")
    return [float(v) for v in values]


class LinearInterpolation(DeviceBase):
    """Interpolates between table entries, saturating outside the domain."""

    state: LinearInterpolationState

    def __init__(self) -> None:
        super().__init__(LinearInterpolationState())
        self.enable_out_of_bounds_fault = False
        self.domain: list[float] = []
        self.range: list[float] = []
        self.slopes: list[float] = []

    def configure(self, node: Mapping[str, Any]) -> None:
        self._parse_name(node)
        enable = parse_value(node, "enable_out_of_bounds_fault")
        if not isinstance(enable, bool):
            raise ConfigError("'enable_out_of_bounds_fault' must be true or false")
        domain = _parse_float_list(node, "domain")
        values = _parse_float_list(node, "range")
        if len(values) < 2:
            raise ConfigError(
                "Interpolation Table must consist of at least 2 elements. "
                f"Provided: ({len(values)})"
            )
        if len(values) != len(domain):
            raise ConfigError(
                f"Range size ({len(values)}) and Domain size ({len(domain)}) do no match"
            )

        table = sorted(zip(domain, values), key=lambda pair: pair[0])
        slopes = []
        for (x1, y1), (x2, y2) in zip(table, table[1:]):
            dx = x2 - x1
            if abs(dx) < 1e-16:
                raise ConfigError("Interpolation domain entries are too close (or repeated)")
            slopes.append((y2 - y1) / dx)
        log.debug("Interpolation Table (%s): %s slopes %s", self.name, table, slopes)

        self._parse_single_signal(node, "LinearInterpolation Device")
        self.enable_out_of_bounds_fault = enable
        self.domain = [x for x, _ in table]
        self.range = [y for _, y in table]
        self.slopes = slopes

    def read(self) -> None:
        value = self._read_input()
        if not self.domain:
            raise DeviceError(f"LinearInterpolation '{self.name}' is not configured")

        domain_min, domain_max = self.domain[0], self.domain[-1]
        self.state.is_saturated = False
        if value < domain_min:
            self.state.output = self.range[0]
            self.state.is_saturated = True
        elif value > domain_max:
            self.state.output = self.range[-1]
            self.state.is_saturated = True

        if self.state.is_saturated:
            if self.enable_out_of_bounds_fault and not self.device_fault_active:
                raise DeviceError(
                    f"Linear Interpolation ({self.name}) out of interpolation domain "
                    f"({domain_min:g} to {domain_max:g}) signal was ({value:g})"
                )
            return

        # Segment i covers domain[i-1] < value <= domain[i].
        i = bisect.bisect_left(self.domain, value)
        if i == 0 or i >= len(self.domain):
            raise DeviceError(
                f"Linear Interpolation ({self.name}) internal error for signal value ({value:g})"
            )
        x1 = self.domain[i - 1]
        self.state.output = self.range[i - 1] + self.slopes[i - 1] * (value - x1)