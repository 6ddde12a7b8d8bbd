"""Moving-average and digital A/B filters and the device that applies them."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from fastcat.device_base import ConfigError, DeviceBase, DeviceError, DeviceState, parse_value


class MovingAverageFilter:
    """Mean of the last ``buffer_size`` samples; the window starts filled with zeros."""

    def __init__(self, buffer_size: int) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self.buffer_size = buffer_size
        self._buffer = deque([0.0] * buffer_size, maxlen=buffer_size)

    def apply(self, new_data: float) -> float:
        self._buffer.append(new_data)
        return sum(self._buffer) / self.buffer_size


class DigitalABFilter:
    """Difference-equation filter with numerator ``B`` and denominator ``A``.

    ``A[0]`` is taken to be one and is not used.
    """

    def __init__(self, A: Iterable[float], B: Iterable[float]) -> None:
        self.A = [float(a) for a in A]
        self.B = [float(b) for b in B]
        if not self.A or not self.B:
            raise ValueError("filter coefficient lists must not be empty")
        self._inputs = deque([0.0] * len(self.B), maxlen=len(self.B))
        self._outputs = deque([0.0] * len(self.A), maxlen=len(self.A))

    def apply(self, new_data: float) -> float:
        self._inputs.appendleft(new_data)
        value = sum(b * x for b, x in zip(self.B, self._inputs))
        value -= sum(a * y for a, y in zip(self.A[1:], self._outputs))
        self._outputs.appendleft(value)
        return value


class FilterType(enum.Enum):
    MOVING_AVERAGE = "MOVING_AVERAGE"
    DIGITAL_AB = "DIGITAL_AB"


def filter_type_from_string(text: str) -> FilterType:
    """Return the filter type named by ``text``."""
    try:
        return FilterType(text)
    except ValueError:
        raise ConfigError(f"{text} is not a known FilterType") from None


@dataclass
class FilterState(DeviceState):
    output: float = 0.0


def _parse_list(node: Mapping[str, Any], key: str) -> list[float]:
    values = parse_value(node, key)
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise ConfigError(f"'{key}' must be a list")
    return [float(v) for v in values]


class Filter(DeviceBase):
    """Applies a configured filter to its input signal."""

    state: FilterState

    def __init__(self) -> None:
        super().__init__(FilterState())
        self.filter_type: FilterType | None = None
        self._filter: MovingAverageFilter | DigitalABFilter | None = None

    def configure(self, node: Mapping[str, Any]) -> None:
        self._parse_name(node)
        self.filter_type = filter_type_from_string(str(parse_value(node, "filter_type")))
        if self.filter_type is FilterType.MOVING_AVERAGE:
            self._filter = MovingAverageFilter(int(parse_value(node, "buffer_size")))
        else:
            self._filter = DigitalABFilter(_parse_list(node, "A"), _parse_list(node, "B"))
        self._parse_single_signal(node, "Filter")

    def read(self) -> None:
        value = self._read_input()
        if self._filter is None:
            raise DeviceError(f"Filter '{self.name}' is not configured")
        self.state.output = self._filter.apply(value)