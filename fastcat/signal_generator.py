"""Device producing sine, saw-tooth or random signals as a function of time."""

from __future__ import annotations

import enum
import logging
import math
import random
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fastcat.device_base import ConfigError, DeviceBase, DeviceError, DeviceState, parse_value

log = logging.getLogger(__name__)

_DEFAULT_SEED = 1


class SignalGeneratorType(enum.Enum):
    SINE_WAVE = "SINE_WAVE"
    SAW_TOOTH = "SAW_TOOTH"
    GAUSSIAN_RANDOM = "GAUSSIAN_RANDOM"
    UNIFORM_RANDOM = "UNIFORM_RANDOM"


def signal_generator_type_from_string(text: str) -> SignalGeneratorType:
    """Return the generator type named by ``text``."""
    try:
        return SignalGeneratorType(text)
    except ValueError:
        raise ConfigError(f"signal_generator_type {text} is invalid") from None


@dataclass
class SignalGeneratorState(DeviceState):
    output: float = 0.0


def _parse_float(node: Mapping[str, Any], key: str) -> float:
    return float(parse_value(node, key))


class SignalGenerator(DeviceBase):
    """Outputs a generated signal; no input signals are used."""

    state: SignalGeneratorState

    def __init__(self) -> None:
        super().__init__(SignalGeneratorState())
        self.signal_generator_type: SignalGeneratorType | None = None
        # Sine wave parameters
        self.angular_frequency = 0.0
        self.phase = 0.0
        self.amplitude = 0.0
        self.offset = 0.0
        # Saw-tooth parameters
        self.slope = 0.0
        self.max = 0.0
        self.min = 0.0
        self.range = 0.0
        self._modulo = 0.0
        # Random parameters
        self.seed = _DEFAULT_SEED
        self.mean = 0.0
        self.sigma = 0.0
        self._rng = random.Random(_DEFAULT_SEED)

    def configure(self, node: Mapping[str, Any]) -> None:
        self._parse_name(node)
        kind = signal_generator_type_from_string(
            str(parse_value(node, "signal_generator_type"))
        )

        if kind is SignalGeneratorType.SINE_WAVE:
            self.angular_frequency = _parse_float(node, "angular_frequency")
            self.phase = _parse_float(node, "phase")
            self.amplitude = _parse_float(node, "amplitude")
            self.offset = _parse_float(node, "offset")
        elif kind is SignalGeneratorType.SAW_TOOTH:
            slope = _parse_float(node, "slope")
            high = _parse_float(node, "max")
            low = _parse_float(node, "min")
            if high < low:
                raise ConfigError(f"Sawtooth Max ({high:f}) is not > Min ({low:f})")
            self.slope, self.max, self.min = slope, high, low
            self.range = high - low
            self._modulo = 0.0
        else:
            self.seed = self._parse_seed(node)
            if kind is SignalGeneratorType.GAUSSIAN_RANDOM:
                self.mean = _parse_float(node, "mean")
                self.sigma = _parse_float(node, "sigma")
            else:
                self.min = _parse_float(node, "min")
                self.max = _parse_float(node, "max")
            self._rng = random.Random(self.seed)

        self.signal_generator_type = kind

    @staticmethod
    def _parse_seed(node: Mapping[str, Any]) -> int:
        if "seed" not in node:
            log.warning("Key 'seed' not supplied, using default random number generator")
            return _DEFAULT_SEED
        return int(node["seed"])

    def read(self) -> None:
        kind = self.signal_generator_type
        t = self.state.time
        if kind is None:
            raise DeviceError(f"SignalGenerator '{self.name}' is not configured")

        if kind is SignalGeneratorType.SINE_WAVE:
            self.state.output = self.offset + self.amplitude * math.sin(
                self.angular_frequency * t + self.phase
            )
        elif kind is SignalGeneratorType.SAW_TOOTH:
            self.state.output = self._saw_tooth(t)
        elif kind is SignalGeneratorType.GAUSSIAN_RANDOM:
            self.state.output = self._rng.gauss(self.mean, self.sigma)
        else:
            self.state.output = self._rng.uniform(self.min, self.max)

    def _saw_tooth(self, t: float) -> float:
        if self.slope >= 0:
            output = self.min + self.slope * t - self.range * self._modulo
            if output > self.max:
                self._modulo += 1.0
                output = self.min + self.slope * t - self.range * self._modulo
        else:
            output = self.max + self.slope * t + self.range * self._modulo
            if output < self.min:
                self._modulo += 1.0
                output = self.max + self.slope * t + self.range * self._modulo
        return output