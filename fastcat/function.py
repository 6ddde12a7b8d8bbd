"""Device evaluating a configured mathematical function of its input signals."""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from fastcat.device_base import (
    ConfigError,
    DeviceBase,
    DeviceError,
    DeviceState,
    Signal,
    parse_signals,
    parse_value,
)

log = logging.getLogger(__name__)


class FunctionType(enum.Enum):
    POLYNOMIAL = "POLYNOMIAL"
    SUMMATION = "SUMMATION"
    MULTIPLICATION = "MULTIPLICATION"
    POWER = "POWER"
    EXPONENTIAL = "EXPONENTIAL"
    SIGMOID = "SIGMOID"


def function_type_from_string(text: str) -> FunctionType:
    """Return the function type named by ``text``."""
    try:
        return FunctionType(text)
    except ValueError:
        raise ConfigError(f"Could not determine function type: {text}") from None


@dataclass
class FunctionState(DeviceState):
    output: float = 0.0


def _parse_float_list(node: Mapping[str, Any], key: str) -> list[float]:
    values = parse_value(node, key)
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise ConfigError(f"'{key}' must be a list")
    return [float(v) for v in values]


def _require_one_signal(signals: list[Signal]) -> None:
    if len(signals) != 1:
        raise ConfigError("Expecting exactly one signal for Function")


def _ieee_pow(base: float, exponent: float) -> float:
    """Power with IEEE results (inf, nan) where ``math.pow`` would raise."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        odd_integer = float(exponent).is_integer() and int(exponent) % 2 == 1
        return -math.inf if base < 0 and odd_integer else math.inf
    except ValueError:
        return math.inf if base == 0 else math.nan


class Function(DeviceBase):
    """Outputs a polynomial, sum, product, power, exponential or sigmoid."""

    state: FunctionState

    def __init__(self) -> None:
        super().__init__(FunctionState())
        self.function_type: FunctionType | None = None
        self.order = 0
        self.coefficients: list[float] = []
        self.exponent = 0.0
        self.base = math.e

    def configure(self, node: Mapping[str, Any]) -> None:
        self._parse_name(node)
        function_type = function_type_from_string(str(parse_value(node, "function_type")))
        signals = parse_signals(node)

        if function_type is FunctionType.POLYNOMIAL:
            order = int(parse_value(node, "order"))
            coefficients = _parse_float_list(node, "coefficients")
            if order != len(coefficients) - 1:
                raise ConfigError(
                    f"for a polynomial of {order}-order, expecting {order + 1} "
                    f"coefficients. {len(coefficients)} found"
                )
            terms = " + ".join(
                f"({c:f})*x^{order - i}" for i, c in enumerate(coefficients)
            )
            log.info("Function: %s y = %s", self.name, terms)
            _require_one_signal(signals)
            self.order = order
            self.coefficients = coefficients
        elif function_type is FunctionType.MULTIPLICATION:
            if len(signals) < 2:
                raise ConfigError("Expecting at least two signals for Function")
        elif function_type is FunctionType.POWER:
            _require_one_signal(signals)
            self.exponent = float(parse_value(node, "exponent"))
        elif function_type is FunctionType.EXPONENTIAL:
            _require_one_signal(signals)
            if "base" in node:
                self.base = float(node["base"])
            else:
                log.warning(
                    "No 'base' specified for Function with exponenent type; "
                    "using default value of 'e'"
                )
                self.base = math.e
        elif function_type is FunctionType.SIGMOID:
            _require_one_signal(signals)

        self.function_type = function_type
        self.signals = signals

    def read(self) -> None:
        values = [signal.update() for signal in self.signals]
        kind = self.function_type
        if kind is None:
            raise DeviceError(f"Function '{self.name}' is not configured")

        if kind is FunctionType.POLYNOMIAL:
            x = values[0]
            output = 0.0
            for i, coeff in enumerate(self.coefficients):
                output += _ieee_pow(x, self.order - i) * coeff
        elif kind is FunctionType.SUMMATION:
            output = 0.0
            for value in values:
                output += value
        elif kind is FunctionType.MULTIPLICATION:
            output = 1.0
            for value in values:
                output *= value
        elif kind is FunctionType.POWER:
            output = _ieee_pow(values[0], self.exponent)
        elif kind is FunctionType.EXPONENTIAL:
            output = _ieee_pow(self.base, values[0])
        else:
            try:
                output = 1.0 / (1.0 + math.exp(-values[0]))
            except OverflowError:
                output = 0.0
        self.state.output = output