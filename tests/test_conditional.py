import pytest

from fastcat.conditional import Conditional, ConditionalType, conditional_type_from_string
from fastcat.device_base import ConfigError


def _config(op, rhs=1.0):
    return {
        "name": "cond",
        "conditional_type": op,
        "compare_rhs_value": rhs,
        "signals": [{"observed_device_name": "sensor", "request_signal_name": "value"}],
    }


def _device(op, reading, rhs=1.0):
    device = Conditional()
    device.configure(_config(op, rhs))
    device.signals[0].source = lambda: reading
    return device


@pytest.mark.parametrize(
    "text, expected",
    [
        ("<", ConditionalType.LT),
        ("<=", ConditionalType.LE),
        (">", ConditionalType.GT),
        (">=", ConditionalType.GE),
        ("==", ConditionalType.EQ),
        ("!=", ConditionalType.NE),
    ],
)
def test_type_from_string(text, expected):
    assert conditional_type_from_string(text) is expected


def test_unknown_type_raises():
    with pytest.raises(ConfigError):
        conditional_type_from_string("=<")


@pytest.mark.parametrize(
    "op, reading, expected",
    [
        ("<", 0.5, True),
        ("<", 1.0, False),
        ("<=", 1.0, True),
        ("<=", 1.5, False),
        (">", 1.5, True),
        (">", 1.0, False),
        (">=", 1.0, True),
        (">=", 0.5, False),
        ("==", 1.0, True),
        ("==", 0.5, False),
        ("!=", 0.5, True),
        ("!=", 1.0, False),
    ],
)
def test_read_compares_signal_with_rhs(op, reading, expected):
    device = _device(op, reading)
    device.read()
    assert device.state.output is expected


def test_configure_sets_state_name():
    device = _device("<", 0.0)
    assert device.state.name == "cond"


def test_configure_rejects_bad_type():
    with pytest.raises(ConfigError):
        Conditional().configure(_config("~"))


def test_configure_requires_rhs():
    node = _config("<")
    del node["compare_rhs_value"]
    with pytest.raises(ConfigError):
        Conditional().configure(node)


def test_configure_requires_exactly_one_signal():
    node = _config("<")
    node["signals"] = node["signals"] * 2
    with pytest.raises(ConfigError):
        Conditional().configure(node)


def test_output_follows_signal_changes():
    readings = iter([0.0, 2.0])
    device = Conditional()
    device.configure(_config(">"))
    device.signals[0].source = lambda: next(readings)
    device.read()
    first = device.state.output
    device.read()
    assert (first, device.state.output) == (False, True)