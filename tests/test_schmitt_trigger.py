import pytest

from fastcat.device_base import ConfigError
from fastcat.schmitt_trigger import SchmittTrigger


def _trigger(readings):
    source = iter(readings)
    device = SchmittTrigger()
    device.configure(
        {
            "name": "trig",
            "low_threshold": 1.0,
            "high_threshold": 2.0,
            "signals": [{"observed_device_name": "sensor", "request_signal_name": "v"}],
        }
    )
    device.signals[0].source = lambda: next(source)
    return device


def _outputs(readings):
    device = _trigger(readings)
    results = []
    for _ in readings:
        device.read()
        results.append(device.state.output)
    return results


def test_starts_off():
    assert SchmittTrigger().state.output == 0


def test_hysteresis_sequence():
    assert _outputs([1.5, 2.5, 1.5, 0.5, 1.5]) == [0, 1, 1, 0, 0]


def test_thresholds_are_strict():
    assert _outputs([2.0, 2.1, 1.0, 0.9]) == [0, 1, 1, 0]


def test_missing_threshold_raises():
    with pytest.raises(ConfigError):
        SchmittTrigger().configure(
            {
                "name": "trig",
                "low_threshold": 1.0,
                "signals": [{"observed_device_name": "FIXED_VALUE", "fixed_value": 0}],
            }
        )