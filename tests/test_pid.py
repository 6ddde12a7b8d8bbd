import pytest

from fastcat.device_base import CommandError, ConfigError
from fastcat.faulter import FaulterEnableCmd
from fastcat.pid import Pid, PidActivateCmd


def _make(kp=1.0, ki=0.0, kd=0.0, windup=100.0, value=0.0, loop_period=0.5):
    dev = Pid()
    dev.configure(
        {
            "name": "pid",
            "kp": kp,
            "ki": ki,
            "kd": kd,
            "windup_limit": windup,
            "signals": [{"observed_device_name": "FIXED_VALUE", "fixed_value": value}],
        }
    )
    dev.loop_period = loop_period
    return dev


def _activate(dev, setpoint=2.0, deadband=0.0, persistence=10.0, max_duration=100.0):
    dev.write(PidActivateCmd(setpoint, deadband, persistence, max_duration))


def test_gains_parsed_separately():
    dev = _make(kp=1.5, ki=0.25, kd=0.75)
    assert (dev.kp, dev.ki, dev.kd) == (1.5, 0.25, 0.75)


def test_inactive_output_is_zero():
    dev = _make()
    dev.read()
    assert dev.state.active is False
    assert dev.state.output == 0.0
    assert dev.integral_error == 0.0


def test_proportional_term():
    dev = _make(kp=1.0)
    _activate(dev, setpoint=2.0)
    dev.read()
    assert dev.state.active is True
    assert dev.state.kp_term == 2.0
    assert dev.state.ki_term == 0.0


def test_output_is_sum_of_terms():
    dev = _make(kp=0.8, ki=0.3, kd=0.1)
    _activate(dev, setpoint=3.0)
    for _ in range(3):
        dev.read()
        s = dev.state
        assert s.output == pytest.approx(s.kp_term + s.ki_term + s.kd_term)


def test_integral_windup_clamped():
    dev = _make(kp=0.0, ki=1.0, windup=0.3, loop_period=1.0)
    _activate(dev, setpoint=2.0)
    dev.read()
    assert dev.integral_error == 0.3
    assert dev.state.ki_term == 0.3


def test_max_duration_deactivates():
    dev = _make()
    _activate(dev, max_duration=1.0)
    dev.time = 2.0
    dev.read()
    assert dev.state.active is False
    assert dev.state.output == 0.0


def test_converges_inside_deadband():
    dev = _make(value=1.95, loop_period=0.1)
    _activate(dev, setpoint=2.0, deadband=1.0, persistence=0.0)
    dev.read()
    assert dev.state.active is False
    assert dev.state.output == 0.0


def test_persistence_requires_several_cycles():
    dev = _make(value=1.95, loop_period=0.1)
    _activate(dev, setpoint=2.0, deadband=1.0, persistence=0.25)
    dev.read()
    dev.read()
    assert dev.state.active is True
    dev.read()
    assert dev.state.active is False


def test_write_rejects_other_commands():
    dev = _make()
    with pytest.raises(CommandError):
        dev.write(FaulterEnableCmd(True))
    assert dev.state.active is False


def test_fault_deactivates_and_blocks_activation():
    dev = _make()
    _activate(dev)
    dev.fault()
    assert dev.state.active is False
    assert dev.device_fault_active is True
    with pytest.raises(CommandError):
        _activate(dev)
    dev.reset()
    _activate(dev)
    assert dev.state.active is True


def test_activation_time_recorded():
    dev = _make()
    dev.time = 4.5
    _activate(dev)
    assert dev.activation_time == 4.5


def test_missing_gain():
    dev = Pid()
    with pytest.raises(ConfigError):
        dev.configure(
            {
                "name": "pid",
                "kp": 1.0,
                "kd": 0.0,
                "windup_limit": 1.0,
                "signals": [{"observed_device_name": "FIXED_VALUE", "fixed_value": 0.0}],
            }
        )


def test_two_signals_rejected():
    dev = Pid()
    with pytest.raises(ConfigError):
        dev.configure(
            {
                "name": "pid",
                "kp": 1.0,
                "ki": 0.0,
                "kd": 0.0,
                "windup_limit": 1.0,
                "signals": [
                    {"observed_device_name": "FIXED_VALUE", "fixed_value": 0.0},
                    {"observed_device_name": "FIXED_VALUE", "fixed_value": 1.0},
                ],
            }
        )