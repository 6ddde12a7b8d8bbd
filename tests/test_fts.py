import pytest

from fastcat.device_base import CommandError, ConfigError, FaultType
from fastcat.fts import Fts, FtsEnableGuardFaultCmd, FtsState, FtsTareCmd

INPUTS = [1.0, -2.0, 3.0, 0.5, -0.25, 0.75]


def _identity():
    return [1.0 if r == c else 0.0 for r in range(6) for c in range(6)]


def _config(**overrides):
    node = {
        "name": "fts_1",
        "max_force_x": 10.0,
        "max_force_y": 10.0,
        "max_force_z": 10.0,
        "max_torque_x": 5.0,
        "max_torque_y": 5.0,
        "max_torque_z": 5.0,
        "signals": [
            {"observed_device_name": "FIXED_VALUE", "fixed_value": v} for v in INPUTS
        ],
        "calibration_matrix": _identity(),
    }
    node.update(overrides)
    return node


def _device(**overrides):
    dev = Fts()
    dev.configure(_config(**overrides))
    return dev


def test_configure_sets_name_and_limits():
    dev = _device()
    assert dev.name == "fts_1"
    assert dev.state.name == "fts_1"
    assert dev.max_force == [10.0, 10.0, 10.0]
    assert dev.max_torque == [5.0, 5.0, 5.0]
    assert len(dev.calibration) == 6
    assert all(len(row) == 6 for row in dev.calibration)


def test_identity_calibration_passes_inputs_through():
    dev = _device()
    dev.read()
    assert list(dev.state.raw) == INPUTS
    assert list(dev.state.tared) == INPUTS


def test_calibration_is_row_major():
    matrix = [0.0] * 36
    matrix[1] = 2.0  # row 0 uses signal 1
    dev = _device(calibration_matrix=matrix)
    dev.read()
    assert dev.state.raw_fx == pytest.approx(2.0 * INPUTS[1])
    assert dev.state.raw_fy == 0.0


def test_short_calibration_fills_with_zeros():
    dev = _device(calibration_matrix=_identity()[:6])
    dev.read()
    assert dev.state.raw_fx == INPUTS[0]
    assert dev.state.raw[1:] == (0.0,) * 5


def test_tare_zeroes_tared_values():
    dev = _device()
    dev.read()
    dev.write(FtsTareCmd())
    dev.read()
    assert dev.state.tared == (0.0,) * 6
    assert list(dev.state.raw) == INPUTS


def test_tare_then_change_tracks_difference():
    dev = _device()
    dev.read()
    dev.write(FtsTareCmd())
    dev.signals[0].value = INPUTS[0] + 4.0
    dev.read()
    assert dev.state.tared_fx == pytest.approx(4.0)


def test_tare_rejected_while_faulted():
    dev = _device()
    dev.read()
    dev.fault()
    with pytest.raises(CommandError):
        dev.write(FtsTareCmd())
    dev.reset()
    dev.write(FtsTareCmd())
    assert dev.sig_offset == [-v for v in INPUTS]


def test_process_within_limits_is_no_fault():
    dev = _device()
    dev.read()
    assert dev.process() is FaultType.NO_FAULT


@pytest.mark.parametrize("index", range(6))
def test_process_faults_when_component_exceeds(index):
    dev = _device()
    dev.signals[index].value = -100.0
    dev.read()
    assert dev.process() is FaultType.ALL_DEVICE_FAULT


def test_guard_can_be_disabled():
    dev = _device()
    dev.signals[2].value = 100.0
    dev.read()
    dev.write(FtsEnableGuardFaultCmd(enable=False))
    assert dev.process() is FaultType.NO_FAULT
    dev.write(FtsEnableGuardFaultCmd(enable=True))
    assert dev.process() is FaultType.ALL_DEVICE_FAULT


def test_no_fault_reported_while_device_faulted():
    dev = _device()
    dev.signals[0].value = 100.0
    dev.read()
    dev.fault()
    assert dev.process() is FaultType.NO_FAULT


def test_unsupported_command_raises():
    dev = _device()
    with pytest.raises(CommandError):
        dev.write(object())


def test_l2_norm_max_force_rejected():
    with pytest.raises(ConfigError):
        _device(max_force=10.0)


def test_missing_limit_rejected():
    node = _config()
    del node["max_torque_z"]
    with pytest.raises(ConfigError):
        Fts().configure(node)


def test_too_few_signals_rejected():
    signals = _config()["signals"][:5]
    with pytest.raises(ConfigError):
        _device(signals=signals)


def test_calibration_not_multiple_of_six_rejected():
    with pytest.raises(ConfigError):
        _device(calibration_matrix=[1.0] * 7)


def test_calibration_too_large_rejected():
    with pytest.raises(ConfigError):
        _device(calibration_matrix=[1.0] * 42)


def test_calibration_must_be_list():
    with pytest.raises(ConfigError):
        _device(calibration_matrix="1 2 3 4 5 6")


def test_state_defaults_are_zero():
    state = FtsState()
    assert state.raw == (0.0,) * 6
    assert state.tared == (0.0,) * 6