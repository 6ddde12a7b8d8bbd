# fastcat

Software devices for a cyclic control loop. Each device takes its settings
from a plain mapping, reads its input signals once per cycle, and publishes
its results in a state object (`device.state`) that other code can read.

## Devices

| Module | Device | What it does |
| --- | --- | --- |
| `fastcat.conditional` | `Conditional` | Compares one signal with a constant (`<`, `<=`, `>`, `>=`, `==`, `!=`) |
| `fastcat.faulter` | `Faulter` | Reports `ALL_DEVICE_FAULT` while its signal is non-zero and it is enabled |
| `fastcat.saturation` | `Saturation` | Clamps one signal between `lower_limit` and `upper_limit` |
| `fastcat.schmitt_trigger` | `SchmittTrigger` | Two-threshold switch with hysteresis; output is 0 or 1 |
| `fastcat.filter` | `Filter` | Moving-average (`MovingAverageFilter`) or digital A/B (`DigitalABFilter`) filter |
| `fastcat.function` | `Function` | Polynomial, sum, product, power, exponential or sigmoid |
| `fastcat.linear_interpolation` | `LinearInterpolation` | Table lookup with linear interpolation, saturating outside the domain |
| `fastcat.pid` | `Pid` | PID controller activated by command, with deadband, persistence and time limit |
| `fastcat.signal_generator` | `SignalGenerator` | Sine, saw-tooth, Gaussian or uniform random source (no input signals) |
| `fastcat.three_node_thermal_model` | `ThreeNodeThermalModel` | Estimates motor winding temperatures and faults on over-temperature |
| `fastcat.fts` | `Fts` | Force-torque wrench from calibrated raw signals, with tare and per-axis guard limits |

All devices derive from `fastcat.device_base.DeviceBase`. Each has its own
state dataclass (for example `SaturationState`, `PidState`, `FtsState`)
deriving from `DeviceState`, which carries `name` and `time`.

## The cycle

Every device follows the same cycle:

1. `configure(node)` once, with a mapping of settings.
2. Set `device.time` (and, for `Pid`, `device.loop_period`) each cycle.
3. `read()` to pull input signals and update the state.
4. `process()`, which returns a `FaultType` (`NO_FAULT` or `ALL_DEVICE_FAULT`).
5. `write(cmd)` whenever a command arrives for the device.
6. `fault()` and `reset()` when the whole system faults or recovers.

Commands are small dataclasses:

- `fastcat.faulter.FaulterEnableCmd(enable)`
- `fastcat.pid.PidActivateCmd(setpoint, deadband, persistence_duration, max_duration)`
- `fastcat.three_node_thermal_model.SeedThermalModelTemperatureCmd(seed_temperature)`
- `fastcat.fts.FtsTareCmd()` and `fastcat.fts.FtsEnableGuardFaultCmd(enable)`

Devices that take no commands raise `CommandError` from `write`.

Problems are reported as exceptions from `fastcat.device_base`:

- `ConfigError` (also a `ValueError`) for a bad or missing setting.
- `CommandError` for a command the device will not accept.
- `DeviceError` for other problems, such as an unconnected signal or a
  `LinearInterpolation` input outside its domain when
  `enable_out_of_bounds_fault` is set. The other two derive from it.

## Signals

A settings mapping lists its inputs under `signals`. Each entry is either a
constant:

```python
{"observed_device_name": "FIXED_VALUE", "fixed_value": 3.5}
```

or names another device and one of its values:

```python
{"observed_device_name": "wave", "request_signal_name": "output"}
```

`fastcat.device_base.parse_signals` turns the list into `Signal` objects.
A signal naming another device is not connected automatically: set its
`source` to a callable returning the current value before calling `read()`.

## Example

```python
from fastcat.saturation import Saturation
from fastcat.signal_generator import SignalGenerator

wave = SignalGenerator()
wave.configure({
    "name": "wave",
    "signal_generator_type": "SINE_WAVE",
    "angular_frequency": 1.0,
    "phase": 0.0,
    "amplitude": 2.0,
    "offset": 0.0,
})

clamp = Saturation()
clamp.configure({
    "name": "clamp",
    "lower_limit": -1.0,
    "upper_limit": 1.0,
    "signals": [{"observed_device_name": "wave", "request_signal_name": "output"}],
})
clamp.signals[0].source = lambda: wave.state.output

for step in range(5):
    wave.time = clamp.time = step * 0.5
    wave.read()
    clamp.read()
    print(clamp.state.output)
```

## What this package does not do

- It has no loop manager: nothing runs the cycle, routes commands or
  connects signals by name for you.
- It does not read configuration files; `configure` takes an
  already-loaded mapping.
- It has no devices that talk to drives, sensors or other hardware, and no
  command-line program.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```