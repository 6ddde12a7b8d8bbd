"""Signal-processing and safety devices for a cyclic control loop."""

__version__ = "0.1.0"

__all__ = [
    "device_base",
    "conditional",
    "faulter",
    "saturation",
    "schmitt_trigger",
    "filter",
    "function",
    "linear_interpolation",
    "pid",
    "signal_generator",
    "three_node_thermal_model",
    "fts",
]