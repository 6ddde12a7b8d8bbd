[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fastcat"
version = "0.1.0"
description = "Signal-processing and safety devices for a cyclic control loop: filters, functions, PID, thermal model and force-torque sensing"
requires-python = ">=3.10"
dependencies = []
keywords = ["control", "filter", "pid", "signal", "force-torque", "thermal-model", "interpolation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fastcat"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
