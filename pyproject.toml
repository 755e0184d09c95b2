[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vosutils"
version = "0.1.0"
description = "Building blocks for cooperative embedded-style programs: CRC-16/Modbus, ring queues, lists, hash tables, trees, state machines, button debouncing, buffered logging, a line shell, a tick scheduler, bit-banged I2C and Modbus helpers."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "embedded",
    "crc16",
    "modbus",
    "ring-buffer",
    "state-machine",
    "scheduler",
    "shell",
    "i2c",
    "can",
    "button",
    "logging",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vosutils"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
