[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "witimu"
version = "1.0.0"
description = "Protocol driver for WIT inertial measurement units over serial, Modbus, CAN and I2C"
requires-python = ">=3.10"
dependencies = []
keywords = ["imu", "ahrs", "modbus", "can", "i2c", "sensor", "protocol"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["witimu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
