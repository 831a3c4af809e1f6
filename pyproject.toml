[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uaslink"
version = "0.1.0"
description = "MAVLink vehicle helpers: quaternion and frame conversions, mode strings, link statistics, diagnostics and plugin filtering"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["mavlink", "uav", "drone", "quaternion", "autopilot", "px4", "ardupilot"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["uaslink"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
