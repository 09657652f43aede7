[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tapclock"
version = "0.1.0"
description = "Tap-tempo MIDI clock generator with a small menu-driven panel model"
requires-python = ">=3.10"
dependencies = []
keywords = ["midi", "clock", "tap tempo", "bpm", "control change"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tapclock-count = "tapclock.count:main"

[tool.hatch.build.targets.wheel]
packages = ["tapclock"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
