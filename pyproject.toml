[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spacebus"
version = "0.1.0"
description = "A small CCSDS packet software bus with a time-sliced scheduler, UDP data link and example client and server"
requires-python = ">=3.10"
dependencies = []
keywords = ["ccsds", "space packet", "software bus", "scheduler", "udp", "crc16"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Communications",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
spacebus-server = "spacebus.server:main"
spacebus-client = "spacebus.client:main"

[tool.hatch.build.targets.wheel]
packages = ["spacebus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
