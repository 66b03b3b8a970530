[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gorplay"
version = "0.1.0"
description = "Building blocks for recording and replaying HTTP traffic: modifier options, rate limiting, statistics, capture filters and pcap output."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "http",
    "traffic",
    "replay",
    "shadowing",
    "load-testing",
    "pcap",
    "bpf",
    "capture",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Testing :: Traffic Generation",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gorplay"]

[tool.hatch.build.targets.sdist]
include = ["gorplay", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
