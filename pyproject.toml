[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "logserver"
version = "0.1.0"
description = "Collects syslog messages over UDP, queues them through NATS, stores them in SQLite and serves them over HTTP"
requires-python = ">=3.10"
keywords = ["syslog", "logging", "nats", "sqlite", "udp", "http"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: No Input/Output (Daemon)",
    "Framework :: AsyncIO",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
]
dependencies = [
    "aiohttp>=3.8",
    "aiosqlite>=0.19",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "pytest-asyncio>=0.21",
]

[project.scripts]
logserver = "logserver.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["logserver"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 120
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
