[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "indexer_common"
version = "0.1.0"
description = "Common building blocks for a blockchain indexer: byte types, protocol versions, viewing keys, pub-sub, state storage, configuration, logging and a SQLite pool"
requires-python = ">=3.10"
keywords = ["indexer", "blockchain", "pub-sub", "sqlite", "configuration", "asyncio"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]
dependencies = [
    "cryptography",
    "pyyaml",
    "aiosqlite",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["indexer_common"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
