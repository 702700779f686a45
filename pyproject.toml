[build-system]
requires = ["hatchling>=1.18"]
build-backend = "hatchling.build"

[project]
name = "xztools"
version = "0.5.11"
description = "Building blocks for the xz container format (uvarints, checksums, stream header, footer and index), rolling hashes, GNU-style flag parsing, a small logger and the xb build helper"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "xz",
    "container-format",
    "crc32",
    "crc64",
    "uvarint",
    "rolling-hash",
    "command-line",
    "logging",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
xb = "xztools.xb:main"

[tool.hatch.build.targets.wheel]
packages = ["xztools"]

[tool.hatch.build.targets.sdist]
include = ["xztools", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
