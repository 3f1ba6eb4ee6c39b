[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iavlkit"
version = "0.1.0"
description = "Building blocks for a versioned AVL+ key-value store: varint encoding, fast nodes, an LRU cache, in-memory and prefixed stores, self-flushing batches and export stream compression."
requires-python = ">=3.10"
dependencies = [
    "sortedcontainers",
]
keywords = ["avl", "merkle", "key-value", "database", "varint", "lru-cache", "batch"]
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
    "Topic :: Database :: Database Engines/Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["iavlkit"]

[tool.hatch.build.targets.sdist]
include = ["iavlkit", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
