[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shasper"
version = "0.1.0"
description = "SimpleSerialize (SSZ) codec, Keccak-256 hashing, consensus test-vector descriptions and an in-memory Casper FFG finality model"
requires-python = ">=3.10"
keywords = ["ssz", "serialization", "keccak", "casper", "ffg", "consensus", "beacon-chain"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "pycryptodome",
    "pynacl",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["shasper"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
