[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chainregistry"
version = "0.1.0"
description = "Library for a registry of chain configurations: standard validation parameters, config collection, compressed genesis files, staging and a mock JSON-RPC server."
requires-python = ">=3.11"
keywords = ["registry", "chain", "configuration", "toml", "genesis", "zstd", "json-rpc"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Typing :: Typed",
]
dependencies = [
    "tomli-w",
    "zstandard",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["chainregistry"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
