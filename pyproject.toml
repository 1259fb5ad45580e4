[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hnsconfig"
version = "0.1.0"
description = "Admission responses, server checks and label bookkeeping for hierarchical namespace configuration"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "namespaces",
    "hierarchy",
    "admission",
    "authorization",
    "labels",
    "multi-tenancy",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hnsconfig"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
