[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rsource"
version = "0.1.0"
description = "Text helpers for scanning Rust source: identifiers, closures, visibility, declaration headers and locating the standard library sources"
requires-python = ">=3.10"
dependencies = []
keywords = ["rust", "source", "parsing", "text", "identifiers"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rsource"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
