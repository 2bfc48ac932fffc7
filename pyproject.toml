[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "mcplaunch"
version = "0.1.0"
description = "Helpers for MCP server packages: reference parsing, hub version lookup, audit logging and display formatting"
requires-python = ">=3.10"
dependencies = []
keywords = ["mcp", "model-context-protocol", "registry", "audit", "package-reference"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["mcplaunch*"]

[tool.pytest.ini_options]
addopts = "-ra"
