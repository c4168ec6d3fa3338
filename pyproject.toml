[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "granitedb"
version = "0.1.0"
description = "Building blocks for a document-oriented database: configuration, cursors, caches, compression, encryption, access control, text embeddings and a line-protocol CLI client"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = [
    "database",
    "nosql",
    "document-store",
    "bloom-filter",
    "lru-cache",
    "rbac",
    "compression",
    "aes-gcm",
]
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

[project.scripts]
granite-cli = "granitedb.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["granitedb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
