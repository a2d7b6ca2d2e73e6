[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "grimoire"
version = "0.1.0"
description = "Small building blocks: identifiers, logging, caches, state machines, encoders, rate limiting, markdown articles and image steganography."
requires-python = ">=3.10"
keywords = [
    "logging",
    "cache",
    "state machine",
    "rate limiting",
    "markdown",
    "uid",
    "encoding",
    "wsgi",
    "steganography",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]
dependencies = [
    "pycryptodome",
    "markdown-it-py",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["grimoire"]

[tool.pytest.ini_options]
addopts = "-ra"
