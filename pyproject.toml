[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dcclcore"
version = "0.1.0"
description = "Schema model, reflection and codec context helpers for compact, bit-packed message encoding"
requires-python = ">=3.10"
dependencies = []
keywords = ["encoding", "bitpacking", "codec", "schema", "hex", "base64"]
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
    "Topic :: Communications",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dcclcore"]

[tool.pytest.ini_options]
addopts = "-ra"
