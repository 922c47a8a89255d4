[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tnac"
version = "0.1.0"
description = "Value model, diagnostics, IR control-flow graph and compiler support structures for a small calculator language"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "calculator", "ir", "cfg", "control-flow-graph"]
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
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tnac"]

[tool.pytest.ini_options]
addopts = "-ra"
