[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pulsarlang"
version = "0.1.0"
description = "Lexer, syntax tree, type inference and backend pipeline for the Pulsar language"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "lexer", "type-inference", "hindley-milner", "accelerator"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pulsarlang"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
