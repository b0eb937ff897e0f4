[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "goblin"
version = "0.1.0"
description = "Runtime core of a small embeddable scripting language: scopes, a tokenizer, statements and value conversions."
requires-python = ">=3.10"
dependencies = []
keywords = ["scripting", "interpreter", "embedded language", "tokenizer", "scope"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["goblin"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
