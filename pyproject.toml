[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "synthgen"
version = "0.1.0"
description = "Composable, stateful generators of random data streams"
requires-python = ">=3.10"
dependencies = []
keywords = ["generator", "random", "test data", "synthetic data", "combinators"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["synthgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
