[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "progbars"
version = "0.1.0"
description = "Decorators, unit formatting, ETA/speed estimates and ordering helpers for terminal progress bars"
requires-python = ">=3.10"
dependencies = [
    "wcwidth",
]
keywords = ["progress", "progress-bar", "terminal", "decorators", "eta", "speed", "ewma"]
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
    "Topic :: Terminals",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["progbars"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
