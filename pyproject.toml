[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mateterm"
version = "0.1.0"
description = "Terminal profile model: typed properties, colour palettes, fonts and an in-memory settings store with change tracking"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["terminal", "profile", "palette", "settings", "colors", "fonts"]
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
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pillow",
]

[tool.hatch.build.targets.wheel]
packages = ["mateterm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
