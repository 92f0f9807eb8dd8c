[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "intarui"
version = "0.1.0"
description = "State, theming, styled text and layout for a terminal interface that follows VM scenario runs"
requires-python = ">=3.10"
dependencies = []
keywords = ["tui", "terminal", "theme", "scenario", "virtual-machines", "markdown"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["intarui"]

[tool.pytest.ini_options]
addopts = "-ra"
