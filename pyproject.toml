[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "clopt"
version = "1.0.0"
description = "Redundancy-free command-line option parser driven by a list of option blocks with callbacks"
requires-python = ">=3.10"
dependencies = []
keywords = ["command-line", "options", "argv", "parser", "getopt"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Environment :: Console",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
clopt-demo = "clopt.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["clopt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
