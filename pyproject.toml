[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lanchat"
version = "0.1.0"
description = "A small local TCP chat: one process serves, the others join and each line is relayed to the other clients."
requires-python = ">=3.10"
dependencies = []
keywords = ["chat", "tcp", "broadcast", "localhost", "terminal"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lanchat = "lanchat.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lanchat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
