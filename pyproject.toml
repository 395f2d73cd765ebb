[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lifestag"
version = "0.1.0"
description = "A terminal arcade game: dodge the time-stealing monsters and collect money."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "terminal", "arcade", "ansi", "console"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lifestag = "lifestag.menu:main"

[tool.hatch.build.targets.wheel]
packages = ["lifestag"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
