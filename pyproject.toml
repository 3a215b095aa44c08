[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shell42"
version = "0.1.0"
description = "A small interactive Unix-style command shell with pipes, redirections, aliases and history"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "command-line", "pipes", "redirection", "alias", "history"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
shell42 = "shell42.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["shell42"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
