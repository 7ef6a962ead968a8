[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "shellchess"
version = "1.0.0"
description = "Play chess in the terminal with algebraic notation, against a friend or a Stockfish opponent"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "terminal", "algebraic-notation", "stockfish", "game"]
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
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
shell-chess = "shellchess.shell:main"

[tool.setuptools.packages.find]
include = ["shellchess*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
