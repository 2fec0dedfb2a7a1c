[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dynsssp"
version = "0.1.0"
description = "Single-source shortest paths on weighted directed graphs, repaired incrementally after edge deletions and insertions"
requires-python = ">=3.10"
dependencies = []
keywords = ["shortest-path", "dijkstra", "sssp", "dynamic-graph", "graph-algorithms"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dynsssp = "dynsssp.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dynsssp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
