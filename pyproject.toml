[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gemkit"
version = "0.1.0"
description = "Integer programming models and graph edit distance formulations, written out as LP and MPS files"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "graph matching",
    "graph edit distance",
    "bipartite matching",
    "integer programming",
    "linear programming",
    "mps",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gemkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
