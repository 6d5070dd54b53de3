[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vamanatools"
version = "0.1.0"
description = "Utilities for graph-based approximate nearest neighbour indices: distances, recall, cached binary I/O and shard merging"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "nearest-neighbour",
    "ann",
    "vector-search",
    "recall",
    "graph-index",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
vamana-merge-shards = "vamanatools.merge:main"

[tool.hatch.build.targets.wheel]
packages = ["vamanatools"]

[tool.pytest.ini_options]
addopts = "-ra"
