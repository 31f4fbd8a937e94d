[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "unstructbench"
version = "0.1.0"
description = "Synthetic unstructured-mesh I/O benchmark: superquadric prism grids, time-stepped data and per-task output files"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "benchmark",
    "io",
    "unstructured mesh",
    "superquadric",
    "xdmf",
    "prism mesh",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
unstructbench = "unstructbench.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["unstructbench"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
