[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scs2d"
version = "0.1.0"
description = "Building blocks for a 2D rigid body constraint solver: matrices, integrators, linear solvers, constraints and forces"
requires-python = ">=3.10"
dependencies = []
keywords = ["physics", "rigid body", "constraints", "simulation", "2d", "solver", "integrator"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["scs2d"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
