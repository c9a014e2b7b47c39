"""Building blocks for a 2D rigid body constraint solver: matrices, state, integrators, linear solvers, constraints and force generators."""

__version__ = "0.1.0"