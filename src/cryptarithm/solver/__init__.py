"""Column-wise cryptarithm solver."""

from cryptarithm.solver.solver import run, solve

__all__ = ["run", "solve"]
