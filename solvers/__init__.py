"""Solvers package for the robot scheduler."""

from .base import Solver
from .greedy import GreedyDispatchSolver, DispatchState

__all__ = ['Solver', 'GreedyDispatchSolver', 'DispatchState']
