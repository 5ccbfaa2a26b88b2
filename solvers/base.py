"""Abstract base class for solvers."""

from abc import ABC, abstractmethod

from timeline.schedule import Schedule
from models.problem import SchedulingProblem


class Solver(ABC):
    """
    Abstract base class for all dispatch algorithms.
    Any algorithm must implement this interface.
    """

    @abstractmethod
    def solve(self, problem: SchedulingProblem) -> Schedule:
        """
        Build a complete schedule for the problem.

        Args:
            problem: The problem instance to solve

        Returns:
            The produced schedule
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
