"""Abstract base class for evaluators."""

from abc import ABC, abstractmethod

from timeline.schedule import Schedule


class Evaluator(ABC):
    """
    Abstract base class for schedule evaluators.
    Computes a headline score of a schedule plus its components.
    """

    @abstractmethod
    def evaluate(self, schedule: Schedule) -> float:
        """
        Evaluate a schedule and return its score.

        Args:
            schedule: The schedule to evaluate

        Returns:
            Score value
        """
        pass

    @abstractmethod
    def get_components(self, schedule: Schedule) -> dict:
        """Individual numeric components behind the score."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
