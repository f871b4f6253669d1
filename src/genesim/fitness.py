"""Optimization direction and fitness ordering.

Fitness values are plain floats. Whether higher or lower values are better is
decided by the Objective, which every component that ranks individuals
consults instead of hardcoding a direction.
"""

from enum import Enum

import numpy as np

from genesim.errors import InvalidParameterError


class Objective(Enum):
    """Direction of optimization.

    Example:
        >>> Objective.MAXIMIZE.is_better(2.0, 1.0)
        True
        >>> Objective.MINIMIZE.ranking(np.array([3.0, 1.0, 2.0]))
        array([1, 2, 0])
    """

    MAXIMIZE = "maximize"
    MINIMIZE = "minimize"

    @property
    def worst(self) -> float:
        """The lowest possible fitness in this direction, used as initial sentinel."""
        return -np.inf if self is Objective.MAXIMIZE else np.inf

    def is_better(self, a: float, b: float) -> bool:
        """Return True if fitness ``a`` is strictly better than ``b``."""
        return a > b if self is Objective.MAXIMIZE else a < b

    def reaches(self, fitness: float, target: float) -> bool:
        """Return True if ``fitness`` is at least as good as ``target``."""
        return fitness >= target if self is Objective.MAXIMIZE else fitness <= target

    def improvement(self, new: float, old: float) -> float:
        """Signed improvement of ``new`` over ``old``; positive means better."""
        return new - old if self is Objective.MAXIMIZE else old - new

    def ranking(self, fitness: np.ndarray) -> np.ndarray:
        """Indices that order ``fitness`` from best to worst.

        Uses a stable sort so that ties keep their original order, which keeps
        every operator built on top of it deterministic.
        """
        keys = -fitness if self is Objective.MAXIMIZE else fitness
        return np.argsort(keys, kind="stable").astype(np.intp)

    def best_index(self, fitness: np.ndarray) -> int:
        """Index of the first best value in ``fitness``."""
        return int(np.argmax(fitness) if self is Objective.MAXIMIZE else np.argmin(fitness))


def as_objective(value: "Objective | str") -> Objective:
    """Resolve an Objective from an enum member or its string value.

    Raises:
        InvalidParameterError: If the string names no known objective.
    """
    if isinstance(value, Objective):
        return value
    try:
        return Objective(value)
    except ValueError:
        available = ", ".join(o.value for o in Objective)
        raise InvalidParameterError(f"Unknown objective '{value}'. Available objectives: {available}") from None
