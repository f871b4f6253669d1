"""Truncation selection."""

import math

import numpy as np

from genesim.errors import InvalidParameterError
from genesim.population import EvaluatedPopulation
from genesim.selection.base import require_population


def truncation_selection(threshold: float = 0.5):
    """Create a truncation parent selector.

    Only the best ``threshold`` fraction of the population (at least one
    individual) may become a parent. Parents are taken from this mating pool
    in order from best to worst, starting over when the pool is exhausted.
    The selection is deterministic and draws no random numbers.

    Args:
        threshold: Fraction of the population forming the mating pool, in (0, 1].

    Returns:
        A SelectionOp callable.

    Raises:
        InvalidParameterError: If threshold is not in (0, 1].

    Example:
        >>> selector = truncation_selection(threshold=0.25)
        >>> parents = selector(evaluated, n_parents=20, rng=rng)
    """
    if not 0.0 < threshold <= 1.0:
        raise InvalidParameterError(f"threshold must be in (0, 1], got {threshold}")

    def selector(evaluated: EvaluatedPopulation, n_parents: int, rng: np.random.Generator) -> np.ndarray:
        pop_size = require_population(evaluated, 1, "truncation")
        pool_size = max(1, math.floor(pop_size * threshold))
        mating_pool = evaluated.ranking()[:pool_size]
        return mating_pool[np.arange(n_parents) % pool_size].astype(np.intp)

    return selector
