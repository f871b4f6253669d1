"""Reinsertion strategies that do not rank individuals by fitness."""

from collections.abc import Sequence
from typing import Any

import numpy as np

from genesim.errors import ReinsertionShortfallError, ReinsertionSizeMismatchError, check_probability
from genesim.population import EvaluatedPopulation
from genesim.protocols import BatchEvaluator


def full_replacement():
    """Create a full replacement reinsertion strategy.

    The offspring become the next generation as they are; no parent survives.
    The algorithm must therefore produce exactly ``population_size`` offspring.

    Returns:
        A ReinsertionOp callable.

    Example:
        >>> reinsert = full_replacement()
        >>> individuals, known = reinsert(children, evaluated, len(children), rng, evaluate_batch)
        >>> known
        [None, None, ...]
    """

    def reinsert(
        offspring: Sequence[Any],
        parents: EvaluatedPopulation,
        population_size: int,
        rng: np.random.Generator,
        evaluate_batch: BatchEvaluator,
    ) -> tuple[list[Any], list[float | None]]:
        if len(offspring) != population_size:
            raise ReinsertionSizeMismatchError(
                f"full replacement needs exactly {population_size} offspring, got {len(offspring)}"
            )
        return list(offspring), [None] * population_size

    return reinsert


def uniform_reinsertion(replace_ratio: float = 1.0):
    """Create a uniform random reinsertion strategy.

    ``round(population_size * replace_ratio)`` offspring (at most all of them)
    are picked uniformly at random without replacement. The remaining slots are
    filled with parents picked uniformly at random without replacement.

    Args:
        replace_ratio: Share of the next generation taken from the offspring,
            in [0, 1]. Default is 1.0.

    Returns:
        A ReinsertionOp callable.

    Raises:
        InvalidProbabilityError: If replace_ratio is outside [0, 1].
    """
    replace_ratio = check_probability("replace_ratio", replace_ratio)

    def reinsert(
        offspring: Sequence[Any],
        parents: EvaluatedPopulation,
        population_size: int,
        rng: np.random.Generator,
        evaluate_batch: BatchEvaluator,
    ) -> tuple[list[Any], list[float | None]]:
        n_offspring = min(int(population_size * replace_ratio + 0.5), len(offspring))
        n_parents = population_size - n_offspring
        if n_parents > len(parents):
            raise ReinsertionShortfallError(
                f"cannot fill {population_size} slots from {len(offspring)} offspring and {len(parents)} parents"
            )

        offspring_idx = rng.choice(len(offspring), size=n_offspring, replace=False)
        parent_idx = rng.choice(len(parents), size=n_parents, replace=False)

        individuals = [offspring[i] for i in offspring_idx]
        known: list[float | None] = [None] * n_offspring
        for i in parent_idx:
            genome, fitness = parents.individual(int(i))
            individuals.append(genome)
            known.append(fitness)
        return individuals, known

    return reinsert
