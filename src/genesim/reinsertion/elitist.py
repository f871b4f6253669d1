"""Elitist reinsertion."""

from collections.abc import Sequence
from typing import Any

import numpy as np

from genesim.errors import InvalidParameterError, ReinsertionShortfallError
from genesim.population import EvaluatedPopulation
from genesim.protocols import BatchEvaluator


def elitist_reinsertion(elite_count: int = 1, offspring_has_precedence: bool = True, fill_shortfall: bool = True):
    """Create an elitist reinsertion strategy.

    Elitist reinsertion always keeps the best ``elite_count`` parents and fills
    the remaining slots of the next generation with offspring.

    When there are more offspring than free slots, the offspring are evaluated
    and the best ones are kept. When there are fewer, the next best parents
    fill the gap if ``fill_shortfall`` is set.

    With ``offspring_has_precedence=False`` the free slots are instead filled
    by merit from the non-elite parents and all offspring together; on equal
    fitness the parent is kept, so an offspring only enters when it is strictly
    better.

    Args:
        elite_count: Number of elite parents to preserve. Default is 1.
        offspring_has_precedence: Fill free slots with offspring first.
            Default is True.
        fill_shortfall: Fill missing slots with the next best parents instead
            of failing. Default is True.

    Returns:
        A ReinsertionOp callable.

    Raises:
        InvalidParameterError: If elite_count is negative.

    Example:
        >>> reinsert = elitist_reinsertion(elite_count=2)
        >>> individuals, known = reinsert(children, evaluated, 10, rng, evaluate_batch)
        >>> # individuals[:2] are the two best parents, known[:2] their fitness
    """
    if elite_count < 0:
        raise InvalidParameterError(f"elite_count must be non-negative, got {elite_count}")

    def reinsert(
        offspring: Sequence[Any],
        parents: EvaluatedPopulation,
        population_size: int,
        rng: np.random.Generator,
        evaluate_batch: BatchEvaluator,
    ) -> tuple[list[Any], list[float | None]]:
        n_elite = min(elite_count, population_size)
        if n_elite > len(parents):
            raise ReinsertionShortfallError(f"cannot keep {n_elite} elite parents out of {len(parents)}")

        # Stable ranking keeps tie-breaking deterministic
        parent_ranking = parents.ranking()
        individuals: list[Any] = []
        known: list[float | None] = []
        for i in parent_ranking[:n_elite]:
            genome, fitness = parents.individual(int(i))
            individuals.append(genome)
            known.append(fitness)

        n_free = population_size - n_elite
        runners_up = parent_ranking[n_elite:]

        if not offspring_has_precedence:
            candidates = [parents.individual(int(i)) for i in runners_up]
            if offspring:
                offspring_fitness = evaluate_batch(offspring)
                candidates += [(child, float(f)) for child, f in zip(offspring, offspring_fitness, strict=True)]
            if len(candidates) < n_free:
                raise ReinsertionShortfallError(
                    f"cannot fill {population_size} slots from {len(offspring)} offspring and {len(parents)} parents"
                )
            # Parents come first in candidates, so they win ties
            order = parents.objective.ranking(np.array([fitness for _, fitness in candidates], dtype=np.float64))
            for i in order[:n_free]:
                genome, fitness = candidates[i]
                individuals.append(genome)
                known.append(fitness)
            return individuals, known

        if len(offspring) > n_free:
            offspring_fitness = np.asarray(evaluate_batch(offspring), dtype=np.float64)
            for i in parents.objective.ranking(offspring_fitness)[:n_free]:
                individuals.append(offspring[i])
                known.append(float(offspring_fitness[i]))
            return individuals, known

        individuals.extend(offspring)
        known.extend([None] * len(offspring))

        shortfall = n_free - len(offspring)
        if shortfall > 0:
            if not fill_shortfall:
                raise ReinsertionShortfallError(
                    f"{len(offspring)} offspring cannot fill {n_free} free slots and fill_shortfall is disabled"
                )
            if shortfall > len(runners_up):
                raise ReinsertionShortfallError(
                    f"cannot fill {population_size} slots from {len(offspring)} offspring and {len(parents)} parents"
                )
            for i in runners_up[:shortfall]:
                genome, fitness = parents.individual(int(i))
                individuals.append(genome)
                known.append(fitness)
        return individuals, known

    return reinsert
