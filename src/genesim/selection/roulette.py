"""Fitness-proportionate selection: roulette wheel and stochastic universal sampling."""

import numpy as np

from genesim.fitness import Objective
from genesim.population import EvaluatedPopulation
from genesim.selection.base import require_population

_EPSILON = 1e-10


def _selection_weights(evaluated: EvaluatedPopulation) -> np.ndarray | None:
    """Selection probability of each individual, or None when all are equally fit.

    Fitness values are shifted so that the worst individual has weight ε and
    the best the largest weight, which works for negative values and for
    both optimization directions:

        maximize: weights_i = f_i - min(f) + ε
        minimize: weights_i = max(f) - f_i + ε
    """
    fitness = evaluated.fitness
    if np.all(fitness == fitness[0]):
        return None
    if evaluated.objective is Objective.MAXIMIZE:
        weights = fitness - evaluated.lowest + _EPSILON
    else:
        weights = evaluated.highest - fitness + _EPSILON
    return weights / weights.sum()


def roulette_wheel_selection():
    """Create a roulette wheel (fitness-proportionate) parent selector.

    Every parent is drawn independently with probability proportional to its
    shifted fitness. If all individuals are equally fit, selection is uniform.

    Returns:
        A SelectionOp callable.

    Example:
        >>> selector = roulette_wheel_selection()
        >>> parents = selector(evaluated, n_parents=20, rng=rng)
    """

    def selector(evaluated: EvaluatedPopulation, n_parents: int, rng: np.random.Generator) -> np.ndarray:
        pop_size = require_population(evaluated, 1, "roulette wheel")
        probs = _selection_weights(evaluated)
        selected = rng.choice(pop_size, size=n_parents, replace=True, p=probs)
        return selected.astype(np.intp)

    return selector


def universal_sampling_selection():
    """Create a stochastic universal sampling parent selector.

    Places ``n_parents`` equally spaced pointers with a single random offset
    on the roulette wheel, which gives every individual a number of copies
    close to its expected value. The selected parents are shuffled so that
    neighbouring pointers do not always mate.

    Returns:
        A SelectionOp callable.
    """

    def selector(evaluated: EvaluatedPopulation, n_parents: int, rng: np.random.Generator) -> np.ndarray:
        pop_size = require_population(evaluated, 1, "universal sampling")
        probs = _selection_weights(evaluated)
        if probs is None:
            probs = np.full(pop_size, 1.0 / pop_size)

        cumulative = np.cumsum(probs)
        cumulative[-1] = 1.0
        pointers = (rng.random() + np.arange(n_parents)) / n_parents
        selected = np.searchsorted(cumulative, pointers, side="right")
        return rng.permutation(selected).astype(np.intp)

    return selector
