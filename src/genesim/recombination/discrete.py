"""Discrete recombination for binary and value encoded genomes.

Discrete recombination exchanges whole loci between parents, so it works for
any 1-D array genome regardless of its dtype.
"""

import numpy as np

from genesim.errors import InvalidParameterError
from genesim.random import random_cut_points


def uniform_crossover():
    """Create a uniform crossover operator.

    Each child takes every locus from a parent chosen uniformly at random, one
    draw per locus. Produces as many children as there are parents.

    Returns:
        A CrossoverOp callable.

    Example:
        >>> crossover = uniform_crossover()
        >>> children = crossover((np.zeros(4, dtype=bool), np.ones(4, dtype=bool)), rng)
        >>> len(children)
        2
    """

    def crossover(parents: tuple[np.ndarray, ...], rng: np.random.Generator) -> list[np.ndarray]:
        stacked = np.stack(parents)
        n_parents, length = stacked.shape
        loci = np.arange(length)
        return [stacked[rng.integers(0, n_parents, size=length), loci] for _ in range(n_parents)]

    return crossover


def multi_point_crossover(n_cut_points: int = 1):
    """Create a multi-point crossover operator.

    The genome is cut at ``n_cut_points`` distinct random positions shared by
    all parents. Child ``c`` takes segment ``s`` from parent ``(c + s) mod k``,
    so with two parents and one cut point this is the classic single-point
    crossover producing two complementary children.

    Args:
        n_cut_points: Number of cut points (default: 1).

    Returns:
        A CrossoverOp callable.

    Raises:
        InvalidParameterError: If n_cut_points is not positive. The returned
            operator raises GenomeTooShortError when a genome cannot hold the
            cut points.
    """
    if n_cut_points <= 0:
        raise InvalidParameterError(f"n_cut_points must be positive, got {n_cut_points}")

    def crossover(parents: tuple[np.ndarray, ...], rng: np.random.Generator) -> list[np.ndarray]:
        n_parents = len(parents)
        length = len(parents[0])
        cuts = random_cut_points(rng, n_cut_points, length)
        bounds = [0, *cuts.tolist(), length]

        children = []
        for c in range(n_parents):
            child = parents[c].copy()
            for s, (start, end) in enumerate(zip(bounds[:-1], bounds[1:], strict=True)):
                child[start:end] = parents[(c + s) % n_parents][start:end]
            children.append(child)
        return children

    return crossover
