"""Order-preserving recombination for permutation encoded genomes.

Both operators always produce valid permutations: every element of the
parents appears exactly once in each child.
"""

import numpy as np

from genesim.random import random_slice


def _order_one(donor: np.ndarray, other: np.ndarray, start: int, end: int) -> np.ndarray:
    length = len(donor)
    child = np.empty_like(donor)
    child[start:end] = donor[start:end]
    # Remaining elements in the order they appear in the other parent, starting after the slice
    rotated = np.roll(other, -end)
    remaining = rotated[~np.isin(rotated, donor[start:end])]
    positions = (end + np.arange(len(remaining))) % length
    child[positions] = remaining
    return child


def _partially_mapped(donor: np.ndarray, other: np.ndarray, start: int, end: int) -> np.ndarray:
    child = other.copy()
    child[start:end] = donor[start:end]
    position_in_other = {value: idx for idx, value in enumerate(other.tolist())}
    segment = set(donor[start:end].tolist())

    for i in range(start, end):
        value = other[i]
        if value in segment:
            continue
        pos = i
        while start <= pos < end:
            pos = position_in_other[donor[pos].item()]
        child[pos] = value
    return child


def order_one_crossover():
    """Create an order-one crossover (OX1) operator.

    A random slice shared by all children is copied from parent ``c`` into
    child ``c``; the remaining positions are filled with the missing elements
    in the order they appear in parent ``(c + 1) mod k``, starting right after
    the slice.

    Returns:
        A CrossoverOp callable.
    """

    def crossover(parents: tuple[np.ndarray, ...], rng: np.random.Generator) -> list[np.ndarray]:
        n_parents = len(parents)
        start, end = random_slice(rng, len(parents[0]))
        return [_order_one(parents[c], parents[(c + 1) % n_parents], start, end) for c in range(n_parents)]

    return crossover


def partially_mapped_crossover():
    """Create a partially mapped crossover (PMX) operator.

    A random slice shared by all children is copied from parent ``c`` into
    child ``c``; all other positions keep the values of parent
    ``(c + 1) mod k`` except where that would duplicate an element of the
    slice, in which case the mapping defined by the slice resolves the
    conflict.

    Returns:
        A CrossoverOp callable.
    """

    def crossover(parents: tuple[np.ndarray, ...], rng: np.random.Generator) -> list[np.ndarray]:
        n_parents = len(parents)
        start, end = random_slice(rng, len(parents[0]))
        return [_partially_mapped(parents[c], parents[(c + 1) % n_parents], start, end) for c in range(n_parents)]

    return crossover
