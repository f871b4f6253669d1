"""Mutation operators for permutation encoded genomes.

Both operators only move elements around, so a permutation stays a
permutation.
"""

import numpy as np

from genesim.errors import check_probability


def swap_order_mutation(rate: float):
    """Create a swap mutation operator.

    Each locus is, with probability ``rate``, swapped with another locus
    chosen uniformly at random.

    Args:
        rate: Probability of swapping each locus, in [0, 1].

    Returns:
        A MutationOp callable.
    """
    rate = check_probability("rate", rate)

    def mutate(genome: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        length = len(genome)
        if rate == 0.0 or length < 2:
            return genome
        mutated = genome.copy()
        for i in np.flatnonzero(rng.random(length) < rate):
            # Uniform over the other loci
            j = (i + rng.integers(1, length)) % length
            mutated[i], mutated[j] = mutated[j], mutated[i]
        return mutated

    return mutate


def insert_order_mutation(rate: float):
    """Create an insertion mutation operator.

    Each locus is, with probability ``rate``, removed from its position and
    reinserted at a position chosen uniformly at random.

    Args:
        rate: Probability of moving each locus, in [0, 1].

    Returns:
        A MutationOp callable.
    """
    rate = check_probability("rate", rate)

    def mutate(genome: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        length = len(genome)
        if rate == 0.0 or length < 2:
            return genome
        order = list(range(length))
        for i in np.flatnonzero(rng.random(length) < rate):
            order.remove(i)
            order.insert(int(rng.integers(0, length)), i)
        return genome[order]

    return mutate
