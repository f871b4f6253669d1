"""Mutation operators for binary and value encoded genomes.

Every operator visits each locus independently and mutates it with
probability ``rate``. A rate of 0 returns the genome unchanged without drawing
any random numbers; a rate of 1 mutates every locus.
"""

import numpy as np

from genesim.errors import InvalidParameterError, check_probability


def bit_flip_mutation(rate: float):
    """Create a bit flip mutation operator for binary genomes.

    Args:
        rate: Probability of flipping each bit, in [0, 1].

    Returns:
        A MutationOp callable.

    Raises:
        InvalidProbabilityError: If rate is outside [0, 1].

    Example:
        >>> mutate = bit_flip_mutation(rate=1.0)
        >>> mutate(np.array([True, False]), rng)
        array([False,  True])
    """
    rate = check_probability("rate", rate)

    def mutate(genome: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        if rate == 0.0:
            return genome
        mask = rng.random(len(genome)) < rate
        return np.logical_xor(genome, mask).astype(genome.dtype)

    return mutate


def random_value_mutation(rate: float, low: float, high: float):
    """Create a random value mutation operator for value encoded genomes.

    A mutated locus is replaced by a value drawn uniformly from [low, high).
    Integer bounds draw integers, float bounds draw floats.

    Args:
        rate: Probability of mutating each locus, in [0, 1].
        low: Inclusive lower bound of new values.
        high: Exclusive upper bound of new values.

    Returns:
        A MutationOp callable.

    Raises:
        InvalidProbabilityError: If rate is outside [0, 1].
        InvalidParameterError: If high is not greater than low.
    """
    rate = check_probability("rate", rate)
    if high <= low:
        raise InvalidParameterError(f"value range is empty: low={low}, high={high}")
    integer = isinstance(low, (int, np.integer)) and isinstance(high, (int, np.integer))

    def mutate(genome: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        if rate == 0.0:
            return genome
        mask = rng.random(len(genome)) < rate
        if integer:
            values = rng.integers(low, high, size=len(genome))
        else:
            values = rng.uniform(low, high, size=len(genome))
        return np.where(mask, values, genome).astype(genome.dtype)

    return mutate


def breeder_value_mutation(rate: float, low: float, high: float, mutation_range: float = 0.1, precision: int = 16):
    """Create a breeder GA mutation operator for value encoded genomes.

    A mutated locus moves up or down (with equal probability) by

        step = mutation_range * (high - low) * 2 ** (-precision * u),  u ~ U[0, 1)

    which favours small steps while still allowing jumps up to
    ``mutation_range`` of the value range. Results are clipped to [low, high]
    and rounded for integer genomes.

    Args:
        rate: Probability of mutating each locus, in [0, 1].
        low: Lower bound of values.
        high: Upper bound of values.
        mutation_range: Largest step as a fraction of the value range, in (0, 1].
        precision: Exponent controlling the smallest step; must be positive.

    Returns:
        A MutationOp callable.

    Raises:
        InvalidProbabilityError: If rate is outside [0, 1].
        InvalidParameterError: If the bounds, mutation_range or precision are invalid.
    """
    rate = check_probability("rate", rate)
    if high <= low:
        raise InvalidParameterError(f"value range is empty: low={low}, high={high}")
    if not 0.0 < mutation_range <= 1.0:
        raise InvalidParameterError(f"mutation_range must be in (0, 1], got {mutation_range}")
    if precision <= 0:
        raise InvalidParameterError(f"precision must be positive, got {precision}")
    max_step = mutation_range * (high - low)

    def mutate(genome: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        if rate == 0.0:
            return genome
        length = len(genome)
        mask = rng.random(length) < rate
        signs = np.where(rng.random(length) < 0.5, -1.0, 1.0)
        steps = max_step * 2.0 ** (-precision * rng.random(length))
        mutated = np.clip(genome + mask * signs * steps, low, high)
        if np.issubdtype(genome.dtype, np.integer):
            mutated = np.rint(mutated)
        return mutated.astype(genome.dtype)

    return mutate
