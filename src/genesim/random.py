"""Seeded random source and helpers shared by the operators.

All stochastic decisions of a simulation flow through one
``numpy.random.Generator`` owned by the Simulator. There is no module-level
generator and no fallback to system entropy: a seed is always required.
"""

import numpy as np

from genesim.errors import GenomeTooShortError, InvalidParameterError, MissingSeedError

Seed = int | np.random.Generator


def make_rng(seed: Seed | None) -> np.random.Generator:
    """Create a random generator from an explicit seed.

    Args:
        seed: Integer seed, or an existing Generator which is returned as is.

    Returns:
        A numpy Generator.

    Raises:
        MissingSeedError: If seed is None.

    Example:
        >>> rng = make_rng(42)
        >>> make_rng(rng) is rng
        True
    """
    if seed is None:
        raise MissingSeedError("an explicit seed is required; implicit seeding from system entropy is not supported")
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def random_cut_points(rng: np.random.Generator, n: int, length: int) -> np.ndarray:
    """Draw ``n`` distinct sorted cut points strictly inside a genome.

    A cut point ``c`` splits a genome of ``length`` loci into ``[:c]`` and
    ``[c:]``, so valid cut points lie in ``[1, length - 1]``.

    Args:
        rng: Random generator.
        n: Number of cut points.
        length: Genome length.

    Returns:
        Sorted array of shape (n,).

    Raises:
        InvalidParameterError: If n is not positive.
        GenomeTooShortError: If the genome is too short to hold n distinct
            cut points.
    """
    if n <= 0:
        raise InvalidParameterError(f"number of cut points must be positive, got {n}")
    if length - 1 < n:
        raise GenomeTooShortError(f"genome of length {length} cannot hold {n} distinct cut points")
    return np.sort(rng.choice(np.arange(1, length), size=n, replace=False))


def random_slice(rng: np.random.Generator, length: int) -> tuple[int, int]:
    """Draw a random non-empty slice ``[start, end)`` of a genome."""
    if length < 1:
        raise GenomeTooShortError(f"cannot slice a genome of length {length}")
    start, end = np.sort(rng.choice(length + 1, size=2, replace=False))
    return int(start), int(end)
