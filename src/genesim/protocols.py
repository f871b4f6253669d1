"""Protocol definitions for the genetic operators.

This module defines the interfaces of the four operator roles of a genetic
algorithm. Each role is an independent, stateless strategy that can be swapped
without changing the algorithm:

1. **Selection**: Choosing parents from the evaluated population according to
   their fitness. Strategies include tournament, roulette wheel, stochastic
   universal sampling and truncation selection.

2. **Crossover**: Recombining the genetic material of a tuple of parents into
   as many children. Strategies include uniform, multi-point, order-one and
   partially mapped crossover.

3. **Mutation**: Randomly altering the loci of a single child.

4. **Reinsertion**: Combining offspring and parents into the next generation
   of fixed size. Strategies include full replacement, elitist and uniform
   random reinsertion.

All randomness an operator needs is drawn from the ``rng`` argument; operators
never keep state between calls and never modify the genotypes they receive.

Example usage:
    ```python
    parent_indices = selection(evaluated, n_parents=100, rng=rng)
    children = crossover((evaluated.population[i], evaluated.population[j]), rng)
    children = [mutation(child, rng) for child in children]
    individuals, known = reinsertion(children, evaluated, 100, rng, evaluate_batch)
    ```
"""

from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

import numpy as np

from genesim.population import EvaluatedPopulation

FitnessFunction = Callable[[Any], float]
"""Maps one genotype to its fitness value."""

BatchEvaluator = Callable[[Sequence[Any]], np.ndarray]
"""Maps a sequence of genotypes to their fitness values, shape (n,)."""


@runtime_checkable
class SelectionOp(Protocol):
    """Protocol for parent selection strategies.

    Parameters:
        evaluated: The evaluated current generation.
        n_parents: Number of parent indices to return. The same individual may
            be selected several times depending on the strategy.
        rng: Random generator for reproducible stochastic selection.

    Returns:
        Array of shape (n_parents,) with indices into ``evaluated``. The
        algorithm groups consecutive indices into parent tuples.

    Raises:
        EmptyPopulationError: If ``evaluated`` is empty.
        PopulationTooSmallError: If the strategy needs more individuals than
            the population holds.

    Example:
        ```python
        def random_selector(evaluated, n_parents, rng):
            return rng.integers(0, len(evaluated), size=n_parents).astype(np.intp)
        ```
    """

    def __call__(self, evaluated: EvaluatedPopulation, n_parents: int, rng: np.random.Generator) -> np.ndarray:
        """Select parent indices from the evaluated population."""
        ...


@runtime_checkable
class CrossoverOp(Protocol):
    """Protocol for recombination strategies.

    Parameters:
        parents: Tuple of two or more parent genotypes.
        rng: Random generator.

    Returns:
        List of children, one per parent.

    Example:
        ```python
        def clone(parents, rng):
            return [p.copy() for p in parents]
        ```
    """

    def __call__(self, parents: tuple[Any, ...], rng: np.random.Generator) -> list[Any]:
        """Recombine parents into children."""
        ...


@runtime_checkable
class MutationOp(Protocol):
    """Protocol for mutation strategies.

    Parameters:
        genome: The genotype to mutate. It is not modified.
        rng: Random generator.

    Returns:
        The mutated genotype as a new value.
    """

    def __call__(self, genome: Any, rng: np.random.Generator) -> Any:
        """Return a mutated copy of genome."""
        ...


@runtime_checkable
class ReinsertionOp(Protocol):
    """Protocol for reinsertion strategies.

    Parameters:
        offspring: The mutated children of this generation.
        parents: The evaluated current generation.
        population_size: Size of the next generation.
        rng: Random generator.
        evaluate_batch: Computes the fitness of a batch of offspring when
            the strategy has to rank them. The algorithm routes it through its
            own evaluation, so it honours parallel evaluation.

    Returns:
        A tuple of:
        - individuals: Exactly ``population_size`` genotypes.
        - known_fitness: For each individual either its already computed
          fitness (parents carried over unchanged, offspring evaluated while
          ranking) or None when it still has to be evaluated.

    Raises:
        ReinsertionSizeMismatchError: If the strategy requires a specific
            number of offspring and got a different one.
        ReinsertionShortfallError: If the available individuals cannot fill
            the next generation.
    """

    def __call__(
        self,
        offspring: Sequence[Any],
        parents: EvaluatedPopulation,
        population_size: int,
        rng: np.random.Generator,
        evaluate_batch: BatchEvaluator,
    ) -> tuple[list[Any], list[float | None]]:
        """Combine offspring and parents into the next generation."""
        ...
