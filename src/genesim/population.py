"""Population data structures and builders.

This module provides the core data structures for representing the
individuals of one generation:

- Population: An ordered, immutable collection of genotypes
- EvaluatedPopulation: A population together with the fitness of each member
  and the aggregate statistics of the generation

and the tools for seeding the first generation:

- build_population: Build a population from a genome builder and a seed
- BinaryGenomeBuilder, ValueGenomeBuilder, PermutationGenomeBuilder: Genome
  builders for the three common encodings

Genotypes are opaque to the data structures; any Python value works. The
built-in genome builders produce 1-D numpy arrays.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import numpy as np

from genesim.errors import InvalidGenomeConfigError, InvalidPopulationSizeError
from genesim.fitness import Objective
from genesim.random import Seed, make_rng


@runtime_checkable
class GenomeBuilder(Protocol):
    """Protocol for building one genotype of the initial population.

    Implementations typically draw the genotype at random from ``rng``. The
    index of the individual in the population is passed for builders that
    want to vary their output by position.
    """

    def build_genome(self, index: int, rng: np.random.Generator) -> Any:
        """Build the genotype for the individual at ``index``."""
        ...


@dataclass(frozen=True, eq=False)
class Population:
    """Immutable ordered collection of genotypes.

    Insertion order is used for addressing individuals by index only; it
    carries no meaning across generations.

    Attributes:
        individuals: The genotypes of the population members.

    Example:
        >>> pop = Population([np.array([0, 1]), np.array([1, 1])])
        >>> len(pop)
        2
        >>> pop[1]
        array([1, 1])
    """

    individuals: tuple[Any, ...]

    def __post_init__(self) -> None:
        """Freeze the individuals into a tuple."""
        object.__setattr__(self, "individuals", tuple(self.individuals))

    def __len__(self) -> int:
        return len(self.individuals)

    def __getitem__(self, idx: int) -> Any:
        return self.individuals[idx]

    def __iter__(self) -> Iterator[Any]:
        return iter(self.individuals)

    # Genotypes may be numpy arrays whose == is elementwise, so equality
    # compares them one by one. Defining __eq__ leaves the class unhashable.
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Population):
            return NotImplemented
        return len(self) == len(other) and all(_same_genome(a, b) for a, b in zip(self, other, strict=True))


@dataclass(frozen=True, eq=False)
class EvaluatedPopulation:
    """A population with the fitness of every member and its statistics.

    The aggregate statistics are derived from the fitness array when the
    instance is created. Instances are immutable, so the statistics always
    describe the values they were computed from.

    Attributes:
        population: The evaluated population.
        fitness: Fitness value of each member, shape (n,), aligned with
            population order.
        objective: Direction of optimization used for ranking.
        highest: Highest fitness value in the population.
        lowest: Lowest fitness value in the population.
        average: Mean fitness value of the population.

    Example:
        >>> pop = Population([np.array([1]), np.array([3]), np.array([2])])
        >>> evaluated = EvaluatedPopulation(pop, np.array([1.0, 3.0, 2.0]))
        >>> evaluated.highest, evaluated.lowest, evaluated.average
        (3.0, 1.0, 2.0)
        >>> evaluated.best_index
        1
    """

    population: Population
    fitness: np.ndarray
    objective: Objective = Objective.MAXIMIZE
    highest: float = field(init=False)
    lowest: float = field(init=False)
    average: float = field(init=False)

    def __post_init__(self) -> None:
        """Validate the fitness array and compute the aggregate statistics.

        Raises:
            TypeError: If fitness is not a numpy array.
            ValueError: If fitness is not 1-D or does not match the population
                size.
        """
        if not isinstance(self.fitness, np.ndarray):
            raise TypeError(f"fitness must be a numpy array, got {type(self.fitness).__name__}")
        if self.fitness.ndim != 1:
            raise ValueError(f"fitness must be 1D, got shape {self.fitness.shape}")
        n = len(self.population)
        if self.fitness.shape[0] != n:
            raise ValueError(f"fitness has {self.fitness.shape[0]} elements, expected {n} to match population size")
        fitness = self.fitness.astype(np.float64, copy=True)
        fitness.setflags(write=False)
        object.__setattr__(self, "fitness", fitness)

        # An empty population has no statistics; report the sentinel instead.
        if n == 0:
            for name in ("highest", "lowest", "average"):
                object.__setattr__(self, name, self.objective.worst)
            return

        object.__setattr__(self, "highest", float(fitness.max()))
        object.__setattr__(self, "lowest", float(fitness.min()))
        object.__setattr__(self, "average", float(fitness.mean()))

    def __len__(self) -> int:
        return len(self.population)

    @property
    def individuals(self) -> tuple[Any, ...]:
        """The genotypes of the evaluated population."""
        return self.population.individuals

    @property
    def best_index(self) -> int:
        """Index of the best individual (first one on ties)."""
        return self.objective.best_index(self.fitness)

    @property
    def best(self) -> tuple[Any, float]:
        """The best individual and its fitness.

        Returns:
            Tuple of (genome, fitness).
        """
        idx = self.best_index
        return self.population[idx], float(self.fitness[idx])

    @property
    def best_fitness(self) -> float:
        """Fitness of the best individual (highest or lowest by objective)."""
        return self.highest if self.objective is Objective.MAXIMIZE else self.lowest

    def ranking(self) -> np.ndarray:
        """Indices of the members ordered from best to worst (stable on ties)."""
        return self.objective.ranking(self.fitness)

    def individual(self, idx: int) -> tuple[Any, float]:
        """Return the genome and fitness of the member at ``idx``."""
        return self.population[idx], float(self.fitness[idx])


def build_population(genome_builder: GenomeBuilder, size: int, seed: Seed | None) -> Population:
    """Build a population of ``size`` genotypes.

    Genotypes are built in index order from a single random generator, so the
    result is fully determined by the seed.

    Args:
        genome_builder: Builds one genotype per call.
        size: Number of individuals; must be positive.
        seed: Integer seed or an existing Generator to draw from.

    Returns:
        The new Population.

    Raises:
        InvalidPopulationSizeError: If size is not positive.
        MissingSeedError: If seed is None.

    Example:
        >>> pop = build_population(BinaryGenomeBuilder(8), size=10, seed=42)
        >>> len(pop)
        10
    """
    if size <= 0:
        raise InvalidPopulationSizeError(f"population size must be positive, got {size}")
    rng = make_rng(seed)
    return Population(tuple(genome_builder.build_genome(index, rng) for index in range(size)))


class BinaryGenomeBuilder:
    """Builds binary encoded genomes: boolean arrays drawn uniformly at random.

    Args:
        length: Number of bits per genome; must be positive.
    """

    def __init__(self, length: int):
        if length <= 0:
            raise InvalidGenomeConfigError(f"genome length must be positive, got {length}")
        self.length = length

    def build_genome(self, index: int, rng: np.random.Generator) -> np.ndarray:
        return rng.random(self.length) < 0.5


class ValueGenomeBuilder:
    """Builds value encoded genomes with each locus drawn uniformly from [low, high).

    Integer bounds produce int64 genomes, float bounds produce float64 genomes.

    Args:
        length: Number of values per genome; must be positive.
        low: Inclusive lower bound.
        high: Exclusive upper bound; must be greater than low.
    """

    def __init__(self, length: int, low: float, high: float):
        if length <= 0:
            raise InvalidGenomeConfigError(f"genome length must be positive, got {length}")
        if high <= low:
            raise InvalidGenomeConfigError(f"value range is empty: low={low}, high={high}")
        self.length = length
        self.low = low
        self.high = high
        self.integer = isinstance(low, (int, np.integer)) and isinstance(high, (int, np.integer))

    def build_genome(self, index: int, rng: np.random.Generator) -> np.ndarray:
        if self.integer:
            return rng.integers(self.low, self.high, size=self.length)
        return rng.uniform(self.low, self.high, size=self.length)


class PermutationGenomeBuilder:
    """Builds permutation encoded genomes: random orderings of ``range(length)``.

    Args:
        length: Number of elements to permute; must be positive.
    """

    def __init__(self, length: int):
        if length <= 0:
            raise InvalidGenomeConfigError(f"genome length must be positive, got {length}")
        self.length = length

    def build_genome(self, index: int, rng: np.random.Generator) -> np.ndarray:
        return rng.permutation(self.length)


def _same_genome(a: Any, b: Any) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return bool(np.array_equal(a, b))
    return bool(a == b)

