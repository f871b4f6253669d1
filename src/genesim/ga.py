"""Generation transition of a genetic algorithm.

The GeneticAlgorithm bundles the fitness function with one strategy per
operator role and turns one evaluated generation into the next:

    select -> recombine -> mutate -> reinsert -> evaluate

All randomness is drawn from the generator passed to ``evolve``; the random
source is never consulted while fitness values are computed, so evaluation may
run on a thread pool without changing the outcome of a seeded run.
"""

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np
from joblib import Parallel, delayed

from genesim.errors import (
    EmptyPopulationError,
    InvalidParameterError,
    PopulationTooSmallError,
    ReinsertionSizeMismatchError,
    check_probability,
)
from genesim.fitness import Objective, as_objective
from genesim.population import EvaluatedPopulation, Population
from genesim.protocols import CrossoverOp, FitnessFunction, MutationOp, ReinsertionOp, SelectionOp

logger = logging.getLogger(__name__)

ODD_PARENT_POLICIES = ("pass_through", "drop")


class GeneticAlgorithm:
    """A genetic algorithm with pluggable operators.

    Args:
        fitness_function: Maps one genotype to its fitness.
        selection: Parent selection strategy.
        crossover: Recombination strategy.
        mutation: Mutation strategy, applied to every child.
        reinsertion: Builds the next generation from offspring and parents.
        objective: Direction of optimization. Default is maximize.
        selection_ratio: Number of parents as a share of the population size,
            rounded half up and at least 1. Ignored if num_parents is given.
            Default is 1.0.
        num_parents: Fixed number of parents to select per generation.
        parents_size: Number of parents recombined together. Default is 2.
        crossover_rate: Probability of recombining a parent tuple; otherwise
            the parents pass to mutation unchanged. Default is 1.0.
        odd_parent: What to do with trailing parents that do not fill a whole
            tuple: "pass_through" (default) copies them to the offspring,
            "drop" discards them.
        min_population_size: Smallest population the algorithm will evolve.
            Default is 2.
        n_workers: Number of threads used to compute fitness values. None
            (default) evaluates sequentially, -1 uses all CPU cores.

    Raises:
        InvalidParameterError: If a parameter is out of range.
        InvalidProbabilityError: If crossover_rate is outside [0, 1].

    Example:
        >>> algorithm = GeneticAlgorithm(
        ...     fitness_function=lambda genome: float(genome.sum()),
        ...     selection=tournament_selection(tournament_size=3),
        ...     crossover=uniform_crossover(),
        ...     mutation=bit_flip_mutation(rate=0.01),
        ...     reinsertion=elitist_reinsertion(elite_count=2),
        ... )
        >>> evaluated = algorithm.evaluate(population.individuals)
        >>> next_generation = algorithm.evolve(evaluated, rng)
    """

    def __init__(
        self,
        fitness_function: FitnessFunction,
        selection: SelectionOp,
        crossover: CrossoverOp,
        mutation: MutationOp,
        reinsertion: ReinsertionOp,
        objective: Objective | str = Objective.MAXIMIZE,
        selection_ratio: float = 1.0,
        num_parents: int | None = None,
        parents_size: int = 2,
        crossover_rate: float = 1.0,
        odd_parent: str = "pass_through",
        min_population_size: int = 2,
        n_workers: int | None = None,
    ):
        if selection_ratio <= 0:
            raise InvalidParameterError(f"selection_ratio must be positive, got {selection_ratio}")
        if num_parents is not None and num_parents <= 0:
            raise InvalidParameterError(f"num_parents must be positive, got {num_parents}")
        if parents_size < 2:
            raise InvalidParameterError(f"parents_size must be at least 2, got {parents_size}")
        if odd_parent not in ODD_PARENT_POLICIES:
            raise InvalidParameterError(
                f"Unknown odd_parent policy '{odd_parent}'. Available policies: {', '.join(ODD_PARENT_POLICIES)}"
            )
        if min_population_size <= 0:
            raise InvalidParameterError(f"min_population_size must be positive, got {min_population_size}")
        if n_workers == 0:
            raise InvalidParameterError("n_workers must be non-zero; use None for sequential evaluation")

        self.fitness_function = fitness_function
        self.selection = selection
        self.crossover = crossover
        self.mutation = mutation
        self.reinsertion = reinsertion
        self.objective = as_objective(objective)
        self.selection_ratio = selection_ratio
        self.num_parents = num_parents
        self.parents_size = parents_size
        self.crossover_rate = check_probability("crossover_rate", crossover_rate)
        self.odd_parent = odd_parent
        self.min_population_size = min_population_size
        self.n_workers = n_workers

    def parent_count(self, population_size: int) -> int:
        """Number of parents selected from a population of the given size."""
        if self.num_parents is not None:
            return self.num_parents
        return max(1, int(population_size * self.selection_ratio + 0.5))

    def evaluate(self, individuals: Sequence[Any], known_fitness: Sequence[float | None] | None = None) -> EvaluatedPopulation:
        """Evaluate a generation.

        Fitness is only computed for individuals whose value is not known yet.
        The aggregate statistics are computed once all values are available.

        Args:
            individuals: The genotypes of the generation.
            known_fitness: For each individual its fitness, or None if it has
                to be computed. Default computes every fitness.

        Returns:
            The evaluated generation.
        """
        if known_fitness is None:
            known_fitness = [None] * len(individuals)
        pending = [i for i, fitness in enumerate(known_fitness) if fitness is None]

        if self.n_workers is None:
            values = [self.fitness_function(individuals[i]) for i in pending]
        else:
            values = Parallel(n_jobs=self.n_workers, prefer="threads")(
                delayed(self.fitness_function)(individuals[i]) for i in pending
            )

        fitness = np.array([np.nan if f is None else f for f in known_fitness], dtype=np.float64)
        if pending:
            fitness[pending] = values
        logger.debug("Evaluated %d of %d individuals", len(pending), len(individuals))
        return EvaluatedPopulation(Population(tuple(individuals)), fitness, self.objective)

    def evaluate_batch(self, individuals: Sequence[Any]) -> np.ndarray:
        """Fitness of each of ``individuals``, computed like ``evaluate`` does."""
        return self.evaluate(individuals).fitness

    def recombine(self, parents: Sequence[Any], rng: np.random.Generator) -> list[Any]:
        """Recombine consecutive tuples of ``parents_size`` parents into offspring.

        Trailing parents that do not fill a whole tuple are handled by the
        odd_parent policy.
        """
        offspring: list[Any] = []
        n_full = len(parents) - len(parents) % self.parents_size
        for start in range(0, n_full, self.parents_size):
            group = tuple(parents[start : start + self.parents_size])
            if self._should_cross(rng):
                offspring.extend(self.crossover(group, rng))
            else:
                offspring.extend(group)
        if self.odd_parent == "pass_through":
            offspring.extend(parents[n_full:])
        return offspring

    def evolve(self, current: EvaluatedPopulation, rng: np.random.Generator) -> EvaluatedPopulation:
        """Produce the next evaluated generation.

        Args:
            current: The evaluated current generation.
            rng: Random generator; the only source of randomness.

        Returns:
            The evaluated next generation, of the same size as ``current``.

        Raises:
            EmptyPopulationError: If ``current`` is empty.
            PopulationTooSmallError: If ``current`` is smaller than
                min_population_size.
            ReinsertionSizeMismatchError: If reinsertion did not produce a
                generation of the same size.
        """
        size = len(current)
        if size == 0:
            raise EmptyPopulationError("cannot evolve an empty population")
        if size < self.min_population_size:
            raise PopulationTooSmallError(
                f"population of {size} is smaller than the minimum of {self.min_population_size}"
            )

        parent_indices = self.selection(current, self.parent_count(size), rng)
        parents = [current.population[i] for i in parent_indices]
        offspring = [self.mutation(child, rng) for child in self.recombine(parents, rng)]
        individuals, known_fitness = self.reinsertion(offspring, current, size, rng, self.evaluate_batch)

        if len(individuals) != size or len(known_fitness) != size:
            raise ReinsertionSizeMismatchError(
                f"reinsertion produced {len(individuals)} individuals, expected {size}"
            )
        logger.debug("Selected %d parents, produced %d offspring", len(parents), len(offspring))
        return self.evaluate(individuals, known_fitness)

    def _should_cross(self, rng: np.random.Generator) -> bool:
        if self.crossover_rate >= 1.0:
            return True
        if self.crossover_rate <= 0.0:
            return False
        return bool(rng.random() < self.crossover_rate)
