"""Simulation state machine and convenience API.

A Simulator drives a GeneticAlgorithm generation by generation until its
termination condition fires:

    NOT_STARTED --step()--> RUNNING --step() fires termination--> FINISHED

Each step is timed with an injectable monotonic clock. The processing time
reported on the Final result is the sum of the durations of every step,
including the terminating one.
"""

import logging
import time
from collections.abc import Callable
from enum import Enum
from typing import Any

# Import strategy packages to trigger registration
import genesim.mutation  # noqa: F401
import genesim.recombination  # noqa: F401
import genesim.reinsertion  # noqa: F401
import genesim.selection  # noqa: F401
from genesim.errors import EmptyTerminationError, InvalidPopulationSizeError, SimulationFinishedError
from genesim.fitness import Objective
from genesim.ga import GeneticAlgorithm
from genesim.population import EvaluatedPopulation, GenomeBuilder, build_population
from genesim.protocols import CrossoverOp, FitnessFunction, MutationOp, ReinsertionOp, SelectionOp
from genesim.random import Seed, make_rng
from genesim.registry import CrossoverRegistry, MutationRegistry, ReinsertionRegistry, SelectionRegistry
from genesim.results import BestSolution, Final, Intermediate, SimResult, State
from genesim.termination import Condition, firing_conditions

logger = logging.getLogger(__name__)


class SimulationStatus(Enum):
    """Lifecycle of a Simulator."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    FINISHED = "finished"


class Simulator:
    """Runs a genetic algorithm until a termination condition fires.

    The Simulator owns the random generator and the State of one run. The
    initial population is built at construction; it is evaluated by the first
    step, so its evaluation time counts toward the processing time.

    Args:
        algorithm: The generation transition.
        termination: Condition checked after every step.
        genome_builder: Builds the genotypes of the initial population.
        population_size: Number of individuals per generation.
        seed: Explicit seed of the random generator.
        clock: Monotonic clock returning seconds. Default is
            time.perf_counter.

    Raises:
        EmptyTerminationError: If no termination condition is given.
        InvalidPopulationSizeError: If population_size is not positive.
        MissingSeedError: If seed is None.

    Example:
        >>> simulator = Simulator(algorithm, MaxGeneration(50), BinaryGenomeBuilder(32), 100, seed=42)
        >>> final = simulator.run()
        >>> final.best.fitness, final.generation
    """

    def __init__(
        self,
        algorithm: GeneticAlgorithm,
        termination: Condition,
        genome_builder: GenomeBuilder,
        population_size: int,
        seed: Seed | None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        if termination is None:
            raise EmptyTerminationError("a termination condition is required")
        if population_size <= 0:
            raise InvalidPopulationSizeError(f"population size must be positive, got {population_size}")
        self.algorithm = algorithm
        self.termination = termination
        self.genome_builder = genome_builder
        self.population_size = population_size
        self.clock = clock
        self._initialize(seed)

    @property
    def status(self) -> SimulationStatus:
        return self._status

    @property
    def state(self) -> State:
        """Snapshot of the simulation after the last step."""
        return self._state

    def reset(self, seed: Seed | None) -> None:
        """Restart the simulation from a new initial population.

        Generation counter, processing time and best solution are cleared.

        Args:
            seed: Explicit seed of the new random generator.

        Raises:
            MissingSeedError: If seed is None.
        """
        self._initialize(seed)
        logger.debug("Simulation reset")

    def step(self) -> SimResult:
        """Execute one generation.

        Returns:
            Final if the termination condition fired, otherwise Intermediate.

        Raises:
            SimulationFinishedError: If the simulation already finished.
            OperatorError: If an operator failed; the State is left unchanged.
        """
        if self._status is SimulationStatus.FINISHED:
            raise SimulationFinishedError("simulation already finished; call reset() to start a new run")

        start = self.clock()
        if self._started_at is None:
            self._started_at = start
            self._status = SimulationStatus.RUNNING

        state = self._state
        best, history = state.best, state.best_history
        evaluated = state.evaluated
        if evaluated is None:
            evaluated = self.algorithm.evaluate(state.population.individuals)
            best, history = self._track_best(best, history, evaluated, state.generation)

        evaluated = self.algorithm.evolve(evaluated, self._rng)
        end = self.clock()

        generation = state.generation + 1
        best, history = self._track_best(best, history, evaluated, generation)
        duration = end - start
        self._state = State(
            generation=generation,
            population=evaluated.population,
            evaluated=evaluated,
            processing_time=state.processing_time + duration,
            duration=duration,
            elapsed=end - self._started_at,
            best=best,
            best_history=history,
            objective=self.algorithm.objective,
        )
        logger.debug(
            "Generation %d: best=%.6g average=%.6g duration=%.4fs",
            generation,
            best.fitness,
            evaluated.average,
            duration,
        )

        reasons = firing_conditions(self.termination, self._state)
        if not reasons:
            return Intermediate(self._state)

        self._status = SimulationStatus.FINISHED
        logger.info(
            "Simulation finished at generation %d after %.3fs: %s",
            generation,
            self._state.processing_time,
            ", ".join(repr(reason) for reason in reasons),
        )
        return Final(
            state=self._state,
            processing_time=self._state.processing_time,
            best=best,
            generation=generation,
            reasons=reasons,
        )

    def run(self) -> Final:
        """Step until the termination condition fires.

        Returns:
            The Final result.

        Raises:
            SimulationFinishedError: If the simulation already finished.
            SimError: The first error raised by a step.
        """
        while True:
            result = self.step()
            if isinstance(result, Final):
                return result

    def _initialize(self, seed: Seed | None) -> None:
        self._rng = make_rng(seed)
        population = build_population(self.genome_builder, self.population_size, self._rng)
        self._state = State(generation=0, population=population, objective=self.algorithm.objective)
        self._status = SimulationStatus.NOT_STARTED
        self._started_at: float | None = None

    def _track_best(
        self,
        best: BestSolution | None,
        history: tuple[float, ...],
        evaluated: EvaluatedPopulation,
        generation: int,
    ) -> tuple[BestSolution, tuple[float, ...]]:
        genome, fitness = evaluated.best
        if best is None or self.algorithm.objective.is_better(fitness, best.fitness):
            best = BestSolution(genome=genome, fitness=fitness, generation=generation)
        return best, history + (best.fitness,)


def simulate(
    fitness_function: FitnessFunction,
    genome_builder: GenomeBuilder,
    population_size: int,
    termination: Condition,
    seed: Seed | None,
    mutation: str | MutationOp,
    mutation_rate: float | None = None,
    selection: str | SelectionOp = "tournament",
    crossover: str | CrossoverOp = "uniform",
    reinsertion: str | ReinsertionOp = "elitist",
    objective: Objective | str = Objective.MAXIMIZE,
    callback: Callable[[SimResult], Any] | None = None,
    **algorithm_options: Any,
) -> Final:
    """Run a genetic algorithm to completion.

    Strategies are given either as registered names or as configured
    operators. Names are resolved with the registries' default configuration.

    Args:
        fitness_function: Maps one genotype to its fitness.
        genome_builder: Builds the genotypes of the initial population.
        population_size: Number of individuals per generation.
        termination: Condition checked after every step.
        seed: Explicit seed of the random generator.
        mutation: Mutation strategy name or operator.
        mutation_rate: Per-locus rate passed to a mutation strategy resolved
            by name.
        selection: Selection strategy name or operator. Default "tournament".
        crossover: Crossover strategy name or operator. Default "uniform".
        reinsertion: Reinsertion strategy name or operator. Default "elitist".
        objective: Direction of optimization. Default is maximize.
        callback: Called with the result of every step. Its return value is
            ignored.
        **algorithm_options: Further GeneticAlgorithm keyword arguments, e.g.
            selection_ratio, crossover_rate or n_workers.

    Returns:
        The Final result of the run.

    Raises:
        KeyError: If a strategy name is not registered.

    Example:
        >>> final = simulate(
        ...     fitness_function=lambda genome: float(genome.sum()),
        ...     genome_builder=BinaryGenomeBuilder(32),
        ...     population_size=50,
        ...     termination=MaxGeneration(100) | TargetFitness(32.0),
        ...     seed=42,
        ...     mutation="bit_flip",
        ...     mutation_rate=1 / 32,
        ... )
    """
    if isinstance(mutation, str):
        mutation_options = {} if mutation_rate is None else {"rate": mutation_rate}
        mutation = MutationRegistry.get(mutation, **mutation_options)
    algorithm = GeneticAlgorithm(
        fitness_function=fitness_function,
        selection=SelectionRegistry.get(selection) if isinstance(selection, str) else selection,
        crossover=CrossoverRegistry.get(crossover) if isinstance(crossover, str) else crossover,
        mutation=mutation,
        reinsertion=ReinsertionRegistry.get(reinsertion) if isinstance(reinsertion, str) else reinsertion,
        objective=objective,
        **algorithm_options,
    )
    simulator = Simulator(algorithm, termination, genome_builder, population_size, seed)

    while True:
        result = simulator.step()
        if callback is not None:
            callback(result)
        if isinstance(result, Final):
            return result
