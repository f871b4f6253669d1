"""genesim: Seeded, reproducible genetic algorithm simulations.

A numpy implementation of a genetic algorithm engine with pluggable selection,
crossover, mutation and reinsertion strategies, composable termination
conditions and exact accounting of processing time.

Example (functional API):
    >>> from genesim import BinaryGenomeBuilder, MaxGeneration, TargetFitness, simulate
    >>> final = simulate(
    ...     fitness_function=lambda genome: float(genome.sum()),
    ...     genome_builder=BinaryGenomeBuilder(16),
    ...     population_size=20,
    ...     termination=MaxGeneration(50) | TargetFitness(16.0),
    ...     seed=42,
    ...     mutation="bit_flip",
    ...     mutation_rate=1 / 16,
    ... )
    >>> final.generation <= 50
    True

Example (step by step):
    >>> from genesim import (
    ...     GeneticAlgorithm, Intermediate, Simulator, MaxGeneration, BinaryGenomeBuilder,
    ...     tournament_selection, uniform_crossover, bit_flip_mutation, elitist_reinsertion,
    ... )
    >>> algorithm = GeneticAlgorithm(
    ...     fitness_function=lambda genome: float(genome.sum()),
    ...     selection=tournament_selection(tournament_size=3),
    ...     crossover=uniform_crossover(),
    ...     mutation=bit_flip_mutation(rate=0.05),
    ...     reinsertion=elitist_reinsertion(elite_count=2),
    ... )
    >>> simulator = Simulator(algorithm, MaxGeneration(5), BinaryGenomeBuilder(16), 20, seed=42)
    >>> while isinstance(result := simulator.step(), Intermediate):
    ...     pass
    >>> result.generation
    5
"""

from genesim.errors import (
    ConfigurationError,
    EmptyPopulationError,
    EmptyTerminationError,
    GenomeTooShortError,
    InvalidGenomeConfigError,
    InvalidParameterError,
    InvalidPopulationSizeError,
    InvalidProbabilityError,
    MissingSeedError,
    OperatorError,
    PopulationTooSmallError,
    ReinsertionShortfallError,
    ReinsertionSizeMismatchError,
    SimError,
    SimulationFinishedError,
)
from genesim.fitness import Objective
from genesim.ga import GeneticAlgorithm
from genesim.mutation import (
    bit_flip_mutation,
    breeder_value_mutation,
    insert_order_mutation,
    random_value_mutation,
    swap_order_mutation,
)
from genesim.population import (
    BinaryGenomeBuilder,
    EvaluatedPopulation,
    GenomeBuilder,
    PermutationGenomeBuilder,
    Population,
    ValueGenomeBuilder,
    build_population,
)
from genesim.recombination import (
    multi_point_crossover,
    order_one_crossover,
    partially_mapped_crossover,
    uniform_crossover,
)
from genesim.registry import (
    CrossoverRegistry,
    MutationRegistry,
    ReinsertionRegistry,
    SelectionRegistry,
    list_crossovers,
    list_mutations,
    list_reinsertions,
    list_selections,
)
from genesim.reinsertion import elitist_reinsertion, full_replacement, uniform_reinsertion
from genesim.results import BestSolution, Final, Intermediate, SimResult, State
from genesim.selection import (
    roulette_wheel_selection,
    tournament_selection,
    truncation_selection,
    universal_sampling_selection,
)
from genesim.simulator import SimulationStatus, Simulator, simulate
from genesim.termination import (
    And,
    Condition,
    Constant,
    ElapsedTime,
    MaxGeneration,
    Not,
    Or,
    StagnantFitness,
    TargetFitness,
    evaluate,
    firing_conditions,
)

__all__ = [
    # Simulation
    "Simulator",
    "SimulationStatus",
    "simulate",
    "GeneticAlgorithm",
    # Selection strategies
    "roulette_wheel_selection",
    "tournament_selection",
    "truncation_selection",
    "universal_sampling_selection",
    # Crossover strategies
    "multi_point_crossover",
    "order_one_crossover",
    "partially_mapped_crossover",
    "uniform_crossover",
    # Mutation strategies
    "bit_flip_mutation",
    "breeder_value_mutation",
    "insert_order_mutation",
    "random_value_mutation",
    "swap_order_mutation",
    # Reinsertion strategies
    "elitist_reinsertion",
    "full_replacement",
    "uniform_reinsertion",
    # Termination
    "Condition",
    "MaxGeneration",
    "TargetFitness",
    "StagnantFitness",
    "ElapsedTime",
    "Constant",
    "And",
    "Or",
    "Not",
    "evaluate",
    "firing_conditions",
    # Registry system
    "SelectionRegistry",
    "CrossoverRegistry",
    "MutationRegistry",
    "ReinsertionRegistry",
    "list_selections",
    "list_crossovers",
    "list_mutations",
    "list_reinsertions",
    # Data structures
    "Objective",
    "Population",
    "EvaluatedPopulation",
    "GenomeBuilder",
    "build_population",
    "BinaryGenomeBuilder",
    "ValueGenomeBuilder",
    "PermutationGenomeBuilder",
    # Result types
    "State",
    "BestSolution",
    "Intermediate",
    "Final",
    "SimResult",
    # Errors
    "SimError",
    "ConfigurationError",
    "InvalidPopulationSizeError",
    "InvalidProbabilityError",
    "InvalidParameterError",
    "InvalidGenomeConfigError",
    "EmptyTerminationError",
    "MissingSeedError",
    "OperatorError",
    "EmptyPopulationError",
    "PopulationTooSmallError",
    "GenomeTooShortError",
    "ReinsertionSizeMismatchError",
    "ReinsertionShortfallError",
    "SimulationFinishedError",
]
