"""Shared test fixtures for genesim tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- make_evaluated: Factory for evaluated populations with given fitness values
- onemax: Binary genome problem maximizing the number of set bits
- fake_clock: Controllable clock with a fixed tick per sample
- Algorithm and simulator builders
"""

import numpy as np
import pytest

from genesim import (
    BinaryGenomeBuilder,
    EvaluatedPopulation,
    GeneticAlgorithm,
    Objective,
    Population,
    Simulator,
    bit_flip_mutation,
    elitist_reinsertion,
    tournament_selection,
    uniform_crossover,
)


class FakeClock:
    """Clock that advances by a fixed step every time it is sampled.

    Every sample is recorded so tests can reconstruct step durations.
    """

    def __init__(self, start: float = 100.0, tick: float = 0.25):
        self.now = start
        self.tick = tick
        self.samples: list[float] = []

    def __call__(self) -> float:
        self.now += self.tick
        self.samples.append(self.now)
        return self.now


def onemax_fitness(genome: np.ndarray) -> float:
    return float(np.sum(genome))


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def make_evaluated():
    """Factory for evaluated populations whose genome i is ``np.array([i])``."""

    def make(fitness, objective: Objective = Objective.MAXIMIZE) -> EvaluatedPopulation:
        fitness = np.asarray(fitness, dtype=np.float64)
        population = Population(tuple(np.array([i]) for i in range(len(fitness))))
        return EvaluatedPopulation(population, fitness, objective)

    return make


@pytest.fixture
def onemax():
    """OneMax problem: binary genomes of 16 bits, fitness is the number of ones.

    Returns:
        Dict with genome_builder, fitness_function and the optimum.
    """
    length = 16
    return {
        "genome_builder": BinaryGenomeBuilder(length),
        "fitness_function": onemax_fitness,
        "optimum": float(length),
    }


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_algorithm(onemax):
    """Factory for a OneMax GeneticAlgorithm; keyword arguments override the defaults."""

    def make(**overrides) -> GeneticAlgorithm:
        options = {
            "fitness_function": onemax["fitness_function"],
            "selection": tournament_selection(tournament_size=2),
            "crossover": uniform_crossover(),
            "mutation": bit_flip_mutation(rate=1 / 16),
            "reinsertion": elitist_reinsertion(elite_count=1),
        }
        options.update(overrides)
        return GeneticAlgorithm(**options)

    return make


@pytest.fixture
def make_simulator(onemax, make_algorithm):
    """Factory for a OneMax Simulator of 10 individuals seeded with 42."""

    def make(termination, algorithm=None, population_size: int = 10, seed=42, **kwargs) -> Simulator:
        return Simulator(
            algorithm if algorithm is not None else make_algorithm(),
            termination,
            onemax["genome_builder"],
            population_size,
            seed,
            **kwargs,
        )

    return make
