"""Tests for the GeneticAlgorithm generation transition.

This module tests:
- evaluate(): known fitness reuse, statistics, parallel evaluation
- recombine(): crossover rate and the odd parent policy
- evolve(): size invariant, error conditions, determinism
"""

import threading

import numpy as np
import pytest

from genesim import (
    EmptyPopulationError,
    EvaluatedPopulation,
    InvalidParameterError,
    InvalidProbabilityError,
    Objective,
    Population,
    PopulationTooSmallError,
    ReinsertionSizeMismatchError,
    bit_flip_mutation,
    build_population,
    elitist_reinsertion,
    full_replacement,
    truncation_selection,
    uniform_reinsertion,
)


def tag_crossover(parents, rng):
    """Crossover that marks every child so recombined offspring are recognizable."""
    return [("child", parent) for parent in parents]


def identity_mutation(genome, rng):
    return genome


# =============================================================================
# TestEvaluate
# =============================================================================


class TestEvaluate:
    def test_computes_fitness_and_statistics(self, make_algorithm, onemax) -> None:
        algorithm = make_algorithm()
        population = build_population(onemax["genome_builder"], 8, seed=1)
        evaluated = algorithm.evaluate(population.individuals)

        expected = np.array([genome.sum() for genome in population], dtype=np.float64)
        np.testing.assert_array_equal(evaluated.fitness, expected)
        assert evaluated.highest == expected.max()
        assert evaluated.average == pytest.approx(expected.mean())
        assert evaluated.objective is Objective.MAXIMIZE

    def test_known_fitness_is_not_recomputed(self, make_algorithm) -> None:
        calls: list[int] = []

        def fitness_function(genome):
            calls.append(genome)
            return float(genome)

        algorithm = make_algorithm(fitness_function=fitness_function)
        evaluated = algorithm.evaluate([1, 2, 3], known_fitness=[10.0, None, 30.0])

        assert calls == [2]
        np.testing.assert_array_equal(evaluated.fitness, [10.0, 2.0, 30.0])

    def test_parallel_evaluation_matches_sequential(self, make_algorithm, onemax) -> None:
        population = build_population(onemax["genome_builder"], 20, seed=3)
        sequential = make_algorithm().evaluate(population.individuals)
        parallel = make_algorithm(n_workers=2).evaluate(population.individuals)
        np.testing.assert_array_equal(parallel.fitness, sequential.fitness)

    @pytest.mark.parametrize(
        "reinsertion",
        [elitist_reinsertion(elite_count=1), elitist_reinsertion(offspring_has_precedence=False)],
    )
    def test_evolve_scores_offspring_on_worker_threads(self, make_algorithm, onemax, rng, reinsertion) -> None:
        threads: list[int] = []

        def fitness_function(genome):
            threads.append(threading.get_ident())
            return float(genome.sum())

        algorithm = make_algorithm(fitness_function=fitness_function, reinsertion=reinsertion, n_workers=2)
        population = build_population(onemax["genome_builder"], 10, seed=rng)
        evaluated = algorithm.evaluate(population.individuals)
        threads.clear()

        algorithm.evolve(evaluated, rng)
        assert len(threads) == 10
        assert threading.get_ident() not in threads


# =============================================================================
# TestRecombine
# =============================================================================


class TestRecombine:
    def test_pairs_are_recombined(self, make_algorithm, rng) -> None:
        algorithm = make_algorithm(crossover=tag_crossover)
        offspring = algorithm.recombine(["a", "b", "c", "d"], rng)
        assert offspring == [("child", "a"), ("child", "b"), ("child", "c"), ("child", "d")]

    def test_odd_parent_passes_through_by_default(self, make_algorithm, rng) -> None:
        algorithm = make_algorithm(crossover=tag_crossover)
        offspring = algorithm.recombine(["a", "b", "c"], rng)
        assert offspring == [("child", "a"), ("child", "b"), "c"]

    def test_odd_parent_dropped(self, make_algorithm, rng) -> None:
        algorithm = make_algorithm(crossover=tag_crossover, odd_parent="drop")
        offspring = algorithm.recombine(["a", "b", "c"], rng)
        assert offspring == [("child", "a"), ("child", "b")]

    def test_larger_parent_tuples(self, make_algorithm, rng) -> None:
        algorithm = make_algorithm(crossover=tag_crossover, parents_size=3)
        offspring = algorithm.recombine(["a", "b", "c", "d", "e"], rng)
        assert offspring == [("child", "a"), ("child", "b"), ("child", "c"), "d", "e"]

    def test_zero_crossover_rate_copies_parents_without_drawing(self, make_algorithm) -> None:
        algorithm = make_algorithm(crossover=tag_crossover, crossover_rate=0.0)
        rng = np.random.default_rng(9)
        expected_next = np.random.default_rng(9).random()

        assert algorithm.recombine(["a", "b", "c", "d"], rng) == ["a", "b", "c", "d"]
        assert rng.random() == expected_next

    def test_partial_crossover_rate_mixes(self, make_algorithm, rng) -> None:
        algorithm = make_algorithm(crossover=tag_crossover, crossover_rate=0.5)
        offspring = algorithm.recombine(list(range(200)), rng)
        crossed = sum(isinstance(child, tuple) for child in offspring)
        assert 0 < crossed < 200


# =============================================================================
# TestEvolve
# =============================================================================


class TestEvolve:
    def test_population_size_invariant(self, make_algorithm, onemax, rng) -> None:
        algorithm = make_algorithm()
        population = build_population(onemax["genome_builder"], 10, seed=rng)
        evaluated = algorithm.evaluate(population.individuals)
        for _ in range(5):
            evaluated = algorithm.evolve(evaluated, rng)
            assert len(evaluated) == 10
            assert isinstance(evaluated, EvaluatedPopulation)

    def test_same_seed_same_generation(self, make_algorithm, onemax) -> None:
        algorithm = make_algorithm()
        population = build_population(onemax["genome_builder"], 10, seed=5)
        evaluated = algorithm.evaluate(population.individuals)

        a = algorithm.evolve(evaluated, np.random.default_rng(11))
        b = algorithm.evolve(evaluated, np.random.default_rng(11))
        assert a.population == b.population
        np.testing.assert_array_equal(a.fitness, b.fitness)

    def test_full_replacement_with_too_few_offspring_raises(self, make_algorithm, onemax, rng) -> None:
        algorithm = make_algorithm(reinsertion=full_replacement(), num_parents=9, odd_parent="drop")
        population = build_population(onemax["genome_builder"], 10, seed=rng)
        evaluated = algorithm.evaluate(population.individuals)
        with pytest.raises(ReinsertionSizeMismatchError):
            algorithm.evolve(evaluated, rng)

    def test_full_replacement_with_too_many_offspring_raises(self, make_algorithm, onemax, rng) -> None:
        algorithm = make_algorithm(reinsertion=full_replacement(), selection_ratio=1.5)
        population = build_population(onemax["genome_builder"], 10, seed=rng)
        evaluated = algorithm.evaluate(population.individuals)
        with pytest.raises(ReinsertionSizeMismatchError):
            algorithm.evolve(evaluated, rng)

    def test_reinsertion_returning_wrong_size_raises(self, make_algorithm, onemax, rng) -> None:
        def broken_reinsertion(offspring, parents, population_size, rng, evaluate_batch):
            return list(offspring[:-1]), [None] * (len(offspring) - 1)

        algorithm = make_algorithm(reinsertion=broken_reinsertion)
        population = build_population(onemax["genome_builder"], 10, seed=rng)
        evaluated = algorithm.evaluate(population.individuals)
        with pytest.raises(ReinsertionSizeMismatchError, match="expected 10"):
            algorithm.evolve(evaluated, rng)

    def test_no_mutation_no_crossover_copies_parents(self, make_algorithm, onemax, rng) -> None:
        algorithm = make_algorithm(
            selection=truncation_selection(threshold=1.0),
            mutation=bit_flip_mutation(0.0),
            crossover_rate=0.0,
            reinsertion=full_replacement(),
        )
        population = build_population(onemax["genome_builder"], 10, seed=rng)
        evaluated = algorithm.evaluate(population.individuals)
        evolved = algorithm.evolve(evaluated, rng)

        assert all(any(child is parent for parent in population) for child in evolved.population)
        assert evolved.highest == evaluated.highest
        assert evolved.lowest == evaluated.lowest
        assert evolved.average == pytest.approx(evaluated.average)

    def test_parent_fitness_reused(self, make_algorithm, onemax, rng) -> None:
        calls: list[object] = []

        def fitness_function(genome):
            calls.append(genome)
            return float(genome.sum())

        algorithm = make_algorithm(fitness_function=fitness_function, reinsertion=uniform_reinsertion(0.0))
        population = build_population(onemax["genome_builder"], 6, seed=rng)
        evaluated = algorithm.evaluate(population.individuals)
        calls.clear()

        algorithm.evolve(evaluated, rng)
        assert calls == []

    def test_empty_population_raises(self, make_algorithm, rng) -> None:
        empty = EvaluatedPopulation(Population([]), np.array([]))
        with pytest.raises(EmptyPopulationError):
            make_algorithm().evolve(empty, rng)

    def test_population_below_minimum_raises(self, make_algorithm, make_evaluated, rng) -> None:
        algorithm = make_algorithm(min_population_size=4)
        with pytest.raises(PopulationTooSmallError, match="minimum of 4"):
            algorithm.evolve(make_evaluated([1.0, 2.0, 3.0]), rng)


class TestParentCount:
    def test_selection_ratio_rounds_half_up(self, make_algorithm) -> None:
        assert make_algorithm(selection_ratio=0.25).parent_count(10) == 3
        assert make_algorithm(selection_ratio=0.5).parent_count(5) == 3
        assert make_algorithm(selection_ratio=0.01).parent_count(10) == 1

    def test_num_parents_overrides_ratio(self, make_algorithm) -> None:
        assert make_algorithm(num_parents=7, selection_ratio=0.1).parent_count(100) == 7


class TestConfiguration:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"selection_ratio": 0.0},
            {"num_parents": 0},
            {"parents_size": 1},
            {"odd_parent": "keep"},
            {"min_population_size": 0},
            {"n_workers": 0},
            {"objective": "sideways"},
        ],
    )
    def test_invalid_parameters_raise(self, make_algorithm, kwargs) -> None:
        with pytest.raises(InvalidParameterError):
            make_algorithm(**kwargs)

    def test_invalid_crossover_rate_raises(self, make_algorithm) -> None:
        with pytest.raises(InvalidProbabilityError, match="crossover_rate"):
            make_algorithm(crossover_rate=2.0)

    def test_objective_from_string(self, make_algorithm) -> None:
        assert make_algorithm(objective="minimize").objective is Objective.MINIMIZE
