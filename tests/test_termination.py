"""Tests for termination conditions."""

import itertools

import numpy as np
import pytest

from genesim import (
    And,
    BestSolution,
    Condition,
    Constant,
    ElapsedTime,
    InvalidParameterError,
    MaxGeneration,
    Not,
    Objective,
    Or,
    Population,
    StagnantFitness,
    State,
    TargetFitness,
    evaluate,
    firing_conditions,
)


def make_state(
    generation: int = 0,
    best_history: tuple[float, ...] = (),
    elapsed: float = 0.0,
    objective: Objective = Objective.MAXIMIZE,
) -> State:
    best = None
    if best_history:
        best = BestSolution(genome=np.zeros(1), fitness=best_history[-1], generation=generation)
    return State(
        generation=generation,
        population=Population([np.zeros(1)]),
        elapsed=elapsed,
        best=best,
        best_history=best_history,
        objective=objective,
    )


STATES = [
    make_state(),
    make_state(generation=3, best_history=(1.0, 2.0, 2.0, 2.0), elapsed=1.5),
    make_state(generation=5, best_history=(1.0, 2.0, 3.0, 4.0, 5.0, 6.0), elapsed=10.0),
    make_state(generation=2, best_history=(3.0, 1.0, 1.0), objective=Objective.MINIMIZE),
]

CONDITIONS = [
    MaxGeneration(3),
    TargetFitness(5.0),
    StagnantFitness(window=2),
    ElapsedTime(2.0),
    MaxGeneration(5) | TargetFitness(100.0),
    ~StagnantFitness(window=1) & ElapsedTime(1.0),
]


class TestAtoms:
    def test_max_generation(self) -> None:
        assert not evaluate(MaxGeneration(5), make_state(generation=4))
        assert evaluate(MaxGeneration(5), make_state(generation=5))
        assert evaluate(MaxGeneration(5), make_state(generation=6))

    def test_target_fitness_respects_objective(self) -> None:
        assert evaluate(TargetFitness(5.0), make_state(best_history=(5.0,)))
        assert not evaluate(TargetFitness(5.0), make_state(best_history=(4.9,)))
        assert evaluate(TargetFitness(1.0), make_state(best_history=(0.5,), objective=Objective.MINIMIZE))
        assert not evaluate(TargetFitness(1.0), make_state(best_history=(1.5,), objective=Objective.MINIMIZE))

    def test_target_fitness_false_before_first_evaluation(self) -> None:
        assert not evaluate(TargetFitness(-np.inf), make_state())

    def test_stagnant_fitness_needs_window_plus_one_generations(self) -> None:
        condition = StagnantFitness(window=2)
        assert not evaluate(condition, make_state(best_history=(1.0, 1.0)))
        assert evaluate(condition, make_state(best_history=(1.0, 1.0, 1.0)))

    def test_stagnant_fitness_detects_improvement(self) -> None:
        condition = StagnantFitness(window=2)
        assert not evaluate(condition, make_state(best_history=(1.0, 1.0, 1.5)))
        assert evaluate(condition, make_state(best_history=(0.0, 1.0, 1.0, 1.0)))

    def test_stagnant_fitness_tolerance(self) -> None:
        history = (1.0, 1.05)
        assert evaluate(StagnantFitness(window=1, tolerance=0.1), make_state(best_history=history))
        assert not evaluate(StagnantFitness(window=1, tolerance=0.01), make_state(best_history=history))

    def test_stagnant_fitness_minimize(self) -> None:
        condition = StagnantFitness(window=1)
        assert not evaluate(condition, make_state(best_history=(3.0, 1.0), objective=Objective.MINIMIZE))
        assert evaluate(condition, make_state(best_history=(1.0, 1.0), objective=Objective.MINIMIZE))

    def test_elapsed_time(self) -> None:
        assert not evaluate(ElapsedTime(2.0), make_state(elapsed=1.99))
        assert evaluate(ElapsedTime(2.0), make_state(elapsed=2.0))

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: MaxGeneration(0),
            lambda: TargetFitness(float("nan")),
            lambda: StagnantFitness(window=0),
            lambda: StagnantFitness(window=1, tolerance=-1.0),
            lambda: ElapsedTime(-1.0),
        ],
    )
    def test_invalid_parameters_raise(self, factory) -> None:
        with pytest.raises(InvalidParameterError):
            factory()


class TestCombinators:
    def test_operators_build_nodes(self) -> None:
        a, b = MaxGeneration(1), ElapsedTime(1.0)
        assert (a & b) == And(a, b)
        assert (a | b) == Or(a, b)
        assert ~a == Not(a)

    @pytest.mark.parametrize("state, condition", list(itertools.product(STATES, CONDITIONS)))
    def test_and_true_is_identity(self, state: State, condition) -> None:
        assert evaluate(And(Constant(True), condition), state) == evaluate(condition, state)

    @pytest.mark.parametrize("state, condition", list(itertools.product(STATES, CONDITIONS)))
    def test_or_false_is_identity(self, state: State, condition) -> None:
        assert evaluate(Or(Constant(False), condition), state) == evaluate(condition, state)

    @pytest.mark.parametrize("state, condition", list(itertools.product(STATES, CONDITIONS)))
    def test_double_negation_is_identity(self, state: State, condition) -> None:
        assert evaluate(Not(Not(condition)), state) == evaluate(condition, state)

    def test_short_circuit_skips_right_operand(self) -> None:
        state = make_state()
        # A bare Condition is not a known node and raises when evaluated
        unknown = Condition()
        assert evaluate(Or(Constant(True), unknown), state)
        assert not evaluate(And(Constant(False), unknown), state)
        with pytest.raises(TypeError, match="unknown termination condition"):
            evaluate(And(Constant(True), unknown), state)


class TestFiringConditions:
    def test_false_tree_has_no_reasons(self) -> None:
        assert firing_conditions(MaxGeneration(10) | TargetFitness(100.0), make_state(generation=3)) == ()

    def test_or_reports_first_true_branch(self) -> None:
        state = make_state(generation=5, best_history=(7.0,))
        reasons = firing_conditions(MaxGeneration(5) | TargetFitness(5.0), state)
        assert reasons == (MaxGeneration(5),)

    def test_and_reports_both_operands(self) -> None:
        state = make_state(generation=5, elapsed=3.0)
        reasons = firing_conditions(MaxGeneration(5) & ElapsedTime(2.0), state)
        assert reasons == (MaxGeneration(5), ElapsedTime(2.0))

    def test_negation_reports_itself(self) -> None:
        condition = ~MaxGeneration(10)
        assert firing_conditions(condition, make_state(generation=1)) == (condition,)

    @pytest.mark.parametrize("state, condition", list(itertools.product(STATES, CONDITIONS)))
    def test_agrees_with_evaluate(self, state: State, condition) -> None:
        assert bool(firing_conditions(condition, state)) == evaluate(condition, state)
