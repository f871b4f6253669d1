"""Termination conditions.

A termination condition is a tree of frozen dataclasses. Leaves are atomic
predicates over the simulation State, inner nodes combine them:

- MaxGeneration(n): the generation counter reached ``n``
- TargetFitness(value): the best fitness reached ``value`` in the direction
  of optimization
- StagnantFitness(window, tolerance): the best fitness did not improve by more
  than ``tolerance`` over the last ``window`` generations
- ElapsedTime(seconds): at least ``seconds`` passed since the first step
- Constant(value): always ``value``
- And(left, right), Or(left, right), Not(condition)

Conditions compose with ``&``, ``|`` and ``~``:

    ```python
    condition = MaxGeneration(100) | (TargetFitness(0.99) & ~ElapsedTime(60.0))
    ```

Evaluation is a pure function of the State. It runs once per generation, after
fitness evaluation and the update of the best solution.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from genesim.errors import InvalidParameterError

if TYPE_CHECKING:
    from genesim.results import State


class Condition:
    """Base class of all termination conditions."""

    def __and__(self, other: Condition) -> And:
        return And(self, other)

    def __or__(self, other: Condition) -> Or:
        return Or(self, other)

    def __invert__(self) -> Not:
        return Not(self)


@dataclass(frozen=True)
class MaxGeneration(Condition):
    """True once ``n`` generations have been executed."""

    n: int

    def __post_init__(self) -> None:
        if self.n <= 0:
            raise InvalidParameterError(f"n must be positive, got {self.n}")


@dataclass(frozen=True)
class TargetFitness(Condition):
    """True once the best fitness is at least as good as ``value``."""

    value: float

    def __post_init__(self) -> None:
        if math.isnan(self.value):
            raise InvalidParameterError("target fitness must not be NaN")


@dataclass(frozen=True)
class StagnantFitness(Condition):
    """True if the best fitness improved by at most ``tolerance`` over ``window`` generations.

    The best fitness is compared with its value ``window`` generations ago, so
    at least ``window + 1`` generations (including generation 0) must have been
    evaluated before the condition can fire.
    """

    window: int
    tolerance: float = 0.0

    def __post_init__(self) -> None:
        if self.window <= 0:
            raise InvalidParameterError(f"window must be positive, got {self.window}")
        if self.tolerance < 0:
            raise InvalidParameterError(f"tolerance must be non-negative, got {self.tolerance}")


@dataclass(frozen=True)
class ElapsedTime(Condition):
    """True once ``seconds`` have passed since the first step started.

    The clock is sampled once per generation, so a long generation is never
    interrupted.
    """

    seconds: float

    def __post_init__(self) -> None:
        if self.seconds < 0:
            raise InvalidParameterError(f"seconds must be non-negative, got {self.seconds}")


@dataclass(frozen=True)
class Constant(Condition):
    """Always ``value``."""

    value: bool


@dataclass(frozen=True)
class And(Condition):
    left: Condition
    right: Condition


@dataclass(frozen=True)
class Or(Condition):
    left: Condition
    right: Condition


@dataclass(frozen=True)
class Not(Condition):
    condition: Condition


def evaluate(condition: Condition, state: State) -> bool:
    """Evaluate a condition tree against a State.

    ``And`` and ``Or`` short-circuit: the right operand is only evaluated when
    the left one does not decide the result.

    Args:
        condition: Root of the condition tree.
        state: Snapshot to evaluate against.

    Returns:
        True if the simulation should terminate.

    Raises:
        TypeError: If the tree contains an unknown node.
    """
    if isinstance(condition, And):
        return evaluate(condition.left, state) and evaluate(condition.right, state)
    if isinstance(condition, Or):
        return evaluate(condition.left, state) or evaluate(condition.right, state)
    if isinstance(condition, Not):
        return not evaluate(condition.condition, state)
    if isinstance(condition, Constant):
        return bool(condition.value)
    if isinstance(condition, MaxGeneration):
        return state.generation >= condition.n
    if isinstance(condition, TargetFitness):
        return state.best is not None and state.objective.reaches(state.best.fitness, condition.value)
    if isinstance(condition, StagnantFitness):
        history = state.best_history
        if len(history) <= condition.window:
            return False
        return state.objective.improvement(history[-1], history[-1 - condition.window]) <= condition.tolerance
    if isinstance(condition, ElapsedTime):
        return state.elapsed >= condition.seconds
    raise TypeError(f"unknown termination condition: {condition!r}")


def firing_conditions(condition: Condition, state: State) -> tuple[Condition, ...]:
    """Return the conditions that make the tree true.

    Atoms and negations report themselves. ``And`` reports the reasons of both
    operands, ``Or`` those of the first operand that is true.

    Returns:
        The firing conditions, or an empty tuple if the tree is false.

    Example:
        >>> condition = MaxGeneration(5) | TargetFitness(1.0)
        >>> firing_conditions(condition, state_at_generation_5)
        (MaxGeneration(n=5),)
    """
    if isinstance(condition, And):
        left = firing_conditions(condition.left, state)
        if not left:
            return ()
        right = firing_conditions(condition.right, state)
        return left + right if right else ()
    if isinstance(condition, Or):
        return firing_conditions(condition.left, state) or firing_conditions(condition.right, state)
    return (condition,) if evaluate(condition, state) else ()
