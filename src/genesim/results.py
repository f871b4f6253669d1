"""Snapshot and result types of a simulation.

This module provides the immutable values a Simulator hands out:

- BestSolution: The best individual found so far and when it was found
- State: Snapshot of a simulation after a step
- Intermediate: Result of a step after which the simulation continues
- Final: Result of the step on which termination fired
- SimResult: Either an Intermediate or a Final

All classes are frozen dataclasses. The Simulator replaces its State once per
step; snapshots handed out earlier are never modified.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from genesim.fitness import Objective
from genesim.population import EvaluatedPopulation, Population

if TYPE_CHECKING:
    from genesim.termination import Condition


@dataclass(frozen=True, eq=False)
class BestSolution:
    """The best individual found so far.

    Attributes:
        genome: The genotype of the individual.
        fitness: Its fitness value.
        generation: The generation in which it was first found.
    """

    genome: Any
    fitness: float
    generation: int


@dataclass(frozen=True, eq=False)
class State:
    """Snapshot of a simulation.

    Attributes:
        generation: Number of generation transitions executed; 0 before the
            first step and while the initial population is current.
        population: The current generation.
        evaluated: The evaluated current generation, or None before the first
            step.
        processing_time: Sum of the durations of every step executed so far,
            in seconds.
        duration: Duration of the last step, in seconds.
        elapsed: Time between the start of the first step and the end of the
            last one, in seconds.
        best: The best solution found so far, or None before the first step.
            Only ever replaced by a strictly better solution.
        best_history: Best-so-far fitness per generation, starting with
            generation 0.
        objective: Direction of optimization.
    """

    generation: int
    population: Population
    evaluated: EvaluatedPopulation | None = None
    processing_time: float = 0.0
    duration: float = 0.0
    elapsed: float = 0.0
    best: BestSolution | None = None
    best_history: tuple[float, ...] = ()
    objective: Objective = Objective.MAXIMIZE


@dataclass(frozen=True, eq=False)
class Intermediate:
    """Result of a step after which the simulation continues."""

    state: State


@dataclass(frozen=True, eq=False)
class Final:
    """Result of the step on which the termination condition fired.

    Attributes:
        state: Snapshot after the terminating step.
        processing_time: Sum of the durations of every step of the run,
            including the terminating one, in seconds.
        best: The best solution of the run.
        generation: The generation at which termination fired.
        reasons: The atomic conditions that made the termination condition
            true.

    Example:
        >>> final = simulator.run()
        >>> final.generation, final.reasons
        (5, (MaxGeneration(n=5),))
    """

    state: State
    processing_time: float
    best: BestSolution
    generation: int
    reasons: tuple[Condition, ...]


SimResult = Intermediate | Final
