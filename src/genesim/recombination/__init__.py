"""Recombination (crossover) strategies for genetic algorithms."""

from genesim.recombination.discrete import multi_point_crossover, uniform_crossover
from genesim.recombination.order import order_one_crossover, partially_mapped_crossover
from genesim.registry import CrossoverRegistry

# Register built-in crossover strategies
CrossoverRegistry.register("uniform", uniform_crossover)
CrossoverRegistry.register("multi_point", multi_point_crossover)
CrossoverRegistry.register("order_one", order_one_crossover)
CrossoverRegistry.register("partially_mapped", partially_mapped_crossover)

__all__ = [
    "multi_point_crossover",
    "order_one_crossover",
    "partially_mapped_crossover",
    "uniform_crossover",
]
