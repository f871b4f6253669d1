"""Reinsertion strategies for genetic algorithms."""

from genesim.registry import ReinsertionRegistry
from genesim.reinsertion.elitist import elitist_reinsertion
from genesim.reinsertion.replacement import full_replacement, uniform_reinsertion

# Register built-in reinsertion strategies
ReinsertionRegistry.register("full_replacement", full_replacement)
ReinsertionRegistry.register("elitist", elitist_reinsertion)
ReinsertionRegistry.register("uniform", uniform_reinsertion)

__all__ = ["elitist_reinsertion", "full_replacement", "uniform_reinsertion"]
