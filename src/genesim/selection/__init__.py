"""Selection strategies for genetic algorithms."""

from genesim.registry import SelectionRegistry
from genesim.selection.roulette import roulette_wheel_selection, universal_sampling_selection
from genesim.selection.tournament import tournament_selection
from genesim.selection.truncation import truncation_selection

# Register built-in selection strategies
SelectionRegistry.register("tournament", tournament_selection)
SelectionRegistry.register("roulette", roulette_wheel_selection)
SelectionRegistry.register("universal", universal_sampling_selection)
SelectionRegistry.register("truncation", truncation_selection)

__all__ = [
    "roulette_wheel_selection",
    "tournament_selection",
    "truncation_selection",
    "universal_sampling_selection",
]
