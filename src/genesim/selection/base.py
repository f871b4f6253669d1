"""Shared preconditions of the selection strategies."""

from genesim.errors import EmptyPopulationError, PopulationTooSmallError
from genesim.population import EvaluatedPopulation


def require_population(evaluated: EvaluatedPopulation, minimum: int, strategy: str) -> int:
    """Check that ``evaluated`` holds at least ``minimum`` individuals.

    Args:
        evaluated: Population to select from.
        minimum: Minimum number of individuals the strategy needs.
        strategy: Name of the strategy, used in error messages.

    Returns:
        The population size.

    Raises:
        EmptyPopulationError: If the population is empty.
        PopulationTooSmallError: If the population holds fewer than minimum
            individuals.
    """
    size = len(evaluated)
    if size == 0:
        raise EmptyPopulationError(f"{strategy} selection cannot select from an empty population")
    if size < minimum:
        raise PopulationTooSmallError(
            f"{strategy} selection requires at least {minimum} individuals, population has {size}"
        )
    return size
