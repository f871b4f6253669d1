"""Tournament selection."""

import numpy as np

from genesim.errors import InvalidParameterError, PopulationTooSmallError, check_probability
from genesim.population import EvaluatedPopulation
from genesim.selection.base import require_population


def tournament_selection(tournament_size: int = 2, probability: float = 1.0, remove_selected: bool = False):
    """Create a tournament parent selector.

    Each parent is the winner of a tournament between ``tournament_size``
    distinct individuals drawn uniformly at random. The best participant wins
    with ``probability``; otherwise the second best wins with ``probability``,
    and so on, the worst participant winning when every draw fails. A
    probability of 1.0 makes the tournament deterministic. A tournament of
    size 1 is equivalent to random selection.

    Args:
        tournament_size: Number of individuals competing in each tournament (default: 2).
        probability: Probability that the best remaining participant wins (default: 1.0).
        remove_selected: If True, winners are removed from the pool of
            candidates so no individual is selected twice (default: False).

    Returns:
        A SelectionOp callable.

    Raises:
        InvalidParameterError: If tournament_size is not positive.
        InvalidProbabilityError: If probability is outside [0, 1].

    Example:
        >>> selector = tournament_selection(tournament_size=3)
        >>> parents = selector(evaluated, n_parents=20, rng=rng)
    """
    if tournament_size <= 0:
        raise InvalidParameterError(f"tournament_size must be positive, got {tournament_size}")
    probability = check_probability("probability", probability)

    def selector(evaluated: EvaluatedPopulation, n_parents: int, rng: np.random.Generator) -> np.ndarray:
        """Select parents using tournament selection.

        Raises:
            EmptyPopulationError: If the population is empty.
            PopulationTooSmallError: If the population is smaller than one
                tournament, or smaller than n_parents when removing selected
                individuals.
        """
        pop_size = require_population(evaluated, tournament_size, "tournament")
        if remove_selected and n_parents > pop_size:
            raise PopulationTooSmallError(
                f"cannot select {n_parents} distinct parents from a population of {pop_size}"
            )

        fitness = evaluated.fitness
        objective = evaluated.objective
        pool = np.arange(pop_size, dtype=np.intp)
        selected = np.empty(n_parents, dtype=np.intp)

        for i in range(n_parents):
            size = min(tournament_size, len(pool))
            candidates = rng.choice(pool, size=size, replace=False)
            # Participants from best to worst
            ranked = candidates[objective.ranking(fitness[candidates])]

            winner = ranked[-1]
            if probability >= 1.0:
                winner = ranked[0]
            else:
                for candidate in ranked[:-1]:
                    if rng.random() < probability:
                        winner = candidate
                        break

            selected[i] = winner
            if remove_selected:
                pool = pool[pool != winner]

        return selected

    return selector
