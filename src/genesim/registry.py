"""Registry system for operator strategies.

This module provides a registry pattern for managing the strategies of each
operator role. Instead of hardcoding strategy implementations, users can
register factories that create configured operators and retrieve them by name.

The registry pattern enables:
- **Pluggable strategies**: Swap operators without code changes
- **Configuration-driven experiments**: Select strategies by string name from config files
- **Discoverability**: List all available strategies programmatically
- **Factory pattern**: Register functions that create configured operators

There are four independent registries, one per operator role:
1. **SelectionRegistry**: Parent selection strategies (SelectionOp protocol)
2. **CrossoverRegistry**: Recombination strategies (CrossoverOp protocol)
3. **MutationRegistry**: Mutation strategies (MutationOp protocol)
4. **ReinsertionRegistry**: Reinsertion strategies (ReinsertionOp protocol)

Basic usage:
    ```python
    from genesim.registry import SelectionRegistry, list_selections

    # Register a strategy factory
    def random_factory():
        def selector(evaluated, n_parents, rng):
            return rng.integers(0, len(evaluated), size=n_parents)
        return selector

    SelectionRegistry.register("random", random_factory)

    # Get a configured selector
    selector = SelectionRegistry.get("tournament", tournament_size=3)

    # List available strategies
    available = list_selections()  # ["random", "roulette", ...]
    ```
"""

from collections.abc import Callable
from typing import Any, ClassVar


class _Registry:
    """Class-level registry of strategy factories.

    Subclasses declare their own ``_registry`` dictionary and a ``kind`` used
    in error messages, so that every operator role has an independent
    namespace.

    Class Attributes:
        kind: Human-readable name of the operator role.
        _registry: Dictionary mapping strategy names to factory functions.
    """

    kind: ClassVar[str] = "strategy"
    _registry: ClassVar[dict[str, Callable[..., Any]]]

    @classmethod
    def register(cls, name: str, factory: Callable[..., Any]) -> None:
        """Register a strategy factory.

        The factory is a callable that accepts keyword arguments and returns a
        configured operator. This enables strategies to be configured at
        retrieval time with custom parameters.

        Args:
            name: Unique name for the strategy. Will overwrite if already exists.
            factory: Callable that returns an operator. Should accept keyword
                arguments for configuration.
        """
        cls._registry[name] = factory

    @classmethod
    def get(cls, name: str, **kwargs: Any) -> Any:
        """Get a configured operator by name.

        Args:
            name: Name of the registered strategy.
            **kwargs: Configuration parameters passed to the factory function.

        Returns:
            The configured operator.

        Raises:
            KeyError: If the strategy name is not registered. Error message
                includes list of available strategies.

        Example:
            ```python
            mutate = MutationRegistry.get("bit_flip", rate=0.01)
            ```
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys())) or "none"
            raise KeyError(f"{cls.kind} strategy '{name}' not found. Available strategies: {available}")
        factory = cls._registry[name]
        return factory(**kwargs)

    @classmethod
    def list(cls) -> list[str]:
        """Return sorted list of registered strategy names."""
        return sorted(cls._registry.keys())


class SelectionRegistry(_Registry):
    """Registry for parent selection strategies (SelectionOp factories)."""

    kind = "Selection"
    _registry: ClassVar[dict[str, Callable[..., Any]]] = {}


class CrossoverRegistry(_Registry):
    """Registry for recombination strategies (CrossoverOp factories)."""

    kind = "Crossover"
    _registry: ClassVar[dict[str, Callable[..., Any]]] = {}


class MutationRegistry(_Registry):
    """Registry for mutation strategies (MutationOp factories)."""

    kind = "Mutation"
    _registry: ClassVar[dict[str, Callable[..., Any]]] = {}


class ReinsertionRegistry(_Registry):
    """Registry for reinsertion strategies (ReinsertionOp factories)."""

    kind = "Reinsertion"
    _registry: ClassVar[dict[str, Callable[..., Any]]] = {}


def list_selections() -> list[str]:
    """List all registered parent selection strategies."""
    return SelectionRegistry.list()


def list_crossovers() -> list[str]:
    """List all registered crossover strategies."""
    return CrossoverRegistry.list()


def list_mutations() -> list[str]:
    """List all registered mutation strategies."""
    return MutationRegistry.list()


def list_reinsertions() -> list[str]:
    """List all registered reinsertion strategies.

    Example:
        ```python
        from genesim.registry import list_reinsertions

        for name in list_reinsertions():
            print(f"- {name}")
        ```
    """
    return ReinsertionRegistry.list()
