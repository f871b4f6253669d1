"""Error taxonomy for genesim.

Every failure the engine can report has its own named exception class so that
callers can react precisely. The hierarchy is:

- SimError: Root of all errors raised by genesim.
    - ConfigurationError: Invalid configuration detected at construction time.
      Also a ValueError, so callers that only care about "bad argument" can
      catch that instead.
        - InvalidPopulationSizeError
        - InvalidProbabilityError
        - InvalidParameterError
        - InvalidGenomeConfigError
        - EmptyTerminationError
        - MissingSeedError
    - OperatorError: A genetic operator's precondition was violated at runtime.
        - EmptyPopulationError
        - PopulationTooSmallError
        - GenomeTooShortError
        - ReinsertionSizeMismatchError
        - ReinsertionShortfallError
    - SimulationFinishedError: step() or run() called after termination fired.

Errors are never retried or downgraded to default values by the engine; they
propagate to the caller of Simulator.step() / Simulator.run().
"""


class SimError(Exception):
    """Base class for all errors raised by genesim."""


class ConfigurationError(SimError, ValueError):
    """Invalid configuration supplied when constructing a component."""


class InvalidPopulationSizeError(ConfigurationError):
    """Population size is zero or negative."""


class InvalidProbabilityError(ConfigurationError):
    """A probability or rate lies outside of [0, 1]."""


class InvalidParameterError(ConfigurationError):
    """An operator or termination parameter is out of its valid range."""


class InvalidGenomeConfigError(ConfigurationError):
    """A genome builder was configured to produce invalid genotypes."""


class EmptyTerminationError(ConfigurationError):
    """No termination condition was supplied to the simulator."""


class MissingSeedError(ConfigurationError):
    """No explicit seed was supplied where one is required."""


class OperatorError(SimError):
    """A genetic operator could not proceed with the population it was given."""


class EmptyPopulationError(OperatorError):
    """An operator was asked to work on an empty population."""


class PopulationTooSmallError(OperatorError):
    """The population holds fewer individuals than an operator requires."""


class GenomeTooShortError(OperatorError):
    """A genome is too short for the operator applied to it."""


class ReinsertionSizeMismatchError(OperatorError):
    """The reinsertion policy received or produced the wrong number of individuals."""


class ReinsertionShortfallError(OperatorError):
    """Parents and offspring together cannot fill the next generation."""


class SimulationFinishedError(SimError):
    """The simulation already terminated; reset() it before stepping again."""


def check_probability(name: str, value: float) -> float:
    """Validate that ``value`` is a probability in [0, 1].

    Args:
        name: Parameter name used in the error message.
        value: Value to validate.

    Returns:
        The value as a float.

    Raises:
        InvalidProbabilityError: If value is not within [0, 1].
    """
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise InvalidProbabilityError(f"{name} must be in [0, 1], got {value}")
    return value
