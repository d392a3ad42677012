"""Exception hierarchy shared across the evolution stack."""

from __future__ import annotations


class EvolutionError(Exception):
    """Base class for every error raised by this package."""


class FitnessError(EvolutionError):
    """Fitness could not be computed for a single candidate."""


class CannotConvert(FitnessError):
    def __init__(self, msg: str = "cannot convert") -> None:
        super().__init__(msg)


class ResultNaN(FitnessError):
    def __init__(self, msg: str = "result is NaN") -> None:
        super().__init__(msg)


class ResultInfinite(FitnessError):
    def __init__(self, msg: str = "result is infinite") -> None:
        super().__init__(msg)


class ConfigurationError(EvolutionError, ValueError):
    """Invalid configuration or missing collaborator."""


class EmptyPoolError(EvolutionError):
    """Every genome of a generation failed fitness evaluation."""


class BreedingExhaustedError(EvolutionError):
    """Offspring kept failing selection or evaluation."""
