from __future__ import annotations


class EvolutionLabError(RuntimeError):
    """Base for every error raised by the simulation engine."""


class ConfigurationError(EvolutionLabError, ValueError):
    """Raised when run parameters are rejected at construction."""


class InvalidSampleSize(EvolutionLabError):
    """Raised when breeding cannot draw two distinct parents."""

    def __init__(self, available: int, requested: int = 2) -> None:
        super().__init__(
            f"cannot sample {requested} distinct parents from {available} survivor(s)"
        )
        self.available = available
        self.requested = requested


class LengthMismatch(EvolutionLabError):
    """Raised when a genome disagrees with the target length."""

    def __init__(self, expected: int, actual: int, what: str = "genome") -> None:
        super().__init__(f"{what} length {actual} does not match expected length {expected}")
        self.expected = expected
        self.actual = actual


class SimulationFinished(EvolutionLabError):
    """Raised when a finished phase machine is stepped again."""


__all__ = [
    "ConfigurationError",
    "EvolutionLabError",
    "InvalidSampleSize",
    "LengthMismatch",
    "SimulationFinished",
]
