"""Exceptions raised by the simulation engine."""


class SimulationError(Exception):
    """Base class for engine errors."""


class UnsupportedAlgorithmError(SimulationError, ValueError):
    """The requested algorithm tag does not match any trainer."""

    def __init__(self, algorithm):
        self.algorithm = algorithm
        super().__init__(f"Algorithm {algorithm!r} not implemented")


class DegenerateInputError(SimulationError, ValueError):
    """The dataset cannot be trained on at all (e.g. it is empty)."""
