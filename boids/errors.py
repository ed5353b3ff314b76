"""Exceptions raised by the flocking core."""


class ConstructionError(ValueError):
    """A flock could not be built from the given count, arena or parameters."""


class DegenerateVectorError(ArithmeticError):
    """A zero-length vector was asked for a direction."""
