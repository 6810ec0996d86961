"""Exceptions raised by the road generator.

Search exhaustion is not an error: ``generate`` returns ``None`` for it.
Everything here is a broken contract and is never retried internally.
"""


class RoadGenError(Exception):
    """Base class for all road generator errors."""


class ConstructionError(RoadGenError, ValueError):
    """A Position or Direction was built from malformed values."""


class InvalidArgumentError(RoadGenError, ValueError):
    """An argument is outside its accepted domain (rotation, axis, face data)."""


class OutOfBoundsError(RoadGenError, IndexError):
    """A lattice read or write fell outside the cube."""


class InvalidSlopeError(RoadGenError, ValueError):
    """A diagonal segment was requested with a nonzero climb."""


class InternalInconsistencyError(RoadGenError, RuntimeError):
    """Orientation bookkeeping reached a state valid inputs cannot produce."""


class GenerationExhaustedError(RoadGenError, RuntimeError):
    """The retry driver ran out of attempts without a complete road."""

    def __init__(self, attempts: int, size: int):
        super().__init__(f"No road of size {size} found after {attempts} attempt(s)")
        self.attempts = attempts
        self.size = size
