class OrthotopeError(Exception):
    """Base class for every error raised by the grid engine."""


class InvalidDimensions(OrthotopeError, ValueError):
    """An axis length is not a positive integer."""


class OutOfBounds(OrthotopeError, IndexError):
    """Coordinate has the wrong arity or a component outside [0, length)."""


class Exhausted(OrthotopeError):
    """No empty cell is left to occupy."""


class InvalidKeyFormat(OrthotopeError, ValueError):
    """A key does not decode to a sequence of integers."""


class CorruptState(OrthotopeError, RuntimeError):
    """
    The occupied/empty partition no longer covers the grid exactly once.
    Never raised by a correct engine; surfaced instead of being tolerated.
    """
