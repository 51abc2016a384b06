class KKBalanceError(Exception):
    """Base class for errors raised by kkbalance."""


class InvalidInput(KKBalanceError, ValueError):
    """
    Raised when weights or a bucket count can't be balanced: an empty weight
    list, a negative or non-integer weight, or fewer than one bucket.
    """


class InternalInvariantViolation(KKBalanceError, AssertionError):
    """
    Raised when buckets or candidates are used in a way the algorithm never
    does, such as reading a bucket after it was merged away. Seeing one of these
    means there is a bug in the caller, not bad input.
    """


class ShapeMismatch(InternalInvariantViolation):
    """Raised when merging two candidates with different bucket counts."""
