from clamm.exceptions.base import ClammError


class PositionError(ClammError):
    """
    Exception raised inside liquidity position helpers.
    """


class InvalidTickRange(PositionError):
    """
    Raised when position bounds are unordered, out of range, or not aligned to the tick spacing.
    """
