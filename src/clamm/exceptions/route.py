from typing import Any

from clamm.exceptions.base import ClammError

"""
Exceptions defined here are raised by the `route` and `trade` modules.
"""


class RouteError(ClammError):
    """
    Exception raised inside route and trade helpers.
    """


class InvalidRoute(RouteError):
    """
    Raised in route and trade constructors when the provided pools or tokens do not form a path.
    """


class DuplicatePools(RouteError):
    """
    Raised when two swaps in a trade use the same pool.
    """

    def __init__(self) -> None:
        super().__init__(message="A pool is used by more than one swap in the trade.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()
