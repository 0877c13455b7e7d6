from typing import Any

from clamm.exceptions.base import ClammError

"""
Exceptions defined here are raised by the tick list helpers and the tick data providers. All of
them indicate missing or corrupt tick data and are never caught inside the package.
"""


class TickDataError(ClammError):
    """
    Exception raised inside tick list helpers and tick data providers.
    """


class NoTickDataError(TickDataError):
    """
    Raised by the default provider, which holds no tick data.
    """

    def __init__(self) -> None:
        super().__init__(message="No tick data provider was given")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class TickNotFound(TickDataError):
    """
    Raised when a tick index is not present in the tick list.
    """

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(message=f"Tick {index} is not initialized.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.index,)


class InvalidTickList(TickDataError):
    """
    Raised when a tick list fails validation.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(message=f"Invalid tick list: {reason}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.reason,)


class TickSearchError(TickDataError):
    """
    Raised when a search is started outside of the range covered by the tick list.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(message=f"Tick search failed: {reason}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.reason,)
