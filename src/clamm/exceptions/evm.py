from typing import Any

from clamm.exceptions.base import ClammError


class EVMRevertError(ClammError):
    """
    Raised when a simulated contract operation would revert on-chain.
    """

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(message=f"EVM Revert: {error}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.error,)


class InvalidSqrtPriceLimit(EVMRevertError):
    """
    Raised when a swap price limit is not strictly between the current price and the global bound
    in the swap direction.
    """

    def __init__(self, sqrt_price_limit_x96: int) -> None:
        self.sqrt_price_limit_x96 = sqrt_price_limit_x96
        super().__init__(error=f"SPL (price limit {sqrt_price_limit_x96})")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.sqrt_price_limit_x96,)
