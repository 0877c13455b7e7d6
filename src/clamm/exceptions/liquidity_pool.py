from typing import TYPE_CHECKING, Any

from clamm.exceptions.base import ClammError

if TYPE_CHECKING:
    from clamm.token import Token


class LiquidityPoolError(ClammError):
    """
    Exception raised inside liquidity pool helpers.
    """


# 2nd level exceptions for Liquidity Pool classes
class InvalidFee(LiquidityPoolError):
    def __init__(self, fee: int) -> None:
        """
        Raised when a pool fee is outside the range [0, 1_000_000).
        """

        self.fee = fee
        super().__init__(message=f"Invalid fee {fee}.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.fee,)


class InvalidPoolState(LiquidityPoolError):
    """
    Raised when the pool state values are inconsistent, e.g. the current tick does not bracket the
    square root price.
    """


class UnknownToken(LiquidityPoolError):
    """
    Raised when an amount is quoted in a token the pool does not hold.
    """

    def __init__(self, token: "Token") -> None:
        self.token = token
        super().__init__(message=f"Token {token} is not held by this pool.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.token,)


class InsufficientLiquidity(LiquidityPoolError):
    """
    Base for the recoverable quoting failures. The best-trade search catches these and abandons the
    branch.
    """

    def __init__(self, amount_in: int, amount_out: int, message: str) -> None:
        self.amount_in = amount_in
        self.amount_out = amount_out
        super().__init__(message=message)

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.amount_in, self.amount_out, self.message)


class InsufficientInputAmount(InsufficientLiquidity):
    """
    Raised if an exact input swap would produce no output.
    """

    def __init__(self, amount_in: int, amount_out: int) -> None:
        super().__init__(
            amount_in=amount_in,
            amount_out=amount_out,
            message="Insufficient input amount to produce any output.",
        )

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.amount_in, self.amount_out)


class InsufficientReserves(InsufficientLiquidity):
    """
    Raised if an exact output swap cannot deliver the requested output.
    """

    def __init__(self, amount_in: int, amount_out: int) -> None:
        super().__init__(
            amount_in=amount_in,
            amount_out=amount_out,
            message="Insufficient liquidity to swap for the requested amount.",
        )

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.amount_in, self.amount_out)
