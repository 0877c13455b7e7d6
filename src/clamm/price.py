import dataclasses
from fractions import Fraction
from typing import Self

from clamm.exceptions import ClammValueError
from clamm.token import Token, TokenAmount


@dataclasses.dataclass(slots=True, frozen=True)
class Price:
    """
    The exchange rate between two tokens, as the number of raw units of `quote` received for one raw
    unit of `base`.
    """

    base: Token
    quote: Token
    value: Fraction

    @classmethod
    def from_amounts(cls, base: Token, quote: Token, denominator: int, numerator: int) -> Self:
        """
        Build a price from an amount of `base` (the denominator) exchanged for an amount of `quote`
        (the numerator).
        """

        return cls(base, quote, Fraction(numerator, denominator))

    def invert(self) -> "Price":
        return Price(self.quote, self.base, 1 / self.value)

    def __mul__(self, other: "Price") -> "Price":
        if self.quote != other.base:
            raise ClammValueError(message=f"Cannot chain price in {self.quote} with {other.base}")
        return Price(self.base, other.quote, self.value * other.value)

    def quote_amount(self, amount: TokenAmount) -> TokenAmount:
        """
        Convert an amount of the base token to the quote token, rounding down.
        """

        if amount.token != self.base:
            raise ClammValueError(message=f"Cannot quote {amount.token} with a {self.base} price")
        return TokenAmount(self.quote, int(self.value * amount.amount))

    @property
    def adjusted_for_decimals(self) -> Fraction:
        """
        The price in whole tokens, accounting for the decimal places of both tokens.
        """

        return self.value * Fraction(10**self.base.decimals, 10**self.quote.decimals)
