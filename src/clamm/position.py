import dataclasses
from fractions import Fraction
from functools import cached_property
from typing import NamedTuple, Self

from clamm.constants import MAX_UINT256
from clamm.exceptions import InvalidTickRange, PositionError
from clamm.functions import encode_sqrt_ratio_x96, tick_to_price
from clamm.libraries.liquidity_amounts import max_liquidity_for_amounts
from clamm.libraries.sqrt_price_math import get_amount0_delta, get_amount1_delta
from clamm.libraries.tick_math import (
    MAX_SQRT_RATIO,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MIN_TICK,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)
from clamm.pool import Pool
from clamm.price import Price
from clamm.token import TokenAmount
from clamm.types import Liquidity, SqrtPriceX96, TickIndex


class MintAmounts(NamedTuple):
    amount0: int
    amount1: int


class SlippageRatios(NamedTuple):
    sqrt_ratio_x96_lower: SqrtPriceX96
    sqrt_ratio_x96_upper: SqrtPriceX96


@dataclasses.dataclass(frozen=True)
class Position:
    """
    A liquidity position over the tick range [tick_lower, tick_upper) of a pool.

    Derived amounts are computed on first access and cached. Positions are immutable, so a change
    of liquidity or bounds requires building a new `Position`.
    """

    pool: Pool
    liquidity: Liquidity
    tick_lower: TickIndex
    tick_upper: TickIndex

    def __post_init__(self) -> None:
        if not (self.tick_lower < self.tick_upper):
            raise InvalidTickRange(message="TICK_ORDER: tick_lower must be below tick_upper")
        if not (self.tick_lower >= MIN_TICK and self.tick_lower % self.pool.tick_spacing == 0):
            raise InvalidTickRange(message=f"TICK_LOWER: invalid lower tick {self.tick_lower}")
        if not (self.tick_upper <= MAX_TICK and self.tick_upper % self.pool.tick_spacing == 0):
            raise InvalidTickRange(message=f"TICK_UPPER: invalid upper tick {self.tick_upper}")
        if self.liquidity < 0:
            raise PositionError(message=f"Invalid liquidity {self.liquidity}")

    @cached_property
    def token0_price_lower(self) -> Price:
        """
        The price of token0 at the lower tick.
        """

        return tick_to_price(self.pool.token0, self.pool.token1, self.tick_lower)

    @cached_property
    def token0_price_upper(self) -> Price:
        """
        The price of token0 at the upper tick.
        """

        return tick_to_price(self.pool.token0, self.pool.token1, self.tick_upper)

    @cached_property
    def amount0(self) -> TokenAmount:
        """
        The amount of token0 this position would return if burned at the current pool price.
        """

        return TokenAmount(self.pool.token0, self._amount0(round_up=False))

    @cached_property
    def amount1(self) -> TokenAmount:
        """
        The amount of token1 this position would return if burned at the current pool price.
        """

        return TokenAmount(self.pool.token1, self._amount1(round_up=False))

    @cached_property
    def mint_amounts(self) -> MintAmounts:
        """
        The token amounts required to mint this position's liquidity at the current pool price,
        rounded up.
        """

        return MintAmounts(
            amount0=self._amount0(round_up=True),
            amount1=self._amount1(round_up=True),
        )

    def _amount0(self, round_up: bool) -> int:
        if self.pool.tick_current < self.tick_lower:
            return get_amount0_delta(
                get_sqrt_ratio_at_tick(self.tick_lower),
                get_sqrt_ratio_at_tick(self.tick_upper),
                self.liquidity,
                round_up,
            )
        if self.pool.tick_current < self.tick_upper:
            return get_amount0_delta(
                self.pool.sqrt_price_x96,
                get_sqrt_ratio_at_tick(self.tick_upper),
                self.liquidity,
                round_up,
            )
        return 0

    def _amount1(self, round_up: bool) -> int:
        if self.pool.tick_current < self.tick_lower:
            return 0
        if self.pool.tick_current < self.tick_upper:
            return get_amount1_delta(
                get_sqrt_ratio_at_tick(self.tick_lower),
                self.pool.sqrt_price_x96,
                self.liquidity,
                round_up,
            )
        return get_amount1_delta(
            get_sqrt_ratio_at_tick(self.tick_lower),
            get_sqrt_ratio_at_tick(self.tick_upper),
            self.liquidity,
            round_up,
        )

    def ratios_after_slippage(self, slippage_tolerance: Fraction) -> SlippageRatios:
        """
        Shift the pool price down and up by the slippage tolerance, clamped to the valid square root
        price range.
        """

        price = self.pool.token0_price.value
        price_lower = price * (1 - slippage_tolerance)
        price_upper = price * (1 + slippage_tolerance)

        sqrt_ratio_x96_lower = encode_sqrt_ratio_x96(price_lower.numerator, price_lower.denominator)
        if sqrt_ratio_x96_lower <= MIN_SQRT_RATIO:
            sqrt_ratio_x96_lower = MIN_SQRT_RATIO + 1

        sqrt_ratio_x96_upper = encode_sqrt_ratio_x96(price_upper.numerator, price_upper.denominator)
        if sqrt_ratio_x96_upper >= MAX_SQRT_RATIO:
            sqrt_ratio_x96_upper = MAX_SQRT_RATIO - 1

        return SlippageRatios(sqrt_ratio_x96_lower, sqrt_ratio_x96_upper)

    def _pools_after_slippage(self, slippage_tolerance: Fraction) -> tuple[Pool, Pool]:
        """
        Build price-only copies of the pool at the lower and upper slippage-adjusted prices.
        """

        sqrt_ratio_x96_lower, sqrt_ratio_x96_upper = self.ratios_after_slippage(slippage_tolerance)
        return tuple(
            Pool(
                self.pool.token0,
                self.pool.token1,
                self.pool.fee,
                sqrt_ratio_x96,
                0,
                get_tick_at_sqrt_ratio(sqrt_ratio_x96),
                tick_spacing=self.pool.tick_spacing,
            )
            for sqrt_ratio_x96 in (sqrt_ratio_x96_lower, sqrt_ratio_x96_upper)
        )

    def mint_amounts_with_slippage(self, slippage_tolerance: Fraction) -> MintAmounts:
        """
        The minimum token amounts deposited when minting this position's liquidity, if the price
        moves by up to the slippage tolerance before the mint executes.
        """

        pool_lower, pool_upper = self._pools_after_slippage(slippage_tolerance)

        # The liquidity actually minted is computed by the periphery contract from the amounts,
        # using the imprecise formula
        position_that_will_be_created = Position.from_amounts(
            pool=self.pool,
            tick_lower=self.tick_lower,
            tick_upper=self.tick_upper,
            amount0=self.mint_amounts.amount0,
            amount1=self.mint_amounts.amount1,
            use_full_precision=False,
        )

        # The least token0 is needed at the upper price and the least token1 at the lower price
        amount0 = Position(
            pool=pool_upper,
            liquidity=position_that_will_be_created.liquidity,
            tick_lower=self.tick_lower,
            tick_upper=self.tick_upper,
        ).mint_amounts.amount0
        amount1 = Position(
            pool=pool_lower,
            liquidity=position_that_will_be_created.liquidity,
            tick_lower=self.tick_lower,
            tick_upper=self.tick_upper,
        ).mint_amounts.amount1

        return MintAmounts(amount0=amount0, amount1=amount1)

    def burn_amounts_with_slippage(self, slippage_tolerance: Fraction) -> MintAmounts:
        """
        The minimum token amounts received for burning this position's liquidity, if the price moves
        by up to the slippage tolerance before the burn executes.
        """

        pool_lower, pool_upper = self._pools_after_slippage(slippage_tolerance)

        amount0 = Position(
            pool=pool_upper,
            liquidity=self.liquidity,
            tick_lower=self.tick_lower,
            tick_upper=self.tick_upper,
        ).amount0
        amount1 = Position(
            pool=pool_lower,
            liquidity=self.liquidity,
            tick_lower=self.tick_lower,
            tick_upper=self.tick_upper,
        ).amount1

        return MintAmounts(amount0=amount0.amount, amount1=amount1.amount)

    @classmethod
    def from_amounts(
        cls,
        pool: Pool,
        tick_lower: TickIndex,
        tick_upper: TickIndex,
        amount0: int,
        amount1: int,
        use_full_precision: bool,
    ) -> Self:
        """
        Build the position with the maximum liquidity obtainable from the token budgets.
        """

        return cls(
            pool=pool,
            liquidity=max_liquidity_for_amounts(
                pool.sqrt_price_x96,
                get_sqrt_ratio_at_tick(tick_lower),
                get_sqrt_ratio_at_tick(tick_upper),
                amount0,
                amount1,
                use_full_precision,
            ),
            tick_lower=tick_lower,
            tick_upper=tick_upper,
        )

    @classmethod
    def from_amount0(
        cls,
        pool: Pool,
        tick_lower: TickIndex,
        tick_upper: TickIndex,
        amount0: int,
        use_full_precision: bool,
    ) -> Self:
        """
        Build the position with the maximum liquidity obtainable from an amount of token0, assuming
        an unlimited amount of token1.
        """

        return cls.from_amounts(
            pool, tick_lower, tick_upper, amount0, MAX_UINT256, use_full_precision
        )

    @classmethod
    def from_amount1(
        cls,
        pool: Pool,
        tick_lower: TickIndex,
        tick_upper: TickIndex,
        amount1: int,
    ) -> Self:
        """
        Build the position with the maximum liquidity obtainable from an amount of token1, assuming
        an unlimited amount of token0.
        """

        # the precision flag only affects the token0 calculation
        return cls.from_amounts(
            pool, tick_lower, tick_upper, MAX_UINT256, amount1, use_full_precision=True
        )
