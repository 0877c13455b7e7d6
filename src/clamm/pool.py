from collections.abc import Mapping, Sequence
from functools import cached_property
from typing import Any

from eth_typing import ChecksumAddress

from clamm.config import settings
from clamm.constants import FEE_DENOMINATOR, MAX_UINT256, Q192
from clamm.exceptions import (
    InsufficientInputAmount,
    InsufficientReserves,
    InvalidFee,
    InvalidPoolState,
    UnknownToken,
)
from clamm.functions import compute_pool_address
from clamm.libraries.tick_math import MAX_TICK, MIN_TICK, get_sqrt_ratio_at_tick
from clamm.logging import logger
from clamm.price import Price
from clamm.swap import simulate_swap
from clamm.tick_data_provider import NoTickDataProvider, TickDataProvider, TickListDataProvider
from clamm.token import Token, TokenAmount
from clamm.types import TICK_SPACINGS, Liquidity, Pip, SqrtPriceX96, SwapResult, Tick, TickIndex


class Pool:
    """
    An immutable snapshot of a concentrated liquidity pool.

    Quoting methods never modify the pool, they return the quoted amount together with a new `Pool`
    holding the post-swap price, liquidity, and tick. The tick data provider is shared between the
    original and the new pool.
    """

    def __init__(
        self,
        token_a: Token,
        token_b: Token,
        fee: Pip,
        sqrt_price_x96: SqrtPriceX96,
        liquidity: Liquidity,
        tick_current: TickIndex,
        ticks: TickDataProvider | Sequence[Tick | Mapping[str, Any]] | None = None,
        tick_spacing: int | None = None,
        *,
        factory_address: str | None = None,
        pool_init_hash: str | None = None,
    ) -> None:
        if not isinstance(fee, int) or not (0 <= fee < FEE_DENOMINATOR):
            raise InvalidFee(fee)

        if tick_spacing is None:
            if fee not in TICK_SPACINGS:
                raise InvalidPoolState(
                    message=f"No default tick spacing for fee {fee}, provide one explicitly."
                )
            tick_spacing = TICK_SPACINGS[fee]

        self._token0, self._token1 = (
            (token_a, token_b) if token_a.sorts_before(token_b) else (token_b, token_a)
        )
        self._fee = fee
        self._tick_spacing = tick_spacing

        if not (0 <= liquidity <= MAX_UINT256):
            raise InvalidPoolState(message=f"Invalid liquidity {liquidity}.")
        if not (MIN_TICK <= tick_current < MAX_TICK):
            raise InvalidPoolState(message=f"Invalid current tick {tick_current}.")
        if not (
            get_sqrt_ratio_at_tick(tick_current)
            <= sqrt_price_x96
            <= get_sqrt_ratio_at_tick(tick_current + 1)
        ):
            raise InvalidPoolState(
                message=f"Price {sqrt_price_x96} is outside of the range for tick {tick_current}."
            )

        self._sqrt_price_x96 = sqrt_price_x96
        self._liquidity = liquidity
        self._tick_current = tick_current

        match ticks:
            case None:
                self._tick_data_provider: TickDataProvider = NoTickDataProvider()
            case Sequence():
                self._tick_data_provider = TickListDataProvider(ticks, tick_spacing)
            case TickListDataProvider() if ticks.tick_spacing != tick_spacing:
                raise InvalidPoolState(
                    message=f"Tick data spacing {ticks.tick_spacing} does not match {tick_spacing}."
                )
            case _:
                self._tick_data_provider = ticks

        self._factory_address = (
            factory_address
            if factory_address is not None
            else settings.deployment.factory_address
        )
        self._pool_init_hash = (
            pool_init_hash if pool_init_hash is not None else settings.deployment.pool_init_hash
        )

    def __eq__(self, other: object) -> bool:
        match other:
            case Pool():
                return (
                    self._state_key() == other._state_key()
                    and self._tick_data_provider is other._tick_data_provider
                )
            case _:
                return NotImplemented

    def __hash__(self) -> int:
        return hash(self._state_key())

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self._token0}/{self._token1}, fee={self._fee}, "
            f"sqrt_price_x96={self._sqrt_price_x96}, liquidity={self._liquidity}, "
            f"tick={self._tick_current})"
        )

    def _state_key(self) -> tuple[Any, ...]:
        return (
            self._token0,
            self._token1,
            self._fee,
            self._tick_spacing,
            self._sqrt_price_x96,
            self._liquidity,
            self._tick_current,
        )

    @property
    def token0(self) -> Token:
        return self._token0

    @property
    def token1(self) -> Token:
        return self._token1

    @property
    def fee(self) -> Pip:
        return self._fee

    @property
    def sqrt_price_x96(self) -> SqrtPriceX96:
        return self._sqrt_price_x96

    @property
    def liquidity(self) -> Liquidity:
        return self._liquidity

    @property
    def tick_current(self) -> TickIndex:
        return self._tick_current

    @property
    def tick_spacing(self) -> int:
        return self._tick_spacing

    @property
    def tick_data_provider(self) -> TickDataProvider:
        return self._tick_data_provider

    @property
    def chain_id(self) -> int:
        return self._token0.chain_id

    @cached_property
    def address(self) -> ChecksumAddress:
        return compute_pool_address(
            factory_address=self._factory_address,
            token_addresses=(self._token0.address, self._token1.address),
            fee=self._fee,
            init_hash=self._pool_init_hash,
        )

    @cached_property
    def token0_price(self) -> Price:
        """
        The current mid price of the pool in terms of token0, i.e. the ratio of token1 over token0.
        """

        return Price.from_amounts(
            self._token0,
            self._token1,
            denominator=Q192,
            numerator=self._sqrt_price_x96 * self._sqrt_price_x96,
        )

    @cached_property
    def token1_price(self) -> Price:
        """
        The current mid price of the pool in terms of token1, i.e. the ratio of token0 over token1.
        """

        return Price.from_amounts(
            self._token1,
            self._token0,
            denominator=self._sqrt_price_x96 * self._sqrt_price_x96,
            numerator=Q192,
        )

    def involves_token(self, token: Token) -> bool:
        return token in (self._token0, self._token1)

    def price_of(self, token: Token) -> Price:
        """
        Return the price of the given token in terms of the other token in the pool.
        """

        if not self.involves_token(token):
            raise UnknownToken(token)
        return self.token0_price if token == self._token0 else self.token1_price

    def get_output_amount(
        self,
        input_amount: TokenAmount,
        sqrt_price_limit_x96: SqrtPriceX96 | None = None,
    ) -> tuple[TokenAmount, "Pool"]:
        """
        Quote the output of an exact input swap. Returns the output amount and the pool state after
        the swap.
        """

        if not self.involves_token(input_amount.token):
            raise UnknownToken(input_amount.token)

        zero_for_one = input_amount.token == self._token0
        result = self._swap(zero_for_one, input_amount.amount, sqrt_price_limit_x96)

        amount_out = -result.amount_calculated
        if amount_out == 0:
            raise InsufficientInputAmount(amount_in=input_amount.amount, amount_out=0)

        output_token = self._token1 if zero_for_one else self._token0
        return TokenAmount(output_token, amount_out), self._with_swap_result(result)

    def get_input_amount(
        self,
        output_amount: TokenAmount,
        sqrt_price_limit_x96: SqrtPriceX96 | None = None,
    ) -> tuple[TokenAmount, "Pool"]:
        """
        Quote the input of an exact output swap. Returns the input amount and the pool state after
        the swap.
        """

        if not self.involves_token(output_amount.token):
            raise UnknownToken(output_amount.token)

        zero_for_one = output_amount.token == self._token1
        result = self._swap(zero_for_one, -output_amount.amount, sqrt_price_limit_x96)

        if result.amount_specified_remaining != 0:
            raise InsufficientReserves(
                amount_in=result.amount_calculated,
                amount_out=output_amount.amount + result.amount_specified_remaining,
            )

        input_token = self._token0 if zero_for_one else self._token1
        return TokenAmount(input_token, result.amount_calculated), self._with_swap_result(result)

    def _swap(
        self,
        zero_for_one: bool,
        amount_specified: int,
        sqrt_price_limit_x96: SqrtPriceX96 | None,
    ) -> SwapResult:
        logger.debug(
            f"Simulating swap on {self!r}: zero_for_one={zero_for_one}, amount={amount_specified}"
        )
        return simulate_swap(
            fee=self._fee,
            sqrt_price_x96=self._sqrt_price_x96,
            tick_current=self._tick_current,
            liquidity=self._liquidity,
            tick_spacing=self._tick_spacing,
            tick_data_provider=self._tick_data_provider,
            zero_for_one=zero_for_one,
            amount_specified=amount_specified,
            sqrt_price_limit_x96=sqrt_price_limit_x96,
        )

    def _with_swap_result(self, result: SwapResult) -> "Pool":
        return Pool(
            self._token0,
            self._token1,
            self._fee,
            result.sqrt_price_x96,
            result.liquidity,
            result.tick_current,
            self._tick_data_provider,
            self._tick_spacing,
            factory_address=self._factory_address,
            pool_init_hash=self._pool_init_hash,
        )
