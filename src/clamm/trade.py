import dataclasses
import math
from bisect import bisect_right
from collections.abc import Callable, Iterable, Sequence
from fractions import Fraction
from functools import cached_property, cmp_to_key
from typing import Self

from networkx import MultiGraph

from clamm.config import settings
from clamm.exceptions import (
    ClammValueError,
    DuplicatePools,
    InsufficientLiquidity,
    InvalidRoute,
    RouteError,
)
from clamm.logging import logger
from clamm.pool import Pool
from clamm.price import Price
from clamm.route import Route
from clamm.token import Token, TokenAmount
from clamm.types import TradeType


@dataclasses.dataclass(slots=True, frozen=True)
class Swap:
    route: Route
    input_amount: TokenAmount
    output_amount: TokenAmount


@dataclasses.dataclass(slots=True, frozen=True)
class _SearchStep:
    """
    A pending evaluation of one candidate pool during the best trade search.
    """

    pool_index: int
    remaining: frozenset[int]  # indices of the pools still available, including this one
    path: tuple[Pool, ...]
    amount: TokenAmount
    max_hops: int


def trade_comparator(a: "Trade", b: "Trade") -> int:
    """
    Order trades by output amount (descending), then input amount (ascending), then the total
    length of the token paths (ascending). A negative result means `a` is the better trade.
    """

    if a.input_amount.token != b.input_amount.token:
        raise ClammValueError(message="INPUT_CURRENCY: trades have different input tokens")
    if a.output_amount.token != b.output_amount.token:
        raise ClammValueError(message="OUTPUT_CURRENCY: trades have different output tokens")

    if a.output_amount.amount != b.output_amount.amount:
        return -1 if a.output_amount.amount > b.output_amount.amount else 1
    if a.input_amount.amount != b.input_amount.amount:
        return -1 if a.input_amount.amount < b.input_amount.amount else 1
    return a.hops - b.hops


def sorted_insert[T](
    items: list[T],
    item: T,
    max_size: int,
    comparator: Callable[[T, T], int],
) -> T | None:
    """
    Insert an item into a list already sorted by the comparator, keeping at most `max_size` items.
    If the list is full, the worst item is removed and returned. An item that would sort last in a
    full list is returned without being inserted.
    """

    if max_size <= 0:
        raise ClammValueError(message="MAX_SIZE_ZERO: max_size must be positive")
    if len(items) > max_size:
        raise ClammValueError(message="ITEMS_SIZE: the list is already over capacity")

    is_full = len(items) == max_size
    if is_full and comparator(items[-1], item) <= 0:
        return item

    key = cmp_to_key(comparator)
    items.insert(bisect_right(items, key(item), key=key), item)
    return items.pop() if is_full else None


class Trade:
    """
    A trade through one or more routes sharing the same input and output tokens.
    """

    def __init__(self, swaps: Sequence[Swap], trade_type: TradeType) -> None:
        if len(swaps) == 0:
            raise InvalidRoute(message="A trade requires at least one swap")

        input_token = swaps[0].input_amount.token
        output_token = swaps[0].output_amount.token
        if not all(swap.route.token_in == input_token for swap in swaps):
            raise InvalidRoute(message="INPUT_CURRENCY_MATCH: routes have different input tokens")
        if not all(swap.route.token_out == output_token for swap in swaps):
            raise InvalidRoute(message="OUTPUT_CURRENCY_MATCH: routes have different output tokens")

        pool_addresses = [pool.address for swap in swaps for pool in swap.route.pools]
        if len(pool_addresses) != len(set(pool_addresses)):
            raise DuplicatePools()

        self.swaps: tuple[Swap, ...] = tuple(swaps)
        self.trade_type = trade_type

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.trade_type.name}, {self.input_amount} -> "
            f"{self.output_amount}, routes={[swap.route for swap in self.swaps]})"
        )

    @property
    def route(self) -> Route:
        """
        The route of a single-route trade.
        """

        if len(self.swaps) != 1:
            raise RouteError(message="MULTIPLE_ROUTES: the trade has more than one route")
        return self.swaps[0].route

    @property
    def hops(self) -> int:
        return sum(len(swap.route.token_path) for swap in self.swaps)

    @cached_property
    def input_amount(self) -> TokenAmount:
        total = TokenAmount(self.swaps[0].input_amount.token, 0)
        for swap in self.swaps:
            total += swap.input_amount
        return total

    @cached_property
    def output_amount(self) -> TokenAmount:
        total = TokenAmount(self.swaps[0].output_amount.token, 0)
        for swap in self.swaps:
            total += swap.output_amount
        return total

    @cached_property
    def execution_price(self) -> Price:
        """
        The price of the trade, expressed as the output amount over the input amount.
        """

        return Price.from_amounts(
            self.input_amount.token,
            self.output_amount.token,
            denominator=self.input_amount.amount,
            numerator=self.output_amount.amount,
        )

    @cached_property
    def price_impact(self) -> Fraction:
        """
        The relative difference between the output at the routes' mid prices and the actual output.
        """

        spot_output_amount = sum(
            (swap.route.mid_price.value * swap.input_amount.amount for swap in self.swaps),
            start=Fraction(0),
        )
        return (spot_output_amount - self.output_amount.amount) / spot_output_amount

    def minimum_amount_out(
        self,
        slippage_tolerance: Fraction,
        amount_out: TokenAmount | None = None,
    ) -> TokenAmount:
        """
        Get the minimum amount that must be received from this trade for the given slippage
        tolerance.
        """

        if slippage_tolerance < 0:
            raise ClammValueError(message="SLIPPAGE_TOLERANCE: must not be negative")
        if amount_out is None:
            amount_out = self.output_amount

        if self.trade_type == TradeType.EXACT_OUTPUT:
            return amount_out
        return TokenAmount(
            amount_out.token,
            math.floor(amount_out.amount / (1 + Fraction(slippage_tolerance))),
        )

    def maximum_amount_in(
        self,
        slippage_tolerance: Fraction,
        amount_in: TokenAmount | None = None,
    ) -> TokenAmount:
        """
        Get the maximum amount that can be spent by this trade for the given slippage tolerance.
        """

        if slippage_tolerance < 0:
            raise ClammValueError(message="SLIPPAGE_TOLERANCE: must not be negative")
        if amount_in is None:
            amount_in = self.input_amount

        if self.trade_type == TradeType.EXACT_INPUT:
            return amount_in
        return TokenAmount(
            amount_in.token,
            math.floor(amount_in.amount * (1 + Fraction(slippage_tolerance))),
        )

    def worst_execution_price(self, slippage_tolerance: Fraction) -> Price:
        return Price.from_amounts(
            self.input_amount.token,
            self.output_amount.token,
            denominator=self.maximum_amount_in(slippage_tolerance).amount,
            numerator=self.minimum_amount_out(slippage_tolerance).amount,
        )

    @classmethod
    def exact_in(cls, route: Route, amount_in: TokenAmount) -> Self:
        return cls.from_route(route, amount_in, TradeType.EXACT_INPUT)

    @classmethod
    def exact_out(cls, route: Route, amount_out: TokenAmount) -> Self:
        return cls.from_route(route, amount_out, TradeType.EXACT_OUTPUT)

    @classmethod
    def from_route(cls, route: Route, amount: TokenAmount, trade_type: TradeType) -> Self:
        """
        Build a trade by simulating the swaps through each pool of the route.
        """

        return cls([_simulate_route(route, amount, trade_type)], trade_type)

    @classmethod
    def from_routes(
        cls,
        routes: Iterable[tuple[Route, TokenAmount]],
        trade_type: TradeType,
    ) -> Self:
        """
        Build a trade by simulating the swaps through several routes, each with its own amount.
        """

        return cls(
            [_simulate_route(route, amount, trade_type) for route, amount in routes],
            trade_type,
        )

    @classmethod
    def create_unchecked_trade(
        cls,
        route: Route,
        input_amount: TokenAmount,
        output_amount: TokenAmount,
        trade_type: TradeType,
    ) -> Self:
        """
        Build a trade from amounts simulated elsewhere, without consulting the pools.
        """

        return cls([Swap(route, input_amount, output_amount)], trade_type)

    @classmethod
    def create_unchecked_trade_with_multiple_routes(
        cls,
        swaps: Sequence[Swap],
        trade_type: TradeType,
    ) -> Self:
        return cls(swaps, trade_type)

    @classmethod
    def best_trade_exact_in(
        cls,
        pools: Sequence[Pool],
        amount_in: TokenAmount,
        token_out: Token,
        max_num_results: int | None = None,
        max_hops: int | None = None,
    ) -> list[Self]:
        """
        Find the best trades for an exact input amount, making at most `max_hops` hops through the
        given pools. Only linear routes are considered, a better result may exist by splitting the
        amount among several routes.

        Returns up to `max_num_results` trades, sorted best first.
        """

        return cls._best_trades(
            pools,
            amount_in,
            token_out,
            TradeType.EXACT_INPUT,
            max_num_results,
            max_hops,
        )

    @classmethod
    def best_trade_exact_out(
        cls,
        pools: Sequence[Pool],
        token_in: Token,
        amount_out: TokenAmount,
        max_num_results: int | None = None,
        max_hops: int | None = None,
    ) -> list[Self]:
        """
        Find the best trades for an exact output amount, making at most `max_hops` hops through the
        given pools. Only linear routes are considered, a better result may exist by splitting the
        amount among several routes.

        Returns up to `max_num_results` trades, sorted best first.
        """

        return cls._best_trades(
            pools,
            amount_out,
            token_in,
            TradeType.EXACT_OUTPUT,
            max_num_results,
            max_hops,
        )

    @classmethod
    def _best_trades(
        cls,
        pools: Sequence[Pool],
        amount_specified: TokenAmount,
        target_token: Token,
        trade_type: TradeType,
        max_num_results: int | None,
        max_hops: int | None,
    ) -> list[Self]:
        """
        Perform an iterative depth-first search from the token of the specified amount towards the
        target token. Exact input searches walk forward from the input token, exact output searches
        walk backward from the output token.

        Child steps are pushed in reverse order so they are popped in pool order, and each branch
        is exhausted before its next sibling is evaluated.
        """

        if max_num_results is None:
            max_num_results = settings.route_search.max_num_results
        if max_hops is None:
            max_hops = settings.route_search.max_hops

        if len(pools) == 0:
            raise ClammValueError(message="POOLS: at least one pool is required")
        if max_num_results < 1:
            raise ClammValueError(message="max_num_results must be at least 1")
        if max_hops < 1:
            raise ClammValueError(message="MAX_HOPS: max_hops must be at least 1")

        exact_input = trade_type == TradeType.EXACT_INPUT

        # Index the pools by token, with each pool's position in the input as the edge key
        graph = MultiGraph()
        graph.add_edges_from(
            (pool.token0, pool.token1, index, {"pool": pool}) for index, pool in enumerate(pools)
        )

        def candidate_steps(
            token: Token,
            remaining: frozenset[int],
            path: tuple[Pool, ...],
            amount: TokenAmount,
            hops: int,
        ) -> list[_SearchStep]:
            if token not in graph:
                logger.debug(f"No pools hold {token}")
                return []
            return [
                _SearchStep(
                    pool_index=index,
                    remaining=remaining,
                    path=path,
                    amount=amount,
                    max_hops=hops,
                )
                for index in sorted(
                    {key for _, _, key in graph.edges(token, keys=True) if key in remaining}
                )
            ]

        best_trades: list[Self] = []
        stack = candidate_steps(
            amount_specified.token,
            frozenset(range(len(pools))),
            (),
            amount_specified,
            max_hops,
        )
        stack.reverse()

        while stack:
            step = stack.pop()
            pool = pools[step.pool_index]

            try:
                if exact_input:
                    next_amount, _ = pool.get_output_amount(step.amount)
                else:
                    next_amount, _ = pool.get_input_amount(step.amount)
            except InsufficientLiquidity as exc:
                logger.debug(f"Pruned search branch at {pool!r}: {exc}")
                continue

            path = (*step.path, pool) if exact_input else (pool, *step.path)

            if next_amount.token == target_token:
                if exact_input:
                    trade = cls.create_unchecked_trade(
                        Route(path, amount_specified.token, target_token),
                        input_amount=amount_specified,
                        output_amount=next_amount,
                        trade_type=trade_type,
                    )
                else:
                    trade = cls.create_unchecked_trade(
                        Route(path, target_token, amount_specified.token),
                        input_amount=next_amount,
                        output_amount=amount_specified,
                        trade_type=trade_type,
                    )
                evicted = sorted_insert(best_trades, trade, max_num_results, trade_comparator)
                logger.debug(f"Inserted {trade}, evicted {evicted}")
            elif step.max_hops > 1 and len(step.remaining) > 1:
                stack.extend(
                    reversed(
                        candidate_steps(
                            next_amount.token,
                            step.remaining - {step.pool_index},
                            path,
                            next_amount,
                            step.max_hops - 1,
                        )
                    )
                )

        return best_trades


def _simulate_route(route: Route, amount: TokenAmount, trade_type: TradeType) -> Swap:
    """
    Quote the amounts through each pool of the route. Exact output routes are quoted backwards from
    the output token.
    """

    if trade_type == TradeType.EXACT_INPUT:
        if amount.token != route.token_in:
            raise InvalidRoute(message=f"INPUT: {amount.token} is not the route input token")
        output_amount = amount
        for pool in route.pools:
            output_amount, _ = pool.get_output_amount(output_amount)
        return Swap(route, amount, output_amount)

    if amount.token != route.token_out:
        raise InvalidRoute(message=f"OUTPUT: {amount.token} is not the route output token")
    input_amount = amount
    for pool in reversed(route.pools):
        input_amount, _ = pool.get_input_amount(input_amount)
    return Swap(route, input_amount, amount)
