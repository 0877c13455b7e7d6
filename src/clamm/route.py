from collections.abc import Sequence
from functools import cached_property

from clamm.exceptions import InvalidRoute
from clamm.pool import Pool
from clamm.price import Price
from clamm.token import Token


class Route:
    """
    An ordered sequence of pools forming a connected path from an input token to an output token.
    """

    def __init__(self, pools: Sequence[Pool], token_in: Token, token_out: Token) -> None:
        if len(pools) == 0:
            raise InvalidRoute(message="POOLS: a route requires at least one pool")

        chain_id = pools[0].chain_id
        if any(pool.chain_id != chain_id for pool in pools):
            raise InvalidRoute(message="CHAIN_IDS: all pools must be on the same chain")
        if not pools[0].involves_token(token_in):
            raise InvalidRoute(message=f"INPUT: {token_in} is not held by the first pool")
        if not pools[-1].involves_token(token_out):
            raise InvalidRoute(message=f"OUTPUT: {token_out} is not held by the last pool")

        token_path = [token_in]
        for pool in pools:
            current_token = token_path[-1]
            if not pool.involves_token(current_token):
                raise InvalidRoute(message=f"PATH: {pool!r} does not hold {current_token}")
            token_path.append(pool.token1 if current_token == pool.token0 else pool.token0)

        if token_path[-1] != token_out:
            raise InvalidRoute(message=f"PATH: the route ends at {token_path[-1]}, not {token_out}")

        self.pools: tuple[Pool, ...] = tuple(pools)
        self.token_path: tuple[Token, ...] = tuple(token_path)
        self.token_in = token_in
        self.token_out = token_out

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({' -> '.join(str(token) for token in self.token_path)})"

    @property
    def chain_id(self) -> int:
        return self.pools[0].chain_id

    @cached_property
    def mid_price(self) -> Price:
        """
        The product of the pool mid prices along the path, as the price of the input token in terms
        of the output token.
        """

        price = self.pools[0].price_of(self.token_in)
        for pool, token in zip(self.pools[1:], self.token_path[1:-1], strict=True):
            price *= pool.price_of(token)
        return price
