from collections.abc import Iterable

import eth_abi.abi
from eth_typing import ChecksumAddress
from eth_utils import keccak
from hexbytes import HexBytes

from clamm.checksum_cache import get_checksum_address
from clamm.constants import Q192
from clamm.exceptions import ClammValueError
from clamm.libraries.functions import sqrt
from clamm.libraries.tick_math import (
    MAX_TICK,
    MIN_TICK,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)
from clamm.price import Price
from clamm.token import Token


def encode_sqrt_ratio_x96(amount1: int, amount0: int) -> int:
    """
    Encode the ratio amount1 / amount0 as a Q64.96 square root price.
    """

    return sqrt((amount1 << 192) // amount0)


def nearest_usable_tick(tick: int, tick_spacing: int) -> int:
    """
    Find the tick nearest to `tick` that is a multiple of the spacing and lies within the tick
    bounds. Exact halves round towards positive infinity.
    """

    if not isinstance(tick, int) or not isinstance(tick_spacing, int):
        raise ClammValueError(message="Tick and tick spacing must be integers")
    if tick_spacing <= 0:
        raise ClammValueError(message="Tick spacing must be positive")
    if not (MIN_TICK <= tick <= MAX_TICK):
        raise ClammValueError(message=f"Tick {tick} is out of bounds")

    rounded = ((2 * tick + tick_spacing) // (2 * tick_spacing)) * tick_spacing
    if rounded < MIN_TICK:
        return rounded + tick_spacing
    if rounded > MAX_TICK:
        return rounded - tick_spacing
    return rounded


def tick_to_price(base_token: Token, quote_token: Token, tick: int) -> Price:
    """
    Get the price of the base token in terms of the quote token at the given tick.
    """

    ratio_x192 = get_sqrt_ratio_at_tick(tick) ** 2
    if base_token.sorts_before(quote_token):
        return Price.from_amounts(base_token, quote_token, denominator=Q192, numerator=ratio_x192)
    return Price.from_amounts(base_token, quote_token, denominator=ratio_x192, numerator=Q192)


def price_to_closest_tick(price: Price) -> int:
    """
    Find the greatest tick whose price is less than or equal to the given price, measured in the
    direction of token1 per token0.
    """

    tokens_sorted = price.base.sorts_before(price.quote)
    sqrt_ratio_x96 = (
        encode_sqrt_ratio_x96(price.value.numerator, price.value.denominator)
        if tokens_sorted
        else encode_sqrt_ratio_x96(price.value.denominator, price.value.numerator)
    )

    tick = get_tick_at_sqrt_ratio(sqrt_ratio_x96)
    next_tick_price = tick_to_price(price.base, price.quote, tick + 1)
    if tokens_sorted:
        if price.value >= next_tick_price.value:
            tick += 1
    elif price.value <= next_tick_price.value:
        tick += 1
    return tick


def compute_pool_address(
    factory_address: str,
    token_addresses: Iterable[str],
    fee: int,
    init_hash: str,
) -> ChecksumAddress:
    """
    Generate the deterministic pool address from the token addresses and fee.

    Adapted from https://github.com/Uniswap/v3-periphery/blob/main/contracts/libraries/PoolAddress.sol
    """

    token_addresses = sorted([address.lower() for address in token_addresses])

    return get_checksum_address(
        keccak(
            HexBytes(0xFF)
            + HexBytes(factory_address)
            + keccak(
                eth_abi.abi.encode(
                    types=("address", "address", "uint24"),
                    args=(*token_addresses, fee),
                )
            )
            + HexBytes(init_hash)
        )[-20:]  # last 20 bytes of the keccak hash becomes the pool address
    )
