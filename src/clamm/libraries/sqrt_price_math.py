import functools

from clamm.config import settings
from clamm.constants import MAX_UINT160, Q96
from clamm.exceptions import EVMRevertError
from clamm.libraries.full_math import muldiv, muldiv_rounding_up
from clamm.libraries.functions import (
    add_in_256,
    div_rounding_up,
    multiply_in_256,
    to_uint160,
)

"""
Token amount deltas between two prices, and the price reached after adding or removing an amount.

ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/SqrtPriceMath.sol
"""

Q96_RESOLUTION = 96


@functools.lru_cache(maxsize=settings.math_cache_size)
def get_amount0_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool,
) -> int:
    """
    Calculate liquidity / sqrt(lower) - liquidity / sqrt(upper), the amount of token0 held by a
    liquidity range between the two prices.
    """

    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if not (sqrt_ratio_a_x96 > 0):
        raise EVMRevertError(error="required: sqrt_ratio_a_x96 > 0")

    numerator1 = liquidity << Q96_RESOLUTION
    numerator2 = sqrt_ratio_b_x96 - sqrt_ratio_a_x96

    if round_up:
        return div_rounding_up(
            muldiv_rounding_up(numerator1, numerator2, sqrt_ratio_b_x96),
            sqrt_ratio_a_x96,
        )
    return muldiv(numerator1, numerator2, sqrt_ratio_b_x96) // sqrt_ratio_a_x96


@functools.lru_cache(maxsize=settings.math_cache_size)
def get_amount1_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool,
) -> int:
    """
    Calculate liquidity * (sqrt(upper) - sqrt(lower)), the amount of token1 held by a liquidity
    range between the two prices.
    """

    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if round_up:
        return muldiv_rounding_up(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)
    return muldiv(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)


def get_next_sqrt_price_from_amount0_rounding_up(
    sqrt_price_x96: int,
    liquidity: int,
    amount: int,
    add: bool,
) -> int:
    if amount == 0:
        return sqrt_price_x96

    numerator1 = liquidity << Q96_RESOLUTION

    # The product is computed with 256-bit wraparound. A wrapped product no longer divides back to
    # the price, which selects the overflow-safe formula below.
    product = multiply_in_256(amount, sqrt_price_x96)
    product_overflowed = product // amount != sqrt_price_x96

    if add:
        if not product_overflowed:
            denominator = add_in_256(numerator1, product)
            if denominator >= numerator1:
                return to_uint160(muldiv_rounding_up(numerator1, sqrt_price_x96, denominator))

        return to_uint160(div_rounding_up(numerator1, numerator1 // sqrt_price_x96 + amount))

    if product_overflowed or not (numerator1 > product):
        raise EVMRevertError(error="required: numerator1 > product")

    return to_uint160(muldiv_rounding_up(numerator1, sqrt_price_x96, numerator1 - product))


def get_next_sqrt_price_from_amount1_rounding_down(
    sqrt_price_x96: int,
    liquidity: int,
    amount: int,
    add: bool,
) -> int:
    if add:
        quotient = (
            (amount << Q96_RESOLUTION) // liquidity
            if amount <= MAX_UINT160
            else muldiv(amount, Q96, liquidity)
        )
        return to_uint160(sqrt_price_x96 + quotient)

    quotient = muldiv_rounding_up(amount, Q96, liquidity)
    if not (sqrt_price_x96 > quotient):
        raise EVMRevertError(error="required: sqrt_price_x96 > quotient")

    # always fits 160 bits
    return sqrt_price_x96 - quotient


@functools.lru_cache(maxsize=settings.math_cache_size)
def get_next_sqrt_price_from_input(
    sqrt_price_x96: int,
    liquidity: int,
    amount_in: int,
    zero_for_one: bool,
) -> int:
    if not (sqrt_price_x96 > 0):
        raise EVMRevertError(error="required: sqrt_price_x96 > 0")
    if not (liquidity > 0):
        raise EVMRevertError(error="required: liquidity > 0")

    # round to make sure that we don't pass the target price
    if zero_for_one:
        return get_next_sqrt_price_from_amount0_rounding_up(
            sqrt_price_x96, liquidity, amount_in, add=True
        )
    return get_next_sqrt_price_from_amount1_rounding_down(
        sqrt_price_x96, liquidity, amount_in, add=True
    )


@functools.lru_cache(maxsize=settings.math_cache_size)
def get_next_sqrt_price_from_output(
    sqrt_price_x96: int,
    liquidity: int,
    amount_out: int,
    zero_for_one: bool,
) -> int:
    if not (sqrt_price_x96 > 0):
        raise EVMRevertError(error="required: sqrt_price_x96 > 0")
    if not (liquidity > 0):
        raise EVMRevertError(error="required: liquidity > 0")

    # round to make sure that we pass the target price
    if zero_for_one:
        return get_next_sqrt_price_from_amount1_rounding_down(
            sqrt_price_x96, liquidity, amount_out, add=False
        )
    return get_next_sqrt_price_from_amount0_rounding_up(
        sqrt_price_x96, liquidity, amount_out, add=False
    )
