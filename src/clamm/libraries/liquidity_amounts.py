from clamm.constants import Q96

# Maximum liquidity that can be minted for given token budgets over a price range.
# Reference: https://github.com/Uniswap/v3-periphery/blob/main/contracts/libraries/LiquidityAmounts.sol


def max_liquidity_for_amount0_imprecise(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int,
) -> int:
    """
    Calculate the liquidity for an amount of token0 the way the periphery contract does, rounding
    the product of the two prices down before scaling the amount. The result can be slightly lower
    than the exact value.
    """

    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    intermediate = (sqrt_ratio_a_x96 * sqrt_ratio_b_x96) // Q96
    return (amount0 * intermediate) // (sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def max_liquidity_for_amount0_precise(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int,
) -> int:
    """
    Calculate the liquidity for an amount of token0 without intermediate rounding.
    """

    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    numerator = amount0 * sqrt_ratio_a_x96 * sqrt_ratio_b_x96
    denominator = Q96 * (sqrt_ratio_b_x96 - sqrt_ratio_a_x96)
    return numerator // denominator


def max_liquidity_for_amount1(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount1: int,
) -> int:
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    return (amount1 * Q96) // (sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def max_liquidity_for_amounts(
    sqrt_price_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int,
    amount1: int,
    use_full_precision: bool,
) -> int:
    """
    Calculate the maximum liquidity obtainable from the token budgets at the current price.

    Below the range only token0 is needed, above it only token1. Inside the range both tokens are
    needed and the smaller of the two liquidity values is the limit.
    """

    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    liquidity_for_amount0 = (
        max_liquidity_for_amount0_precise
        if use_full_precision
        else max_liquidity_for_amount0_imprecise
    )

    if sqrt_price_x96 <= sqrt_ratio_a_x96:
        return liquidity_for_amount0(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount0)

    if sqrt_price_x96 < sqrt_ratio_b_x96:
        return min(
            liquidity_for_amount0(sqrt_price_x96, sqrt_ratio_b_x96, amount0),
            max_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_price_x96, amount1),
        )

    return max_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount1)
