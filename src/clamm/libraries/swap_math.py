from clamm.constants import FEE_DENOMINATOR
from clamm.libraries import full_math, sqrt_price_math

type SqrtPriceX96 = int
type AmountIn = int
type AmountOut = int
type FeeTaken = int


def compute_swap_step(
    sqrt_ratio_x96_current: int,
    sqrt_ratio_x96_target: int,
    liquidity: int,
    amount_remaining: int,
    fee_pips: int,
) -> tuple[SqrtPriceX96, AmountIn, AmountOut, FeeTaken]:
    """
    Compute the result of swapping some amount in or out, given the parameters of the swap.

    A positive `amount_remaining` is an exact input amount, a negative value is an exact output
    amount. The direction is implied by the relative position of the target price. The fee, plus
    the amount in, will never exceed the amount remaining for an exact input swap.

    ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/SwapMath.sol
    """

    zero_for_one = sqrt_ratio_x96_current >= sqrt_ratio_x96_target
    exact_in = amount_remaining >= 0

    amount_in = 0
    amount_out = 0

    if exact_in:
        amount_remaining_less_fee = full_math.muldiv(
            amount_remaining, FEE_DENOMINATOR - fee_pips, FEE_DENOMINATOR
        )
        if zero_for_one:
            amount_in = sqrt_price_math.get_amount0_delta(
                sqrt_ratio_x96_target, sqrt_ratio_x96_current, liquidity, round_up=True
            )
        else:
            amount_in = sqrt_price_math.get_amount1_delta(
                sqrt_ratio_x96_current, sqrt_ratio_x96_target, liquidity, round_up=True
            )

        if amount_remaining_less_fee >= amount_in:
            sqrt_ratio_x96_next = sqrt_ratio_x96_target
        else:
            sqrt_ratio_x96_next = sqrt_price_math.get_next_sqrt_price_from_input(
                sqrt_ratio_x96_current, liquidity, amount_remaining_less_fee, zero_for_one
            )
    else:
        if zero_for_one:
            amount_out = sqrt_price_math.get_amount1_delta(
                sqrt_ratio_x96_target, sqrt_ratio_x96_current, liquidity, round_up=False
            )
        else:
            amount_out = sqrt_price_math.get_amount0_delta(
                sqrt_ratio_x96_current, sqrt_ratio_x96_target, liquidity, round_up=False
            )

        if -amount_remaining >= amount_out:
            sqrt_ratio_x96_next = sqrt_ratio_x96_target
        else:
            sqrt_ratio_x96_next = sqrt_price_math.get_next_sqrt_price_from_output(
                sqrt_ratio_x96_current, liquidity, -amount_remaining, zero_for_one
            )

    reached_target = sqrt_ratio_x96_target == sqrt_ratio_x96_next

    # Recalculate both amounts against the actual next price, keeping the provisional amount only
    # when the step landed exactly on the target
    if zero_for_one:
        if not (reached_target and exact_in):
            amount_in = sqrt_price_math.get_amount0_delta(
                sqrt_ratio_x96_next, sqrt_ratio_x96_current, liquidity, round_up=True
            )
        if not (reached_target and not exact_in):
            amount_out = sqrt_price_math.get_amount1_delta(
                sqrt_ratio_x96_next, sqrt_ratio_x96_current, liquidity, round_up=False
            )
    else:
        if not (reached_target and exact_in):
            amount_in = sqrt_price_math.get_amount1_delta(
                sqrt_ratio_x96_current, sqrt_ratio_x96_next, liquidity, round_up=True
            )
        if not (reached_target and not exact_in):
            amount_out = sqrt_price_math.get_amount0_delta(
                sqrt_ratio_x96_current, sqrt_ratio_x96_next, liquidity, round_up=False
            )

    # cap the output amount to not exceed the remaining output amount
    if not exact_in and amount_out > -amount_remaining:
        amount_out = -amount_remaining

    if exact_in and not reached_target:
        # the target was not reached, so the remainder of the maximum input is taken as fee
        fee_amount = amount_remaining - amount_in
    else:
        fee_amount = full_math.muldiv_rounding_up(amount_in, fee_pips, FEE_DENOMINATOR - fee_pips)

    return sqrt_ratio_x96_next, amount_in, amount_out, fee_amount
