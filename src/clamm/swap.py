import dataclasses

from clamm.exceptions import InvalidSqrtPriceLimit
from clamm.libraries.liquidity_math import add_delta
from clamm.libraries.swap_math import compute_swap_step
from clamm.libraries.tick_math import (
    MAX_SQRT_RATIO,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MIN_TICK,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)
from clamm.logging import logger
from clamm.tick_data_provider import TickDataProvider
from clamm.types import Liquidity, Pip, SqrtPriceX96, SwapResult, TickIndex


@dataclasses.dataclass(slots=True)
class SwapState:
    amount_specified_remaining: int
    amount_calculated: int
    sqrt_price_x96: int
    tick: int
    liquidity: int


@dataclasses.dataclass(slots=True, eq=False)
class StepComputations:
    sqrt_price_start_x96: int = 0
    sqrt_price_next_x96: int = 0
    tick_next: int = 0
    initialized: bool = False
    amount_in: int = 0
    amount_out: int = 0
    fee_amount: int = 0


def simulate_swap(
    *,
    fee: Pip,
    sqrt_price_x96: SqrtPriceX96,
    tick_current: TickIndex,
    liquidity: Liquidity,
    tick_spacing: int,
    tick_data_provider: TickDataProvider,
    zero_for_one: bool,
    amount_specified: int,
    sqrt_price_limit_x96: SqrtPriceX96 | None = None,
) -> SwapResult:
    """
    Simulate a swap across initialized ticks, as the pool contract's `swap` function would execute
    it. This function is adapted from the UniswapV3Pool.sol contract at
    https://github.com/Uniswap/v3-core/blob/main/contracts/UniswapV3Pool.sol

    A positive `amount_specified` is an exact input, a negative value is an exact output. The
    returned `amount_calculated` follows the same sign convention as the contract: negative for the
    output of an exact input swap, positive for the input of an exact output swap.

    Errors raised by the tick data provider are not handled, a failed lookup aborts the simulation.
    """

    if sqrt_price_limit_x96 is None:
        sqrt_price_limit_x96 = MIN_SQRT_RATIO + 1 if zero_for_one else MAX_SQRT_RATIO - 1

    if zero_for_one and not (MIN_SQRT_RATIO < sqrt_price_limit_x96 < sqrt_price_x96):
        raise InvalidSqrtPriceLimit(sqrt_price_limit_x96)
    if not zero_for_one and not (sqrt_price_x96 < sqrt_price_limit_x96 < MAX_SQRT_RATIO):
        raise InvalidSqrtPriceLimit(sqrt_price_limit_x96)

    exact_input = amount_specified >= 0

    state = SwapState(
        amount_specified_remaining=amount_specified,
        amount_calculated=0,
        sqrt_price_x96=sqrt_price_x96,
        tick=tick_current,
        liquidity=liquidity,
    )
    step = StepComputations()

    while state.amount_specified_remaining != 0 and state.sqrt_price_x96 != sqrt_price_limit_x96:
        step.sqrt_price_start_x96 = state.sqrt_price_x96

        step.tick_next, step.initialized = (
            tick_data_provider.next_initialized_tick_within_one_word(
                state.tick, zero_for_one, tick_spacing
            )
        )

        # Ensure that we do not overshoot the min/max tick, as the tick search is not aware of
        # these bounds
        step.tick_next = (
            max(MIN_TICK, step.tick_next)  # descending ticks
            if zero_for_one
            else min(MAX_TICK, step.tick_next)  # ascending ticks
        )
        step.sqrt_price_next_x96 = get_sqrt_ratio_at_tick(step.tick_next)

        # Swap to the next tick or the price limit, whichever is nearer
        if (zero_for_one and step.sqrt_price_next_x96 < sqrt_price_limit_x96) or (
            not zero_for_one and step.sqrt_price_next_x96 > sqrt_price_limit_x96
        ):
            sqrt_price_target_x96 = sqrt_price_limit_x96
        else:
            sqrt_price_target_x96 = step.sqrt_price_next_x96

        state.sqrt_price_x96, step.amount_in, step.amount_out, step.fee_amount = compute_swap_step(
            sqrt_ratio_x96_current=state.sqrt_price_x96,
            sqrt_ratio_x96_target=sqrt_price_target_x96,
            liquidity=state.liquidity,
            amount_remaining=state.amount_specified_remaining,
            fee_pips=fee,
        )

        if exact_input:
            state.amount_specified_remaining -= step.amount_in + step.fee_amount
            state.amount_calculated -= step.amount_out
        else:
            state.amount_specified_remaining += step.amount_out
            state.amount_calculated += step.amount_in + step.fee_amount

        logger.debug(
            f"Swap step to tick {step.tick_next}: in={step.amount_in}, out={step.amount_out}, "
            f"fee={step.fee_amount}, remaining={state.amount_specified_remaining}"
        )

        if state.sqrt_price_x96 == step.sqrt_price_next_x96:
            # If the next tick is initialized, adjust the in-range liquidity
            if step.initialized:
                liquidity_net = tick_data_provider.get_tick(step.tick_next).liquidity_net
                state.liquidity = add_delta(
                    state.liquidity,
                    -liquidity_net if zero_for_one else liquidity_net,
                )
                logger.debug(f"Crossed tick {step.tick_next}, liquidity now {state.liquidity}")
            state.tick = step.tick_next - 1 if zero_for_one else step.tick_next
        elif state.sqrt_price_x96 != step.sqrt_price_start_x96:
            # Recompute unless we're on a lower tick boundary (i.e. already transitioned ticks),
            # and haven't moved
            state.tick = get_tick_at_sqrt_ratio(state.sqrt_price_x96)

    return SwapResult(
        amount_specified_remaining=state.amount_specified_remaining,
        amount_calculated=state.amount_calculated,
        sqrt_price_x96=state.sqrt_price_x96,
        liquidity=state.liquidity,
        tick_current=state.tick,
    )
