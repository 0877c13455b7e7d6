from clamm.constants import Q128
from clamm.libraries.functions import sub_in_256

# Fee growth accumulators are Q128.128 values that are allowed to overflow, so all differences
# use 256-bit wraparound subtraction.
# Reference: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/Tick.sol
# Reference: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/Position.sol


def get_fee_growth_inside(
    fee_growth_outside0_lower: int,
    fee_growth_outside1_lower: int,
    fee_growth_outside0_upper: int,
    fee_growth_outside1_upper: int,
    tick_lower: int,
    tick_upper: int,
    tick_current: int,
    fee_growth_global0_x128: int,
    fee_growth_global1_x128: int,
) -> tuple[int, int]:
    """
    Calculate the fee growth per unit of liquidity inside the tick range.
    """

    if tick_current < tick_lower:
        fee_growth_below0 = sub_in_256(fee_growth_global0_x128, fee_growth_outside0_lower)
        fee_growth_below1 = sub_in_256(fee_growth_global1_x128, fee_growth_outside1_lower)
    else:
        fee_growth_below0 = fee_growth_outside0_lower
        fee_growth_below1 = fee_growth_outside1_lower

    if tick_current < tick_upper:
        fee_growth_above0 = fee_growth_outside0_upper
        fee_growth_above1 = fee_growth_outside1_upper
    else:
        fee_growth_above0 = sub_in_256(fee_growth_global0_x128, fee_growth_outside0_upper)
        fee_growth_above1 = sub_in_256(fee_growth_global1_x128, fee_growth_outside1_upper)

    return (
        sub_in_256(sub_in_256(fee_growth_global0_x128, fee_growth_below0), fee_growth_above0),
        sub_in_256(sub_in_256(fee_growth_global1_x128, fee_growth_below1), fee_growth_above1),
    )


def get_tokens_owed(
    fee_growth_inside0_last_x128: int,
    fee_growth_inside1_last_x128: int,
    liquidity: int,
    fee_growth_inside0_x128: int,
    fee_growth_inside1_x128: int,
) -> tuple[int, int]:
    """
    Calculate the fees earned by a position since its fee growth was last recorded.
    """

    return (
        sub_in_256(fee_growth_inside0_x128, fee_growth_inside0_last_x128) * liquidity // Q128,
        sub_in_256(fee_growth_inside1_x128, fee_growth_inside1_last_x128) * liquidity // Q128,
    )
