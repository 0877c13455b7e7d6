import dataclasses
import enum

import pydantic

from clamm.validation.evm_values import ValidatedInt256, ValidatedTick, ValidatedUint256

type Pip = int  # pool fees are expressed in pips equaling one hundredth of 1%
type Liquidity = int
type SqrtPriceX96 = int
type TickIndex = int


class FeeAmount(enum.IntEnum):
    """
    The fee tiers with a known tick spacing.
    """

    LOWEST = 100
    LOW_200 = 200
    LOW_300 = 300
    LOW_400 = 400
    LOW = 500
    MEDIUM = 3000
    HIGH = 10000


TICK_SPACINGS: dict[Pip, int] = {
    FeeAmount.LOWEST: 1,
    FeeAmount.LOW_200: 4,
    FeeAmount.LOW_300: 6,
    FeeAmount.LOW_400: 8,
    FeeAmount.LOW: 10,
    FeeAmount.MEDIUM: 60,
    FeeAmount.HIGH: 200,
}


class TradeType(enum.Enum):
    EXACT_INPUT = enum.auto()
    EXACT_OUTPUT = enum.auto()


class Tick(pydantic.BaseModel, frozen=True):
    """
    An initialized tick. `liquidity_net` is added to the running liquidity when the tick is crossed
    from below, and subtracted when crossed from above.
    """

    index: ValidatedTick
    liquidity_gross: ValidatedUint256
    liquidity_net: ValidatedInt256


@dataclasses.dataclass(slots=True, frozen=True)
class SwapResult:
    """
    The outcome of a simulated swap. `amount_specified_remaining` is non-zero if the swap stopped at
    the price limit before the specified amount was filled.
    """

    amount_specified_remaining: int
    amount_calculated: int
    sqrt_price_x96: SqrtPriceX96
    liquidity: Liquidity
    tick_current: TickIndex
