from . import bit_math as BitMath
from . import fee_growth as FeeGrowth
from . import full_math as FullMath
from . import liquidity_amounts as LiquidityAmounts
from . import liquidity_math as LiquidityMath
from . import sqrt_price_math as SqrtPriceMath
from . import swap_math as SwapMath
from . import tick_math as TickMath

__all__ = (
    "BitMath",
    "FeeGrowth",
    "FullMath",
    "LiquidityAmounts",
    "LiquidityMath",
    "SqrtPriceMath",
    "SwapMath",
    "TickMath",
)
