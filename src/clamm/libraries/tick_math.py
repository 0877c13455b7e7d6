import functools

from clamm.config import settings
from clamm.constants import MAX_UINT256, Q128
from clamm.exceptions import EVMRevertError
from clamm.libraries.bit_math import most_significant_bit

MIN_TICK = -887272
MAX_TICK = -MIN_TICK
MIN_SQRT_RATIO = 4295128739
MAX_SQRT_RATIO = 1461446703485210103287273052203988822378723970342

# sqrt(1.0001) ** -(2 ** i) as Q128 fixed-point values, for bit positions 1 through 19 of the
# absolute tick. Bit 0 is handled separately when seeding the ratio.
_TICK_BIT_RATIOS = (
    (0x2, 0xFFF97272373D413259A46990580E213A),
    (0x4, 0xFFF2E50F5F656932EF12357CF3C7FDCC),
    (0x8, 0xFFE5CACA7E10E4E61C3624EAA0941CD0),
    (0x10, 0xFFCB9843D60F6159C9DB58835C926644),
    (0x20, 0xFF973B41FA98C081472E6896DFB254C0),
    (0x40, 0xFF2EA16466C96A3843EC78B326B52861),
    (0x80, 0xFE5DEE046A99A2A811C461F1969C3053),
    (0x100, 0xFCBE86C7900A88AEDCFFC83B479AA3A4),
    (0x200, 0xF987A7253AC413176F2B074CF7815E54),
    (0x400, 0xF3392B0822B70005940C7A398E4B70F3),
    (0x800, 0xE7159475A2C29B7443B29C7FA6E889D9),
    (0x1000, 0xD097F3BDFD2022B8845AD8F792AA5825),
    (0x2000, 0xA9F746462D870FDF8A65DC1F90E061E5),
    (0x4000, 0x70D869A156D2A1B890BB3DF62BAF32F7),
    (0x8000, 0x31BE135F97D08FD981231505542FCFA6),
    (0x10000, 0x9AA508B5B7A84E1C677DE54F3E99BC9),
    (0x20000, 0x5D6AF8DEDB81196699C329225EE604),
    (0x40000, 0x2216E584F5FA1EA926041BEDFE98),
    (0x80000, 0x48A170391F7DC42444E8FA2),
)

# log2(sqrt(1.0001)) ** -1 as a Q64.64 value
_LOG_SQRT10001_MULTIPLIER = 255738958999603826347141

# Bounds on the error of the log approximation, used to bracket the true tick
_TICK_LOW_ERROR = 3402992956809132418596140100660247210
_TICK_HIGH_ERROR = 291339464771989622907027621153398088495


@functools.lru_cache(maxsize=settings.math_cache_size, typed=True)
def get_sqrt_ratio_at_tick(tick: int) -> int:
    """
    Calculate sqrt(1.0001 ** tick) as a Q64.96 value.

    Each set bit of the absolute tick contributes one fixed-point multiplication against a
    precomputed ratio. The Q128.128 product is inverted for positive ticks, then converted to Q64.96
    with a rounding-up division so that `get_tick_at_sqrt_ratio` of the result is always `tick`.

    ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/TickMath.sol
    """

    if not isinstance(tick, int) or isinstance(tick, bool):
        raise EVMRevertError(error=f"TICK: {tick!r} is not an integer")

    abs_tick = abs(tick)
    if abs_tick > MAX_TICK:
        raise EVMRevertError(error="TICK: required abs_tick <= MAX_TICK")

    ratio = 0xFFFCB933BD6FAD37AA2D162D1A594001 if abs_tick & 0x1 != 0 else Q128
    for tick_mask, ratio_multiplier in _TICK_BIT_RATIOS:
        if abs_tick & tick_mask != 0:
            ratio = (ratio * ratio_multiplier) >> 128

    if tick > 0:
        ratio = MAX_UINT256 // ratio

    return (ratio >> 32) + (1 if ratio % (1 << 32) != 0 else 0)


@functools.lru_cache(maxsize=settings.math_cache_size)
def get_tick_at_sqrt_ratio(sqrt_price_x96: int) -> int:
    """
    Calculate the greatest tick such that `get_sqrt_ratio_at_tick(tick) <= sqrt_price_x96`.

    ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/TickMath.sol
    """

    if not (MIN_SQRT_RATIO <= sqrt_price_x96 < MAX_SQRT_RATIO):
        raise EVMRevertError(error="R")

    ratio = sqrt_price_x96 << 32
    msb = most_significant_bit(ratio)

    # Normalize the ratio to a Q1.127 value in [1, 2)
    r = ratio >> (msb - 127) if msb >= 128 else ratio << (127 - msb)  # noqa: PLR2004

    log_2 = (msb - 128) << 64

    # Each squaring of r yields one more fractional bit of the logarithm
    for bit in range(63, 49, -1):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << bit
        r >>= f

    log_sqrt10001 = log_2 * _LOG_SQRT10001_MULTIPLIER

    tick_low = (log_sqrt10001 - _TICK_LOW_ERROR) >> 128
    tick_high = (log_sqrt10001 + _TICK_HIGH_ERROR) >> 128

    if tick_low == tick_high:
        return tick_low
    return tick_high if get_sqrt_ratio_at_tick(tick_high) <= sqrt_price_x96 else tick_low
