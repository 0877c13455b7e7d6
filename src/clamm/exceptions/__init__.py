from clamm.exceptions.base import ClammError, ClammValueError
from clamm.exceptions.evm import EVMRevertError, InvalidSqrtPriceLimit
from clamm.exceptions.liquidity_pool import (
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientReserves,
    InvalidFee,
    InvalidPoolState,
    LiquidityPoolError,
    UnknownToken,
)
from clamm.exceptions.position import InvalidTickRange, PositionError
from clamm.exceptions.route import DuplicatePools, InvalidRoute, RouteError
from clamm.exceptions.tick_data import (
    InvalidTickList,
    NoTickDataError,
    TickDataError,
    TickNotFound,
    TickSearchError,
)

from . import evm, liquidity_pool, position, route, tick_data

__all__ = (
    "ClammError",
    "ClammValueError",
    "DuplicatePools",
    "EVMRevertError",
    "InsufficientInputAmount",
    "InsufficientLiquidity",
    "InsufficientReserves",
    "InvalidFee",
    "InvalidPoolState",
    "InvalidRoute",
    "InvalidSqrtPriceLimit",
    "InvalidTickList",
    "InvalidTickRange",
    "LiquidityPoolError",
    "NoTickDataError",
    "PositionError",
    "RouteError",
    "TickDataError",
    "TickNotFound",
    "TickSearchError",
    "UnknownToken",
    "evm",
    "liquidity_pool",
    "position",
    "route",
    "tick_data",
)
