from .checksum_cache import get_checksum_address
from .config import settings
from .logging import logger

# isort: split

from . import constants, exceptions, functions, libraries, types, validation
from .functions import (
    compute_pool_address,
    encode_sqrt_ratio_x96,
    nearest_usable_tick,
    price_to_closest_tick,
    tick_to_price,
)
from .pool import Pool
from .position import MintAmounts, Position
from .price import Price
from .route import Route
from .swap import simulate_swap
from .tick_data_provider import NoTickDataProvider, TickDataProvider, TickListDataProvider
from .token import Token, TokenAmount
from .trade import Swap, Trade, sorted_insert, trade_comparator
from .types import TICK_SPACINGS, FeeAmount, SwapResult, Tick, TradeType

__all__ = (
    "TICK_SPACINGS",
    "FeeAmount",
    "MintAmounts",
    "NoTickDataProvider",
    "Pool",
    "Position",
    "Price",
    "Route",
    "Swap",
    "SwapResult",
    "Tick",
    "TickDataProvider",
    "TickListDataProvider",
    "Token",
    "TokenAmount",
    "Trade",
    "TradeType",
    "compute_pool_address",
    "constants",
    "encode_sqrt_ratio_x96",
    "exceptions",
    "functions",
    "get_checksum_address",
    "libraries",
    "logger",
    "nearest_usable_tick",
    "price_to_closest_tick",
    "settings",
    "simulate_swap",
    "sorted_insert",
    "tick_to_price",
    "trade_comparator",
    "types",
    "validation",
)
