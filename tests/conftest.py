import logging
from collections.abc import Callable

import pytest

from clamm import Pool, Tick, Token
from clamm.functions import encode_sqrt_ratio_x96, nearest_usable_tick
from clamm.libraries.functions import sqrt
from clamm.libraries.tick_math import MAX_TICK, MIN_TICK, get_tick_at_sqrt_ratio
from clamm.logging import logger
from clamm.types import TICK_SPACINGS, FeeAmount

CHAIN_ID = 1

# Addresses are ordered so that USDC < DAI < WETH < WBTC when compared as lowercase hex
USDC_ADDRESS = "0x1000000000000000000000000000000000000000"
DAI_ADDRESS = "0x2000000000000000000000000000000000000000"
WETH_ADDRESS = "0x3000000000000000000000000000000000000000"
WBTC_ADDRESS = "0x4000000000000000000000000000000000000000"

type PoolFactory = Callable[..., Pool]


@pytest.fixture(scope="session", autouse=True)
def _set_clamm_logging():
    """
    Set the logging level to DEBUG for the test run
    """
    logger.setLevel(logging.DEBUG)


@pytest.fixture
def usdc() -> Token:
    return Token(CHAIN_ID, USDC_ADDRESS, 6, "USDC", "USD Coin")


@pytest.fixture
def dai() -> Token:
    return Token(CHAIN_ID, DAI_ADDRESS, 18, "DAI", "Dai Stablecoin")


@pytest.fixture
def weth() -> Token:
    return Token(CHAIN_ID, WETH_ADDRESS, 18, "WETH", "Wrapped Ether")


@pytest.fixture
def wbtc() -> Token:
    return Token(CHAIN_ID, WBTC_ADDRESS, 8, "WBTC", "Wrapped BTC")


def _full_range_ticks(tick_spacing: int, liquidity: int) -> list[Tick]:
    return [
        Tick(
            index=nearest_usable_tick(MIN_TICK, tick_spacing),
            liquidity_gross=liquidity,
            liquidity_net=liquidity,
        ),
        Tick(
            index=nearest_usable_tick(MAX_TICK, tick_spacing),
            liquidity_gross=liquidity,
            liquidity_net=-liquidity,
        ),
    ]


@pytest.fixture
def make_pool() -> PoolFactory:
    """
    A factory building a pool that holds a single full range position, priced at the ratio of the
    two reserves.
    """

    def _make_pool(
        token_a: Token,
        token_b: Token,
        reserve_a: int,
        reserve_b: int,
        fee: FeeAmount = FeeAmount.MEDIUM,
    ) -> Pool:
        reserve0, reserve1 = (
            (reserve_a, reserve_b) if token_a.sorts_before(token_b) else (reserve_b, reserve_a)
        )
        sqrt_price_x96 = encode_sqrt_ratio_x96(reserve1, reserve0)
        liquidity = sqrt(reserve0 * reserve1)
        return Pool(
            token_a,
            token_b,
            fee,
            sqrt_price_x96,
            liquidity,
            get_tick_at_sqrt_ratio(sqrt_price_x96),
            _full_range_ticks(TICK_SPACINGS[fee], liquidity),
        )

    return _make_pool


@pytest.fixture
def usdc_weth_pool(make_pool: PoolFactory, usdc: Token, weth: Token) -> Pool:
    # 2,000 USDC per WETH
    return make_pool(usdc, weth, 2_000_000 * 10**6, 1_000 * 10**18)


@pytest.fixture
def usdc_dai_pool(make_pool: PoolFactory, usdc: Token, dai: Token) -> Pool:
    # 1 USDC per DAI
    return make_pool(usdc, dai, 1_000_000 * 10**6, 1_000_000 * 10**18, fee=FeeAmount.LOW)


@pytest.fixture
def dai_weth_pool(make_pool: PoolFactory, dai: Token, weth: Token) -> Pool:
    # 1,000 DAI per WETH, so WETH is cheaper through DAI than in the direct USDC pool
    return make_pool(dai, weth, 1_000_000 * 10**18, 1_000 * 10**18)
