from fractions import Fraction

import pytest

from clamm import Price, Token
from clamm.exceptions import ClammValueError
from clamm.functions import (
    compute_pool_address,
    encode_sqrt_ratio_x96,
    nearest_usable_tick,
    price_to_closest_tick,
    tick_to_price,
)
from clamm.libraries.tick_math import MAX_TICK, MIN_TICK
from clamm.types import FeeAmount

UNISWAP_V3_FACTORY = "0x1F98431c8aD98523631AE4a59f267346ea31F984"
UNISWAP_V3_POOL_INIT_HASH = "0xe34f199b19b2b4f47f68442619d555527d244f78a3297ea89325f843f87b8b54"

DAI_ADDRESS = "0x6B175474E89094C44Da98b954EedeAC495271d0F"
USDC_ADDRESS = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
WBTC_ADDRESS = "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599"
WETH_ADDRESS = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


@pytest.fixture
def token0() -> Token:
    return Token(1, "0x0000000000000000000000000000000000000000", 18, "T0")


@pytest.fixture
def token1() -> Token:
    return Token(1, "0x0000000000000000000000000000000000000001", 18, "T1")


@pytest.fixture
def token2_6_decimals() -> Token:
    return Token(1, "0x0000000000000000000000000000000000000002", 6, "T2")


def test_encode_sqrt_ratio_x96():
    assert encode_sqrt_ratio_x96(1, 1) == 2**96
    assert encode_sqrt_ratio_x96(100, 1) == 792281625142643375935439503360
    assert encode_sqrt_ratio_x96(1, 100) == 7922816251426433759354395033
    assert encode_sqrt_ratio_x96(111, 333) == 45742400955009932534161870629
    assert encode_sqrt_ratio_x96(333, 111) == 137227202865029797602485611888


@pytest.mark.parametrize(
    ("factory", "token_addresses", "fee", "expected"),
    [
        (
            UNISWAP_V3_FACTORY,
            (WBTC_ADDRESS, WETH_ADDRESS),
            3000,
            "0xCBCdF9626bC03E24f779434178A73a0B4bad62eD",
        ),
        (
            UNISWAP_V3_FACTORY,
            (USDC_ADDRESS, WETH_ADDRESS),
            500,
            "0x88e6A0c2dDD26FEEb64F039a2c41296FcB3f5640",
        ),
        (
            # the Uniswap SDK test vector, which uses a placeholder factory
            "0x1111111111111111111111111111111111111111",
            (USDC_ADDRESS, DAI_ADDRESS),
            FeeAmount.LOW,
            "0x90B1b09A9715CaDbFD9331b3A7652B24BfBEfD32",
        ),
    ],
)
def test_compute_pool_address(
    factory: str, token_addresses: tuple[str, str], fee: int, expected: str
):
    assert (
        compute_pool_address(
            factory_address=factory,
            token_addresses=token_addresses,
            fee=fee,
            init_hash=UNISWAP_V3_POOL_INIT_HASH,
        )
        == expected
    )


def test_compute_pool_address_ignores_token_order():
    def address(*token_addresses: str) -> str:
        return compute_pool_address(
            factory_address=UNISWAP_V3_FACTORY,
            token_addresses=token_addresses,
            fee=3000,
            init_hash=UNISWAP_V3_POOL_INIT_HASH,
        )

    assert address(WBTC_ADDRESS, WETH_ADDRESS) == address(WETH_ADDRESS, WBTC_ADDRESS)
    assert address(WBTC_ADDRESS.lower(), WETH_ADDRESS) == address(WBTC_ADDRESS, WETH_ADDRESS)


class TestNearestUsableTick:
    @pytest.mark.parametrize(
        ("tick", "tick_spacing", "expected"),
        [
            (MIN_TICK, 1, MIN_TICK),
            (MAX_TICK, 1, MAX_TICK),
            (5, 10, 10),
            (4, 10, 0),
            (-5, 10, 0),
            (-6, 10, -10),
            (MIN_TICK, 10, -887270),
            (MAX_TICK, 10, 887270),
            # rounding would leave the tick bounds
            (MIN_TICK, 60, -887220),
            (MAX_TICK, 60, 887220),
            (MAX_TICK - 1, 200, 887200),
        ],
    )
    def test_rounds_to_nearest_multiple(self, tick: int, tick_spacing: int, expected: int):
        assert nearest_usable_tick(tick, tick_spacing) == expected

    @pytest.mark.parametrize(
        ("tick", "tick_spacing"),
        [
            (1, 0),
            (1, -5),
            (MIN_TICK - 1, 1),
            (MAX_TICK + 1, 1),
            (1.5, 1),
        ],
    )
    def test_invalid_arguments(self, tick: int, tick_spacing: int):
        with pytest.raises(ClammValueError):
            nearest_usable_tick(tick, tick_spacing)


class TestTickToPrice:
    """
    Reference values from the Uniswap V3 SDK tests, which are given to five significant digits.
    """

    @pytest.mark.parametrize(
        ("tick", "base_is_token0", "expected"),
        [
            (-74959, False, 1800),
            (-74959, True, Fraction(1, 1800)),
            (74959, True, 1800),
            (74959, False, Fraction(1, 1800)),
        ],
    )
    def test_equal_decimals(
        self,
        token0: Token,
        token1: Token,
        tick: int,
        base_is_token0: bool,
        expected: Fraction,
    ):
        base, quote = (token0, token1) if base_is_token0 else (token1, token0)
        price = tick_to_price(base, quote, tick)

        assert price.base == base
        assert price.quote == quote
        assert abs(price.value - expected) / expected < Fraction(1, 10_000)

    def test_different_decimals(self, token0: Token, token2_6_decimals: Token):
        price = tick_to_price(token0, token2_6_decimals, -276225)
        assert abs(price.adjusted_for_decimals - Fraction(101, 100)) < Fraction(1, 1000)

        inverted = tick_to_price(token2_6_decimals, token0, -276225)
        assert inverted.value == price.value**-1
        assert abs(inverted.adjusted_for_decimals - Fraction(99015, 100_000)) < Fraction(1, 10_000)

    def test_tick_zero(self, token0: Token, token1: Token):
        assert tick_to_price(token0, token1, 0).value == 1
        assert tick_to_price(token1, token0, 0).value == 1


class TestPriceToClosestTick:
    @pytest.mark.parametrize("tick", [MIN_TICK, -276225, -74959, -1, 0, 1, 74959, MAX_TICK - 1])
    @pytest.mark.parametrize("base_is_token0", [True, False])
    def test_recovers_tick_from_its_price(
        self, token0: Token, token1: Token, tick: int, base_is_token0: bool
    ):
        base, quote = (token0, token1) if base_is_token0 else (token1, token0)
        assert price_to_closest_tick(tick_to_price(base, quote, tick)) == tick

    def test_price_between_ticks_rounds_down(self, token0: Token, token1: Token):
        # halfway between tick 74959 and 74960, measured as token1 per token0
        lower = tick_to_price(token0, token1, 74959).value
        upper = tick_to_price(token0, token1, 74960).value
        price = Price(token0, token1, (lower + upper) / 2)
        assert price_to_closest_tick(price) == 74959

        # the same price quoted in the other direction gives the same tick
        assert price_to_closest_tick(price.invert()) == 74959
