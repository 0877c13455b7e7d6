import pydantic
import pytest

from clamm import NoTickDataProvider, Tick, TickDataProvider, TickListDataProvider
from clamm.exceptions import InvalidTickList, NoTickDataError, TickNotFound
from clamm.libraries.tick_math import MAX_TICK


def test_no_tick_data_provider():
    provider = NoTickDataProvider()

    with pytest.raises(NoTickDataError, match="No tick data provider was given"):
        provider.get_tick(0)

    with pytest.raises(NoTickDataError):
        provider.next_initialized_tick_within_one_word(0, True, 1)


def test_tick_list_data_provider():
    ticks = [
        Tick(index=-60, liquidity_gross=100, liquidity_net=100),
        Tick(index=60, liquidity_gross=100, liquidity_net=-100),
    ]
    provider = TickListDataProvider(ticks, 60)

    assert provider.tick_spacing == 60
    assert provider.ticks == tuple(ticks)
    assert provider.get_tick(60) == ticks[1]
    assert provider.next_initialized_tick_within_one_word(-1, True, 60) == (-60, True)
    assert provider.next_initialized_tick_within_one_word(0, False, 60) == (60, True)
    assert repr(provider) == "TickListDataProvider(ticks=2, tick_spacing=60)"

    with pytest.raises(TickNotFound):
        provider.get_tick(0)


def test_tick_list_data_provider_accepts_mappings():
    provider = TickListDataProvider(
        [
            {"index": -10, "liquidity_gross": 5, "liquidity_net": 5},
            {"index": 10, "liquidity_gross": 5, "liquidity_net": -5},
        ],
        10,
    )
    assert provider.get_tick(-10) == Tick(index=-10, liquidity_gross=5, liquidity_net=5)


def test_tick_list_data_provider_validates_ticks():
    with pytest.raises(InvalidTickList, match="ZERO_NET"):
        TickListDataProvider([Tick(index=-60, liquidity_gross=100, liquidity_net=100)], 60)

    with pytest.raises(InvalidTickList, match="TICK_SPACING"):
        TickListDataProvider(
            [
                Tick(index=-60, liquidity_gross=100, liquidity_net=100),
                Tick(index=50, liquidity_gross=100, liquidity_net=-100),
            ],
            60,
        )


@pytest.mark.parametrize(
    "tick",
    [
        {"index": MAX_TICK + 1, "liquidity_gross": 0, "liquidity_net": 0},
        {"index": 0, "liquidity_gross": -1, "liquidity_net": 0},
        {"index": 0, "liquidity_gross": 0, "liquidity_net": 2**255},
        {"index": "0", "liquidity_gross": 0, "liquidity_net": 0},
    ],
)
def test_tick_model_rejects_invalid_values(tick: dict):
    with pytest.raises(pydantic.ValidationError):
        Tick.model_validate(tick)


def test_custom_provider_satisfies_protocol():
    class SingleRangeProvider:
        """
        Serve a single range of liquidity without storing a list.
        """

        def __init__(self, lower: int, upper: int, liquidity: int) -> None:
            self.ticks = {
                lower: Tick(index=lower, liquidity_gross=liquidity, liquidity_net=liquidity),
                upper: Tick(index=upper, liquidity_gross=liquidity, liquidity_net=-liquidity),
            }

        def get_tick(self, index: int) -> Tick:
            return self.ticks[index]

        def next_initialized_tick_within_one_word(
            self, tick: int, lte: bool, tick_spacing: int
        ) -> tuple[int, bool]:
            lower, upper = sorted(self.ticks)
            if lte:
                return (lower, True) if tick >= lower else (tick - tick_spacing, False)
            return (upper, True) if tick < upper else (tick + tick_spacing, False)

    provider: TickDataProvider = SingleRangeProvider(-60, 60, 1000)
    assert provider.get_tick(-60).liquidity_net == 1000
    assert provider.next_initialized_tick_within_one_word(-1, True, 60) == (-60, True)
