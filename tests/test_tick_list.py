import pytest

from clamm import tick_list
from clamm.exceptions import InvalidTickList, TickNotFound, TickSearchError
from clamm.libraries.tick_math import MAX_TICK, MIN_TICK
from clamm.types import Tick

# Reference values from the Uniswap V3 SDK tests
# ref: https://github.com/Uniswap/v3-sdk/blob/main/src/utils/tickList.test.ts

LOW_TICK = Tick(index=MIN_TICK + 1, liquidity_gross=10, liquidity_net=10)
MID_TICK = Tick(index=0, liquidity_gross=5, liquidity_net=-5)
HIGH_TICK = Tick(index=MAX_TICK - 1, liquidity_gross=5, liquidity_net=-5)
TICKS = (LOW_TICK, MID_TICK, HIGH_TICK)


@pytest.mark.parametrize(
    ("ticks", "tick_spacing", "reason"),
    [
        (TICKS, 0, "TICK_SPACING_NONZERO"),
        (
            (
                Tick(index=-1, liquidity_gross=1, liquidity_net=1),
                Tick(index=2, liquidity_gross=1, liquidity_net=-1),
            ),
            2,
            "TICK_SPACING",
        ),
        ((LOW_TICK, MID_TICK), 1, "ZERO_NET"),
        ((MID_TICK, LOW_TICK, HIGH_TICK), 1, "SORTED"),
    ],
)
def test_validate_list_errors(ticks: tuple[Tick, ...], tick_spacing: int, reason: str):
    with pytest.raises(InvalidTickList, match=reason):
        tick_list.validate_list(ticks, tick_spacing)


def test_validate_list():
    tick_list.validate_list(TICKS, 1)
    tick_list.validate_list((), 60)


def test_is_below_smallest():
    assert tick_list.is_below_smallest(TICKS, MIN_TICK)
    assert not tick_list.is_below_smallest(TICKS, MIN_TICK + 1)

    with pytest.raises(InvalidTickList, match="LENGTH"):
        tick_list.is_below_smallest((), 0)


def test_is_at_or_above_largest():
    assert not tick_list.is_at_or_above_largest(TICKS, MAX_TICK - 2)
    assert tick_list.is_at_or_above_largest(TICKS, MAX_TICK - 1)

    with pytest.raises(InvalidTickList, match="LENGTH"):
        tick_list.is_at_or_above_largest((), 0)


def test_get_tick():
    assert tick_list.get_tick(TICKS, 0) == MID_TICK
    assert tick_list.get_tick(TICKS, MAX_TICK - 1) == HIGH_TICK

    for index in (MIN_TICK, 1, MAX_TICK):
        with pytest.raises(TickNotFound):
            tick_list.get_tick(TICKS, index)


@pytest.mark.parametrize(
    ("tick", "expected"),
    [
        (LOW_TICK.index, LOW_TICK),
        (LOW_TICK.index + 1, LOW_TICK),
        (MID_TICK.index - 1, LOW_TICK),
        (MID_TICK.index, MID_TICK),
        (MID_TICK.index + 1, MID_TICK),
        (HIGH_TICK.index, HIGH_TICK),
        (HIGH_TICK.index + 1, HIGH_TICK),
    ],
)
def test_next_initialized_tick_lte(tick: int, expected: Tick):
    assert tick_list.next_initialized_tick(TICKS, tick, lte=True) == expected


@pytest.mark.parametrize(
    ("tick", "expected"),
    [
        (LOW_TICK.index - 1, LOW_TICK),
        (LOW_TICK.index, MID_TICK),
        (LOW_TICK.index + 1, MID_TICK),
        (MID_TICK.index - 1, MID_TICK),
        (MID_TICK.index, HIGH_TICK),
        (MID_TICK.index + 1, HIGH_TICK),
        (HIGH_TICK.index - 1, HIGH_TICK),
    ],
)
def test_next_initialized_tick_gt(tick: int, expected: Tick):
    assert tick_list.next_initialized_tick(TICKS, tick, lte=False) == expected


def test_next_initialized_tick_outside_of_list():
    with pytest.raises(TickSearchError, match="BELOW_SMALLEST"):
        tick_list.next_initialized_tick(TICKS, LOW_TICK.index - 1, lte=True)

    with pytest.raises(TickSearchError, match="AT_OR_ABOVE_LARGEST"):
        tick_list.next_initialized_tick(TICKS, HIGH_TICK.index, lte=False)


@pytest.mark.parametrize(
    ("tick", "lte", "expected"),
    [
        # searching down stops at the start of the word
        (-257, True, (-512, False)),
        (-256, True, (-256, False)),
        (-1, True, (-256, False)),
        (0, True, (0, True)),
        (1, True, (0, True)),
        (255, True, (0, True)),
        (256, True, (256, False)),
        # searching up stops at the end of the word
        (-257, False, (-1, False)),
        (-2, False, (-1, False)),
        (-1, False, (0, True)),
        (0, False, (255, False)),
        (254, False, (255, False)),
        (255, False, (511, False)),
        # below the smallest initialized tick
        (MIN_TICK, True, (-887296, False)),
        # at or above the largest initialized tick
        (MAX_TICK - 1, False, (887295, False)),
    ],
)
def test_next_initialized_tick_within_one_word(
    tick: int, lte: bool, expected: tuple[int, bool]
):
    assert tick_list.next_initialized_tick_within_one_word(TICKS, tick, lte, 1) == expected


def test_next_initialized_tick_within_one_word_with_spacing():
    ticks = (
        Tick(index=-120, liquidity_gross=2, liquidity_net=2),
        Tick(index=60, liquidity_gross=2, liquidity_net=-2),
    )
    tick_list.validate_list(ticks, 60)

    assert tick_list.next_initialized_tick_within_one_word(ticks, -1, True, 60) == (-120, True)
    assert tick_list.next_initialized_tick_within_one_word(ticks, 0, False, 60) == (60, True)
    assert tick_list.next_initialized_tick_within_one_word(ticks, 60, False, 60) == (
        255 * 60,
        False,
    )
