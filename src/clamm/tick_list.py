import bisect
from collections.abc import Sequence

from clamm.exceptions import InvalidTickList, TickNotFound, TickSearchError
from clamm.types import Tick, TickIndex

"""
Helpers over a sorted sequence of initialized ticks. The sequence is expected to have passed
`validate_list` for the pool's tick spacing before any of the search functions are used.
"""


def validate_list(ticks: Sequence[Tick], tick_spacing: int) -> None:
    """
    Check that the ticks are aligned to the spacing, sum to zero net liquidity, and are strictly
    ascending by index.
    """

    if tick_spacing <= 0:
        raise InvalidTickList("TICK_SPACING_NONZERO")

    if any(tick.index % tick_spacing != 0 for tick in ticks):
        raise InvalidTickList("TICK_SPACING")

    if sum(tick.liquidity_net for tick in ticks) != 0:
        raise InvalidTickList("ZERO_NET")

    if any(lower.index >= upper.index for lower, upper in zip(ticks, ticks[1:], strict=False)):
        raise InvalidTickList("SORTED")


def is_below_smallest(ticks: Sequence[Tick], tick: TickIndex) -> bool:
    if not ticks:
        raise InvalidTickList("LENGTH")
    return tick < ticks[0].index


def is_at_or_above_largest(ticks: Sequence[Tick], tick: TickIndex) -> bool:
    if not ticks:
        raise InvalidTickList("LENGTH")
    return tick >= ticks[-1].index


def binary_search(ticks: Sequence[Tick], tick: TickIndex) -> int:
    """
    Find the position of the largest initialized tick less than or equal to `tick`.
    """

    if is_below_smallest(ticks, tick):
        raise TickSearchError("BELOW_SMALLEST")
    return bisect.bisect_right(ticks, tick, key=lambda t: t.index) - 1


def get_tick(ticks: Sequence[Tick], index: TickIndex) -> Tick:
    if is_below_smallest(ticks, index):
        raise TickNotFound(index)

    tick = ticks[binary_search(ticks, index)]
    if tick.index != index:
        raise TickNotFound(index)
    return tick


def next_initialized_tick(ticks: Sequence[Tick], tick: TickIndex, lte: bool) -> Tick:
    """
    Find the nearest initialized tick at or below `tick` when `lte` is set, otherwise the nearest
    initialized tick strictly above it.
    """

    if lte:
        if is_below_smallest(ticks, tick):
            raise TickSearchError("BELOW_SMALLEST")
        if is_at_or_above_largest(ticks, tick):
            return ticks[-1]
        return ticks[binary_search(ticks, tick)]

    if is_at_or_above_largest(ticks, tick):
        raise TickSearchError("AT_OR_ABOVE_LARGEST")
    if is_below_smallest(ticks, tick):
        return ticks[0]
    return ticks[binary_search(ticks, tick) + 1]


def next_initialized_tick_within_one_word(
    ticks: Sequence[Tick],
    tick: TickIndex,
    lte: bool,
    tick_spacing: int,
) -> tuple[TickIndex, bool]:
    """
    Find the next initialized tick, searching no further than the boundary of the bitmap word
    holding `tick`. If no initialized tick exists before the boundary, the boundary is returned
    with the initialized flag unset.
    """

    compressed = tick // tick_spacing

    if lte:
        word_position = compressed >> 8
        minimum = (word_position << 8) * tick_spacing

        if is_below_smallest(ticks, tick):
            return minimum, False

        index = next_initialized_tick(ticks, tick, lte).index
        next_tick = max(minimum, index)
        return next_tick, next_tick == index

    word_position = (compressed + 1) >> 8
    maximum = (((word_position + 1) << 8) - 1) * tick_spacing

    if is_at_or_above_largest(ticks, tick):
        return maximum, False

    index = next_initialized_tick(ticks, tick, lte).index
    next_tick = min(maximum, index)
    return next_tick, next_tick == index
