from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from clamm import tick_list
from clamm.exceptions import NoTickDataError
from clamm.types import Tick, TickIndex


class TickDataProvider(Protocol):
    """
    A minimal protocol allowing the swap simulator to retrieve initialized ticks from a generic
    source. Implementations must raise instead of returning a default when data is unavailable,
    since a missing tick would silently change the quoted amount.
    """

    def get_tick(self, index: TickIndex) -> Tick: ...
    def next_initialized_tick_within_one_word(
        self,
        tick: TickIndex,
        lte: bool,
        tick_spacing: int,
    ) -> tuple[TickIndex, bool]: ...


class NoTickDataProvider:
    """
    A provider holding no tick data. Every lookup raises `NoTickDataError`, so it is only suitable
    for pools used for pricing, never for swapping.
    """

    def get_tick(self, index: TickIndex) -> Tick:
        raise NoTickDataError

    def next_initialized_tick_within_one_word(
        self,
        tick: TickIndex,
        lte: bool,
        tick_spacing: int,
    ) -> tuple[TickIndex, bool]:
        raise NoTickDataError


class TickListDataProvider:
    """
    A provider backed by an in-memory list of initialized ticks, validated against the tick spacing
    at construction.
    """

    def __init__(
        self,
        ticks: Iterable[Tick | Mapping[str, Any]],
        tick_spacing: int,
    ) -> None:
        self._ticks: tuple[Tick, ...] = tuple(
            tick if isinstance(tick, Tick) else Tick.model_validate(tick) for tick in ticks
        )
        tick_list.validate_list(self._ticks, tick_spacing)
        self._tick_spacing = tick_spacing

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(ticks={len(self._ticks)}, "
            f"tick_spacing={self._tick_spacing})"
        )

    @property
    def ticks(self) -> tuple[Tick, ...]:
        return self._ticks

    @property
    def tick_spacing(self) -> int:
        return self._tick_spacing

    def get_tick(self, index: TickIndex) -> Tick:
        return tick_list.get_tick(self._ticks, index)

    def next_initialized_tick_within_one_word(
        self,
        tick: TickIndex,
        lte: bool,
        tick_spacing: int,
    ) -> tuple[TickIndex, bool]:
        return tick_list.next_initialized_tick_within_one_word(
            self._ticks, tick, lte, tick_spacing
        )
