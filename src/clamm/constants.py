__all__ = (
    "FEE_DENOMINATOR",
    "MAX_INT256",
    "MAX_UINT128",
    "MAX_UINT160",
    "MAX_UINT256",
    "MIN_INT256",
    "MIN_UINT160",
    "MIN_UINT256",
    "Q96",
    "Q128",
    "Q192",
)

import typing


def _min_uint(_: int) -> int:
    return 0


def _max_uint(bits: int) -> int:
    return typing.cast("int", 2**bits - 1)


def _min_int(bits: int) -> int:
    return typing.cast("int", -(2 ** (bits - 1)))


def _max_int(bits: int) -> int:
    return typing.cast("int", (2 ** (bits - 1)) - 1)


MIN_INT256 = _min_int(256)
MAX_INT256 = _max_int(256)

MAX_UINT128 = _max_uint(128)

MIN_UINT160 = _min_uint(160)
MAX_UINT160 = _max_uint(160)

MIN_UINT256 = _min_uint(256)
MAX_UINT256 = _max_uint(256)

# Fixed-point scaling factors
Q96 = 2**96
Q128 = 2**128
Q192 = 2**192

# Fee amounts are expressed in pips, 1/100th of a basis point
FEE_DENOMINATOR = 1_000_000
