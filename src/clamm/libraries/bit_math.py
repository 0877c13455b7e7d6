from clamm.constants import MAX_UINT256
from clamm.exceptions import EVMRevertError


def most_significant_bit(x: int) -> int:
    """
    Find the 0-indexed position of the highest set bit, testing halving thresholds from the top.

    ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/BitMath.sol
    """

    if x <= 0:
        raise EVMRevertError(error="ZERO")
    if x > MAX_UINT256:
        raise EVMRevertError(error="MAX")

    msb = 0
    for power in (128, 64, 32, 16, 8, 4, 2, 1):
        if x >= 1 << power:
            x >>= power
            msb += power
    return msb
