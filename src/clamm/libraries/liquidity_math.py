from clamm.constants import MAX_INT256, MAX_UINT256, MIN_INT256, MIN_UINT256
from clamm.exceptions import EVMRevertError


def add_delta(x: int, y: int) -> int:
    """
    Add a signed liquidity net to an unsigned liquidity value.

    Liquidity is held as a uint256 and the net as an int256. The contract detects overflow and
    underflow through casting, here the result is range checked directly.

    ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/LiquidityMath.sol
    """

    if not (MIN_UINT256 <= x <= MAX_UINT256):
        raise EVMRevertError(error="x not a valid uint256")
    if not (MIN_INT256 <= y <= MAX_INT256):
        raise EVMRevertError(error="y not a valid int256")

    z = x + y

    if z < MIN_UINT256:
        raise EVMRevertError(error="LS")
    if z > MAX_UINT256:
        raise EVMRevertError(error="LA")

    return z
