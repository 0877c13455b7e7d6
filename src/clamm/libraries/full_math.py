from clamm.constants import MAX_UINT256, MIN_UINT256
from clamm.exceptions import EVMRevertError
from clamm.libraries.functions import mulmod


def _check_uint256(**values: int) -> None:
    for name, value in values.items():
        if not (MIN_UINT256 <= value <= MAX_UINT256):
            raise EVMRevertError(error=f"Invalid value for {name}.")


def muldiv(
    a: int,
    b: int,
    denominator: int,
) -> int:
    """
    Calculate floor(a * b / denominator).

    The contract version keeps a 512-bit intermediate product to avoid phantom overflow. Python
    integers are unbounded, so only the operand ranges and the final result are checked.

    ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/FullMath.sol
    """

    _check_uint256(a=a, b=b, denominator=denominator)

    if denominator == 0:
        raise EVMRevertError(error="DIVISION BY ZERO")

    result = (a * b) // denominator
    if result > MAX_UINT256:
        raise EVMRevertError(error="Invalid result, does not fit in uint256")
    return result


def muldiv_rounding_up(
    a: int,
    b: int,
    denominator: int,
) -> int:
    """
    Calculate ceil(a * b / denominator).
    """

    result = muldiv(a, b, denominator)
    if mulmod(a, b, denominator) == 0:
        return result

    if result == MAX_UINT256:
        raise EVMRevertError(error="Rounded result does not fit in uint256")
    return result + 1
