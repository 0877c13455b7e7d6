import math

from clamm.constants import MAX_UINT160, MAX_UINT256
from clamm.exceptions import EVMRevertError

# Values below this limit are exactly representable as a float
MAX_SAFE_INTEGER = 2**53 - 1


def mulmod(x: int, y: int, k: int) -> int:
    if k == 0:
        raise EVMRevertError(error="division by zero")
    return (x * y) % k


def multiply_in_256(x: int, y: int) -> int:
    """
    Multiply two values, discarding any bits above the 256th like an unchecked EVM `mul`.
    """

    return (x * y) & MAX_UINT256


def add_in_256(x: int, y: int) -> int:
    """
    Add two values, discarding any bits above the 256th like an unchecked EVM `add`.
    """

    return (x + y) & MAX_UINT256


def sub_in_256(x: int, y: int) -> int:
    """
    Subtract two values, wrapping negative results modulo 2**256 like an unchecked EVM `sub`.
    """

    return (x - y) % (MAX_UINT256 + 1)


def div_rounding_up(x: int, y: int) -> int:
    """
    Floor division of two uint256 values, plus one if there is any remainder. Matches the
    unchecked `divRoundingUp` of UnsafeMath.sol.
    """

    quotient, remainder = divmod(x, y)
    return quotient + 1 if remainder else quotient


def sqrt(value: int) -> int:
    """
    Compute the floor of the square root of a non-negative integer.
    """

    if value < 0:
        raise EVMRevertError(error="NEGATIVE")

    if value <= MAX_SAFE_INTEGER:
        # The float estimate may be off by one for values near a perfect square
        root = math.floor(math.sqrt(value))
        while root * root > value:
            root -= 1
        while (root + 1) * (root + 1) <= value:
            root += 1
        return root

    z = value
    x = value // 2 + 1
    while x < z:
        z = x
        x = (value // x + x) // 2
    return z


# adapted from OpenZeppelin's overflow checks, which throw
# an exception if the input value exceeds the maximum value
# for this type
def to_uint160(x: int) -> int:
    if x > MAX_UINT160:
        raise EVMRevertError(error=f"{x} greater than maximum uint160 value")
    return x
