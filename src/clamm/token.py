import dataclasses
from typing import Self

from eth_typing import ChecksumAddress

from clamm.checksum_cache import get_checksum_address
from clamm.constants import MAX_UINT256
from clamm.exceptions import ClammValueError


@dataclasses.dataclass(slots=True, frozen=True, eq=False)
class Token:
    """
    An ERC-20 token, identified by its chain and address. The symbol and name are informational and
    do not participate in equality.
    """

    chain_id: int
    address: ChecksumAddress
    decimals: int
    symbol: str | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", get_checksum_address(self.address))
        if not (0 <= self.decimals < 256):  # noqa: PLR2004
            raise ClammValueError(message=f"Invalid decimals {self.decimals}")

    def __eq__(self, other: object) -> bool:
        match other:
            case Token():
                return self.chain_id == other.chain_id and self.address == other.address
            case _:
                return NotImplemented

    def __hash__(self) -> int:
        return hash((self.chain_id, self.address))

    def __str__(self) -> str:
        return self.symbol if self.symbol is not None else self.address

    def sorts_before(self, other: Self) -> bool:
        """
        Check if this token's address sorts before the other's, which makes it token0 of a pool.
        """

        if self.chain_id != other.chain_id:
            raise ClammValueError(message="Tokens are on different chains")
        if self.address == other.address:
            raise ClammValueError(message="Tokens have the same address")
        return self.address.lower() < other.address.lower()


@dataclasses.dataclass(slots=True, frozen=True)
class TokenAmount:
    """
    A raw integer quantity of a token, in the token's smallest unit.
    """

    token: Token
    amount: int

    def __post_init__(self) -> None:
        if not (0 <= self.amount <= MAX_UINT256):
            raise ClammValueError(message=f"Invalid amount {self.amount}")

    def __add__(self, other: Self) -> Self:
        self._check_same_token(other)
        return self.__class__(self.token, self.amount + other.amount)

    def __sub__(self, other: Self) -> Self:
        self._check_same_token(other)
        return self.__class__(self.token, self.amount - other.amount)

    def __str__(self) -> str:
        return f"{self.amount} {self.token}"

    def _check_same_token(self, other: "TokenAmount") -> None:
        if self.token != other.token:
            raise ClammValueError(message=f"Token mismatch: {self.token} and {other.token}")
