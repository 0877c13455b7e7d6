import functools

from cchecksum import to_checksum_address
from eth_typing import ChecksumAddress, HexAddress


@functools.lru_cache(maxsize=512)
def get_checksum_address(address: HexAddress | str | bytes) -> ChecksumAddress:
    """
    Checksum a token, factory, or pool address. Tokens are rebuilt often during route search, so
    results are cached.
    """

    return to_checksum_address(address)
