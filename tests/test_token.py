from fractions import Fraction

import pytest

from clamm import Price, Token, TokenAmount
from clamm.constants import MAX_UINT256
from clamm.exceptions import ClammValueError

WETH_ADDRESS = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


class TestToken:
    def test_address_is_checksummed(self):
        token = Token(1, WETH_ADDRESS.lower(), 18, "WETH")
        assert token.address == WETH_ADDRESS

    def test_equality_ignores_symbol_and_name(self):
        assert Token(1, WETH_ADDRESS, 18, "WETH", "Wrapped Ether") == Token(1, WETH_ADDRESS, 18)
        assert hash(Token(1, WETH_ADDRESS, 18, "WETH")) == hash(Token(1, WETH_ADDRESS, 18))

    def test_tokens_on_different_chains_are_not_equal(self):
        assert Token(1, WETH_ADDRESS, 18) != Token(10, WETH_ADDRESS, 18)

    def test_comparison_with_other_types(self):
        assert Token(1, WETH_ADDRESS, 18) != WETH_ADDRESS

    def test_str(self, usdc: Token):
        assert str(usdc) == "USDC"
        assert str(Token(1, WETH_ADDRESS, 18)) == WETH_ADDRESS

    @pytest.mark.parametrize("decimals", [-1, 256])
    def test_invalid_decimals(self, decimals: int):
        with pytest.raises(ClammValueError, match="decimals"):
            Token(1, WETH_ADDRESS, decimals)

    def test_is_immutable(self, usdc: Token):
        with pytest.raises(AttributeError):
            usdc.decimals = 18  # type: ignore[misc]

    def test_sorts_before(self, usdc: Token, dai: Token):
        assert usdc.sorts_before(dai)
        assert not dai.sorts_before(usdc)

    def test_sorts_before_compares_lowercase_addresses(self):
        # mixed case checksummed addresses are ordered without regard to case
        token_a = Token(1, "0x00000000000000000000000000000000000000ab", 18)
        token_b = Token(1, "0x00000000000000000000000000000000000000Ca", 18)
        assert token_a.sorts_before(token_b)

    def test_sorts_before_requires_different_tokens(self, usdc: Token):
        with pytest.raises(ClammValueError, match="same address"):
            usdc.sorts_before(usdc)

        with pytest.raises(ClammValueError, match="different chains"):
            usdc.sorts_before(Token(10, usdc.address, 6))


class TestTokenAmount:
    def test_arithmetic(self, usdc: Token):
        assert TokenAmount(usdc, 100) + TokenAmount(usdc, 50) == TokenAmount(usdc, 150)
        assert TokenAmount(usdc, 100) - TokenAmount(usdc, 50) == TokenAmount(usdc, 50)

    def test_arithmetic_requires_same_token(self, usdc: Token, dai: Token):
        with pytest.raises(ClammValueError, match="mismatch"):
            TokenAmount(usdc, 100) + TokenAmount(dai, 50)

        with pytest.raises(ClammValueError, match="mismatch"):
            TokenAmount(usdc, 100) - TokenAmount(dai, 50)

    @pytest.mark.parametrize("amount", [-1, MAX_UINT256 + 1])
    def test_invalid_amount(self, usdc: Token, amount: int):
        with pytest.raises(ClammValueError, match="Invalid amount"):
            TokenAmount(usdc, amount)

    def test_subtraction_cannot_go_negative(self, usdc: Token):
        with pytest.raises(ClammValueError):
            TokenAmount(usdc, 50) - TokenAmount(usdc, 100)

    def test_str(self, usdc: Token):
        assert str(TokenAmount(usdc, 1_000_000)) == "1000000 USDC"


class TestPrice:
    def test_from_amounts(self, usdc: Token, weth: Token):
        # 2,000 USDC for 1 WETH
        price = Price.from_amounts(weth, usdc, denominator=10**18, numerator=2_000 * 10**6)

        assert price.base == weth
        assert price.quote == usdc
        assert price.value == Fraction(2_000 * 10**6, 10**18)
        assert price.adjusted_for_decimals == 2_000

    def test_invert(self, usdc: Token, weth: Token):
        price = Price(weth, usdc, Fraction(2, 10**9)).invert()

        assert price.base == usdc
        assert price.quote == weth
        assert price.value == Fraction(10**9, 2)
        assert price.adjusted_for_decimals == Fraction(1, 2_000)

    def test_multiply(self, usdc: Token, dai: Token, weth: Token):
        weth_in_dai = Price(weth, dai, Fraction(1_000))
        dai_in_usdc = Price(dai, usdc, Fraction(1, 10**12))

        weth_in_usdc = weth_in_dai * dai_in_usdc
        assert weth_in_usdc.base == weth
        assert weth_in_usdc.quote == usdc
        assert weth_in_usdc.value == Fraction(1, 10**9)

        with pytest.raises(ClammValueError):
            weth_in_dai * weth_in_dai

    def test_quote_amount_rounds_down(self, usdc: Token, weth: Token):
        price = Price(weth, usdc, Fraction(2, 3))

        assert price.quote_amount(TokenAmount(weth, 10)) == TokenAmount(usdc, 6)

        with pytest.raises(ClammValueError):
            price.quote_amount(TokenAmount(usdc, 10))
