"""
Common type definitions
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from solders.pubkey import Pubkey

from ..errors import ParameterError

# Accepted wherever an address is expected
PubkeyLike = Union[Pubkey, str]


def to_pubkey(value: PubkeyLike, name: str = "address") -> Pubkey:
    """
    Coerce a base58 string or Pubkey to a Pubkey

    Args:
        value: Pubkey or base58 string
        name: Parameter name used in the error message

    Returns:
        Pubkey

    Raises:
        ParameterError: If the value is not a valid address
    """
    if isinstance(value, Pubkey):
        return value
    if isinstance(value, str):
        try:
            return Pubkey.from_string(value)
        except ValueError as e:
            raise ParameterError.invalid(name, f"not a base58 address ({e})") from e
    raise ParameterError.invalid(name, f"expected Pubkey or base58 string, got {type(value).__name__}")


@dataclass(frozen=True)
class TokenInfo:
    """
    Token information

    Attributes:
        mint: Token mint address (base58)
        decimals: Number of decimal places
        symbol: Token symbol (e.g., "SOL", "USDC")
        name: Full token name (optional)
    """
    mint: str
    decimals: int
    symbol: str = ""
    name: str = ""

    def __str__(self) -> str:
        return self.symbol or self.mint

    def __repr__(self) -> str:
        return f"TokenInfo({self.symbol or '?'}, {self.mint[:8]}...)"

    @property
    def pubkey(self) -> Pubkey:
        return to_pubkey(self.mint, "mint")

    def ui_amount(self, raw_amount: int) -> Decimal:
        """
        Convert raw amount to UI amount with full precision

        Args:
            raw_amount: Raw token amount (smallest units)

        Returns:
            UI amount as Decimal
        """
        return Decimal(raw_amount).scaleb(-self.decimals)

    def raw_amount(self, ui_amount: Union[Decimal, int, str]) -> int:
        """
        Convert UI amount to raw amount (floored to the smallest unit)

        Args:
            ui_amount: UI amount (Decimal, int or str)

        Returns:
            Raw token amount (smallest units)
        """
        from ..protocol.math import to_basis_points
        return to_basis_points(ui_amount, self.decimals)
