"""
Pool identity and derived account types
"""

from dataclasses import dataclass
from typing import NamedTuple

from solders.pubkey import Pubkey

from .common import PubkeyLike, to_pubkey


class DerivedAddress(NamedTuple):
    """Program derived address and the bump seed that produced it"""
    address: Pubkey
    bump: int

    def __str__(self) -> str:
        return str(self.address)


@dataclass(frozen=True)
class PoolIdentity:
    """
    Semantic identity of a fixed-ratio pool

    Mints are held in canonical order (lower byte sequence first). Ratios are
    kept in the order the caller supplied them; the pool address seeds are
    canonical mints followed by ratio_a and ratio_b.

    Attributes:
        token_a_mint: Canonical token A mint
        token_b_mint: Canonical token B mint
        ratio_a: Ratio for token A (smallest units)
        ratio_b: Ratio for token B (smallest units)
        tokens_swapped: True when canonical A was the caller's second token
    """
    token_a_mint: Pubkey
    token_b_mint: Pubkey
    ratio_a: int
    ratio_b: int
    tokens_swapped: bool = False

    @classmethod
    def create(
        cls,
        token_a_mint: PubkeyLike,
        token_b_mint: PubkeyLike,
        ratio_a: int,
        ratio_b: int,
    ) -> "PoolIdentity":
        """
        Build an identity with the mints in canonical order

        Args:
            token_a_mint: First mint as supplied by the caller
            token_b_mint: Second mint as supplied by the caller
            ratio_a: First ratio (kept in caller order)
            ratio_b: Second ratio (kept in caller order)

        Returns:
            PoolIdentity
        """
        mint_a = to_pubkey(token_a_mint, "token_a_mint")
        mint_b = to_pubkey(token_b_mint, "token_b_mint")
        swapped = bytes(mint_a) > bytes(mint_b)
        if swapped:
            mint_a, mint_b = mint_b, mint_a
        return cls(mint_a, mint_b, ratio_a, ratio_b, tokens_swapped=swapped)

    def __repr__(self) -> str:
        return (
            f"PoolIdentity({str(self.token_a_mint)[:8]}.../{str(self.token_b_mint)[:8]}..., "
            f"{self.ratio_a}:{self.ratio_b})"
        )


@dataclass(frozen=True)
class PoolAddresses:
    """
    All program derived accounts of a pool

    Computed on demand from a PoolIdentity; never cached.
    """
    identity: PoolIdentity
    pool_state: DerivedAddress
    token_a_vault: DerivedAddress
    token_b_vault: DerivedAddress
    lp_token_a_mint: DerivedAddress
    lp_token_b_mint: DerivedAddress

    @property
    def normalized_token_a(self) -> Pubkey:
        return self.identity.token_a_mint

    @property
    def normalized_token_b(self) -> Pubkey:
        return self.identity.token_b_mint

    @property
    def tokens_swapped(self) -> bool:
        """True when the caller's token order differs from the canonical order"""
        return self.identity.tokens_swapped

    def __repr__(self) -> str:
        return f"PoolAddresses(pool_state={self.pool_state.address}, {self.identity!r})"


@dataclass(frozen=True)
class PoolCreationCosts:
    """Lamport cost breakdown for creating a pool"""
    registration_fee: int
    rent_exemption: int

    @property
    def estimated_total(self) -> int:
        return self.registration_fee + self.rent_exemption
