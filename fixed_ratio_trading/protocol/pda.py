"""
Program Derived Address derivation for the Fixed Ratio Trading program

Every account the program owns (system state, treasury, pool state, vaults
and LP mints) lives at an address computed from fixed seed tags plus the
pool identity. Derivation is pure: same program id and seeds, same address.
"""

import logging
from typing import Optional, Sequence, Tuple

from solders.pubkey import Pubkey

from .constants import PROGRAM_ID, SEEDS
from .encoding import pack_u64
from ..errors import DerivationFailure
from ..types.common import PubkeyLike, to_pubkey
from ..types.pool import DerivedAddress, PoolIdentity, PoolAddresses

logger = logging.getLogger(__name__)

# Runtime limits for create_program_address
MAX_SEEDS = 16
MAX_SEED_LEN = 32


def _resolve_program_id(program_id: Optional[PubkeyLike]) -> Pubkey:
    if program_id is None:
        return Pubkey.from_string(PROGRAM_ID)
    return to_pubkey(program_id, "program_id")


def create_program_address(seeds: Sequence[bytes], program_id: Pubkey) -> Optional[Pubkey]:
    """
    Address for seeds with the bump already appended

    Args:
        seeds: Seed byte strings, bump last
        program_id: Owning program

    Returns:
        Address, or None if the seeds produce no valid off-curve address
    """
    try:
        return Pubkey.create_program_address(list(seeds), program_id)
    except Exception:
        # solders raises PubkeyError when the hash lands on the curve
        return None


def find_program_address(
    seeds: Sequence[bytes],
    program_id: Optional[PubkeyLike] = None,
) -> DerivedAddress:
    """
    Find the canonical program derived address for seeds

    Tries bump seeds from 255 down to 0 and returns the first off-curve
    address.

    Args:
        seeds: Seed byte strings (at most 15, each at most 32 bytes)
        program_id: Owning program (defaults to the mainnet program)

    Returns:
        DerivedAddress(address, bump)

    Raises:
        DerivationFailure: Seeds break the runtime limits or no bump works
    """
    pid = _resolve_program_id(program_id)
    seeds = [bytes(s) for s in seeds]

    # The bump takes one seed slot
    if len(seeds) >= MAX_SEEDS:
        raise DerivationFailure.invalid_seeds(
            f"{len(seeds)} seeds given, at most {MAX_SEEDS - 1} allowed with the bump"
        )
    for i, seed in enumerate(seeds):
        if len(seed) > MAX_SEED_LEN:
            raise DerivationFailure.invalid_seeds(
                f"seed {i} is {len(seed)} bytes, max is {MAX_SEED_LEN}"
            )

    for bump in range(255, -1, -1):
        address = create_program_address(seeds + [bytes([bump])], pid)
        if address is not None:
            return DerivedAddress(address, bump)

    raise DerivationFailure.exhausted(str(pid))


def normalize_token_order(token_a: PubkeyLike, token_b: PubkeyLike) -> Tuple[Pubkey, Pubkey]:
    """
    Order two mints canonically (lower byte sequence first)

    Args:
        token_a: First mint
        token_b: Second mint

    Returns:
        (lower, higher) mints
    """
    mint_a = to_pubkey(token_a, "token_a")
    mint_b = to_pubkey(token_b, "token_b")
    if bytes(mint_a) < bytes(mint_b):
        return mint_a, mint_b
    return mint_b, mint_a


def derive_system_state_pda(program_id: Optional[PubkeyLike] = None) -> DerivedAddress:
    """Derive the global system state account"""
    return find_program_address([SEEDS["SYSTEM_STATE"]], program_id)


def derive_main_treasury_pda(program_id: Optional[PubkeyLike] = None) -> DerivedAddress:
    """Derive the main treasury account"""
    return find_program_address([SEEDS["MAIN_TREASURY"]], program_id)


def derive_pool_state_pda(
    token_a_mint: PubkeyLike,
    token_b_mint: PubkeyLike,
    ratio_a: int,
    ratio_b: int,
    program_id: Optional[PubkeyLike] = None,
) -> DerivedAddress:
    """
    Derive the pool state account of a token pair and ratio

    Mints are put in canonical order; ratios stay in the order given, so
    passing the mints either way round with the same ratios yields the same
    pool.

    Args:
        token_a_mint: First mint
        token_b_mint: Second mint
        ratio_a: First ratio (u64, smallest units)
        ratio_b: Second ratio (u64, smallest units)
        program_id: Owning program (defaults to mainnet)

    Returns:
        DerivedAddress of the pool state
    """
    lo, hi = normalize_token_order(token_a_mint, token_b_mint)
    seeds = [
        SEEDS["POOL_STATE_V2"],
        bytes(lo),
        bytes(hi),
        pack_u64(ratio_a, "ratio_a"),
        pack_u64(ratio_b, "ratio_b"),
    ]
    derived = find_program_address(seeds, program_id)
    logger.debug(f"Pool state PDA {derived.address} (bump {derived.bump}) for {lo}/{hi} {ratio_a}:{ratio_b}")
    return derived


def derive_token_vault_pdas(
    pool_state: PubkeyLike,
    program_id: Optional[PubkeyLike] = None,
) -> Tuple[DerivedAddress, DerivedAddress]:
    """
    Derive the two token vaults of a pool

    Returns:
        (token A vault, token B vault)
    """
    pool = bytes(to_pubkey(pool_state, "pool_state"))
    return (
        find_program_address([SEEDS["TOKEN_A_VAULT"], pool], program_id),
        find_program_address([SEEDS["TOKEN_B_VAULT"], pool], program_id),
    )


def derive_lp_token_mint_pdas(
    pool_state: PubkeyLike,
    program_id: Optional[PubkeyLike] = None,
) -> Tuple[DerivedAddress, DerivedAddress]:
    """
    Derive the two LP token mints of a pool

    Returns:
        (LP mint for token A, LP mint for token B)
    """
    pool = bytes(to_pubkey(pool_state, "pool_state"))
    return (
        find_program_address([SEEDS["LP_TOKEN_A_MINT"], pool], program_id),
        find_program_address([SEEDS["LP_TOKEN_B_MINT"], pool], program_id),
    )


def get_pool_pdas(
    token_a_mint: PubkeyLike,
    token_b_mint: PubkeyLike,
    ratio_a: int,
    ratio_b: int,
    program_id: Optional[PubkeyLike] = None,
) -> PoolAddresses:
    """
    Derive every account of a pool in one call

    Args:
        token_a_mint: First mint (any order)
        token_b_mint: Second mint (any order)
        ratio_a: First ratio
        ratio_b: Second ratio
        program_id: Owning program (defaults to mainnet)

    Returns:
        PoolAddresses including the canonical mint order
    """
    identity = PoolIdentity.create(token_a_mint, token_b_mint, ratio_a, ratio_b)
    if identity.tokens_swapped:
        logger.debug(
            f"Token order normalized: {identity.token_a_mint} is token A, "
            f"{identity.token_b_mint} is token B"
        )

    pool_state = derive_pool_state_pda(
        identity.token_a_mint, identity.token_b_mint, ratio_a, ratio_b, program_id
    )
    vault_a, vault_b = derive_token_vault_pdas(pool_state.address, program_id)
    lp_a, lp_b = derive_lp_token_mint_pdas(pool_state.address, program_id)

    return PoolAddresses(
        identity=identity,
        pool_state=pool_state,
        token_a_vault=vault_a,
        token_b_vault=vault_b,
        lp_token_a_mint=lp_a,
        lp_token_b_mint=lp_b,
    )
