"""
Fixed Ratio Trading Instruction Builders

Instruction data is a one-byte opcode followed by fixed-width little-endian
fields. Account lists follow the exact order the program reads them in and
must never be reordered.

Builders only construct instructions; they never sign, send or simulate.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from solders.instruction import Instruction, AccountMeta
from solders.pubkey import Pubkey

from .constants import (
    PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    RENT_SYSVAR_ID,
    NATIVE_DECIMALS,
    MAX_MESSAGE_BYTES,
    MAX_CONSOLIDATION_POOLS,
    PoolInstruction,
)
from .encoding import pack_u64, pack_u32
from .math import apply_slippage, calculate_swap_output, to_basis_points, from_basis_points
from .pda import (
    derive_system_state_pda,
    derive_main_treasury_pda,
    get_pool_pdas,
)
from ..types.common import PubkeyLike, to_pubkey
from ..types.params import PoolCreationParams, LiquidityParams, SwapParams, DonationParams

logger = logging.getLogger(__name__)


def encode_message(message: str, max_bytes: int = MAX_MESSAGE_BYTES) -> bytes:
    """
    Encode a donation message as u32 length + UTF-8 bytes

    Messages longer than max_bytes are cut back to the last whole character
    that fits.

    Args:
        message: Message text
        max_bytes: Byte limit for the encoded text

    Returns:
        Length-prefixed message bytes
    """
    encoded = message.encode("utf-8")
    if len(encoded) > max_bytes:
        # Dropping the partial trailing sequence leaves a valid prefix
        encoded = encoded[:max_bytes].decode("utf-8", errors="ignore").encode("utf-8")
        logger.debug(f"Donation message truncated to {len(encoded)} bytes")
    return pack_u32(len(encoded), "message_length") + encoded


def _program_pubkey(program_id: Optional[PubkeyLike]) -> Pubkey:
    return to_pubkey(program_id if program_id is not None else PROGRAM_ID, "program_id")


def _default_slippage() -> int:
    from ..config import get_config
    return get_config().trading.default_slippage_percent


# =============================================================================
# Pool
# =============================================================================

def create_initialize_pool_instruction(
    params: PoolCreationParams,
    program_id: Optional[PubkeyLike] = None,
) -> Instruction:
    """
    Build InitializePool instruction

    Anyone may create a pool; the creator pays the registration fee.

    Args:
        params: Pool creation parameters (mints in any order)
        program_id: Program to target (defaults to mainnet)

    Returns:
        InitializePool instruction
    """
    pid = _program_pubkey(program_id)
    user = to_pubkey(params.user_authority, "user_authority")

    pdas = get_pool_pdas(
        params.token_a_mint, params.token_b_mint, params.ratio_a, params.ratio_b, pid
    )
    system_state = derive_system_state_pda(pid)
    main_treasury = derive_main_treasury_pda(pid)

    data = bytearray()
    data.append(PoolInstruction.INITIALIZE_POOL)
    data.extend(pack_u64(params.ratio_a, "ratio_a"))
    data.extend(pack_u64(params.ratio_b, "ratio_b"))

    accounts = [
        AccountMeta(user, is_signer=True, is_writable=True),                           # 0: user authority
        AccountMeta(Pubkey.from_string(SYSTEM_PROGRAM_ID), is_signer=False, is_writable=False),  # 1: system program
        AccountMeta(system_state.address, is_signer=False, is_writable=False),         # 2: system state
        AccountMeta(pdas.pool_state.address, is_signer=False, is_writable=True),       # 3: pool state
        AccountMeta(Pubkey.from_string(TOKEN_PROGRAM_ID), is_signer=False, is_writable=False),   # 4: token program
        AccountMeta(main_treasury.address, is_signer=False, is_writable=True),         # 5: main treasury
        AccountMeta(Pubkey.from_string(RENT_SYSVAR_ID), is_signer=False, is_writable=False),     # 6: rent sysvar
        AccountMeta(pdas.normalized_token_a, is_signer=False, is_writable=False),      # 7: token A mint
        AccountMeta(pdas.normalized_token_b, is_signer=False, is_writable=False),      # 8: token B mint
        AccountMeta(pdas.token_a_vault.address, is_signer=False, is_writable=True),    # 9: token A vault
        AccountMeta(pdas.token_b_vault.address, is_signer=False, is_writable=True),    # 10: token B vault
        AccountMeta(pdas.lp_token_a_mint.address, is_signer=False, is_writable=True),  # 11: LP token A mint
        AccountMeta(pdas.lp_token_b_mint.address, is_signer=False, is_writable=True),  # 12: LP token B mint
    ]

    logger.debug(
        f"InitializePool: pool={pdas.pool_state.address} ratio={params.ratio_a}:{params.ratio_b}"
    )
    return Instruction(pid, bytes(data), accounts)


def create_pool_with_display_amounts(
    user_authority: PubkeyLike,
    token_a_mint: PubkeyLike,
    token_b_mint: PubkeyLike,
    token_a_amount: Decimal,
    token_b_amount: Decimal,
    token_a_decimals: int,
    token_b_decimals: int,
    program_id: Optional[PubkeyLike] = None,
) -> Instruction:
    """
    Build InitializePool from display amounts

    Example: 1 SOL = 160 USDC is token_a_amount=1, token_b_amount=160 with
    decimals 9 and 6.
    """
    params = PoolCreationParams(
        token_a_mint=token_a_mint,
        token_b_mint=token_b_mint,
        ratio_a=to_basis_points(token_a_amount, token_a_decimals),
        ratio_b=to_basis_points(token_b_amount, token_b_decimals),
        user_authority=user_authority,
    )
    return create_initialize_pool_instruction(params, program_id)


# =============================================================================
# Liquidity
# =============================================================================

def create_deposit_instruction(
    params: LiquidityParams,
    program_id: Optional[PubkeyLike] = None,
) -> Instruction:
    """
    Build Deposit instruction

    Pool vaults and LP mints are resolved by the program from the deposit
    mint and pool state.

    Args:
        params: Deposit parameters
        program_id: Program to target (defaults to mainnet)

    Returns:
        Deposit instruction
    """
    pid = _program_pubkey(program_id)
    mint = to_pubkey(params.deposit_token_mint, "deposit_token_mint")
    system_state = derive_system_state_pda(pid)
    main_treasury = derive_main_treasury_pda(pid)

    data = bytearray()
    data.append(PoolInstruction.DEPOSIT)
    data.extend(bytes(mint))
    data.extend(pack_u64(params.deposit_amount, "deposit_amount"))

    accounts = [
        AccountMeta(to_pubkey(params.user_authority, "user_authority"), is_signer=True, is_writable=True),  # 0: user
        AccountMeta(system_state.address, is_signer=False, is_writable=False),     # 1: system state
        AccountMeta(to_pubkey(params.pool_state_pda, "pool_state_pda"), is_signer=False, is_writable=True),  # 2: pool state
        AccountMeta(to_pubkey(params.user_token_account, "user_token_account"), is_signer=False, is_writable=True),  # 3: user token account
        AccountMeta(Pubkey.from_string(TOKEN_PROGRAM_ID), is_signer=False, is_writable=False),   # 4: token program
        AccountMeta(Pubkey.from_string(SYSTEM_PROGRAM_ID), is_signer=False, is_writable=False),  # 5: system program
        AccountMeta(main_treasury.address, is_signer=False, is_writable=True),     # 6: main treasury
        AccountMeta(mint, is_signer=False, is_writable=False),                     # 7: deposit mint
        AccountMeta(to_pubkey(params.user_lp_account, "user_lp_account"), is_signer=False, is_writable=True),  # 8: user LP account
    ]

    logger.debug(f"Deposit: amount={params.deposit_amount} mint={mint}")
    return Instruction(pid, bytes(data), accounts)


def create_deposit_instruction_with_display_amount(
    pool_state_pda: PubkeyLike,
    deposit_amount_display: Decimal,
    token_decimals: int,
    deposit_token_mint: PubkeyLike,
    user_authority: PubkeyLike,
    user_token_account: PubkeyLike,
    user_lp_account: PubkeyLike,
    program_id: Optional[PubkeyLike] = None,
) -> Instruction:
    """Build Deposit from a display amount"""
    params = LiquidityParams(
        pool_state_pda=pool_state_pda,
        deposit_amount=to_basis_points(deposit_amount_display, token_decimals),
        deposit_token_mint=deposit_token_mint,
        user_authority=user_authority,
        user_token_account=user_token_account,
        user_lp_account=user_lp_account,
    )
    return create_deposit_instruction(params, program_id)


def create_withdraw_instruction(
    pool_state_pda: PubkeyLike,
    withdraw_amount: int,
    withdraw_token_mint: PubkeyLike,
    user_authority: PubkeyLike,
    user_lp_account: PubkeyLike,
    user_token_account: PubkeyLike,
    program_id: Optional[PubkeyLike] = None,
) -> Instruction:
    """
    Build Withdraw instruction

    Args:
        pool_state_pda: Pool state address
        withdraw_amount: LP tokens to burn
        withdraw_token_mint: Token to receive (A or B)
        user_authority: LP holder
        user_lp_account: LP token account to burn from
        user_token_account: Token account receiving funds
        program_id: Program to target (defaults to mainnet)

    Returns:
        Withdraw instruction
    """
    pid = _program_pubkey(program_id)
    mint = to_pubkey(withdraw_token_mint, "withdraw_token_mint")
    system_state = derive_system_state_pda(pid)
    main_treasury = derive_main_treasury_pda(pid)

    data = bytearray()
    data.append(PoolInstruction.WITHDRAW)
    data.extend(bytes(mint))
    data.extend(pack_u64(withdraw_amount, "withdraw_amount"))

    accounts = [
        AccountMeta(to_pubkey(user_authority, "user_authority"), is_signer=True, is_writable=True),  # 0: user
        AccountMeta(system_state.address, is_signer=False, is_writable=False),     # 1: system state
        AccountMeta(to_pubkey(pool_state_pda, "pool_state_pda"), is_signer=False, is_writable=True),  # 2: pool state
        AccountMeta(to_pubkey(user_lp_account, "user_lp_account"), is_signer=False, is_writable=True),  # 3: user LP account
        AccountMeta(to_pubkey(user_token_account, "user_token_account"), is_signer=False, is_writable=True),  # 4: user token account
        AccountMeta(Pubkey.from_string(TOKEN_PROGRAM_ID), is_signer=False, is_writable=False),   # 5: token program
        AccountMeta(Pubkey.from_string(SYSTEM_PROGRAM_ID), is_signer=False, is_writable=False),  # 6: system program
        AccountMeta(main_treasury.address, is_signer=False, is_writable=True),     # 7: main treasury
        AccountMeta(mint, is_signer=False, is_writable=False),                     # 8: withdraw mint
    ]

    logger.debug(f"Withdraw: lp_amount={withdraw_amount} mint={mint}")
    return Instruction(pid, bytes(data), accounts)


# =============================================================================
# Swap
# =============================================================================

def create_swap_instruction(
    params: SwapParams,
    program_id: Optional[PubkeyLike] = None,
) -> Instruction:
    """
    Build Swap instruction

    The minimum output written on-chain is the expected output reduced by
    the slippage tolerance (config default when params leave it unset).

    Args:
        params: Swap parameters
        program_id: Program to target (defaults to mainnet)

    Returns:
        Swap instruction
    """
    pid = _program_pubkey(program_id)
    mint = to_pubkey(params.input_token_mint, "input_token_mint")
    system_state = derive_system_state_pda(pid)
    main_treasury = derive_main_treasury_pda(pid)

    slippage = params.slippage_tolerance
    if slippage is None:
        slippage = _default_slippage()
    min_amount_out = apply_slippage(params.expected_amount_out, slippage)

    data = bytearray()
    data.append(PoolInstruction.SWAP)
    data.extend(bytes(mint))
    data.extend(pack_u64(params.amount_in, "amount_in"))
    data.extend(pack_u64(min_amount_out, "min_amount_out"))

    accounts = [
        AccountMeta(to_pubkey(params.user_authority, "user_authority"), is_signer=True, is_writable=True),  # 0: user
        AccountMeta(system_state.address, is_signer=False, is_writable=False),     # 1: system state
        AccountMeta(to_pubkey(params.pool_state_pda, "pool_state_pda"), is_signer=False, is_writable=True),  # 2: pool state
        AccountMeta(to_pubkey(params.user_input_account, "user_input_account"), is_signer=False, is_writable=True),  # 3: user input account
        AccountMeta(to_pubkey(params.user_output_account, "user_output_account"), is_signer=False, is_writable=True),  # 4: user output account
        AccountMeta(Pubkey.from_string(TOKEN_PROGRAM_ID), is_signer=False, is_writable=False),   # 5: token program
        AccountMeta(Pubkey.from_string(SYSTEM_PROGRAM_ID), is_signer=False, is_writable=False),  # 6: system program
        AccountMeta(main_treasury.address, is_signer=False, is_writable=True),     # 7: main treasury
        AccountMeta(mint, is_signer=False, is_writable=False),                     # 8: input mint
    ]

    logger.debug(
        f"Swap: amount_in={params.amount_in} expected_out={params.expected_amount_out} "
        f"min_out={min_amount_out} slippage={slippage}%"
    )
    return Instruction(pid, bytes(data), accounts)


def create_swap_instruction_with_display_amounts(
    pool_state_pda: PubkeyLike,
    amount_in_display: Decimal,
    expected_amount_out_display: Decimal,
    input_token_decimals: int,
    output_token_decimals: int,
    input_token_mint: PubkeyLike,
    user_authority: PubkeyLike,
    user_input_account: PubkeyLike,
    user_output_account: PubkeyLike,
    slippage_tolerance: Optional[int] = None,
    program_id: Optional[PubkeyLike] = None,
) -> Instruction:
    """Build Swap from display amounts"""
    params = SwapParams(
        pool_state_pda=pool_state_pda,
        amount_in=to_basis_points(amount_in_display, input_token_decimals),
        expected_amount_out=to_basis_points(expected_amount_out_display, output_token_decimals),
        input_token_mint=input_token_mint,
        user_authority=user_authority,
        user_input_account=user_input_account,
        user_output_account=user_output_account,
        slippage_tolerance=slippage_tolerance,
    )
    return create_swap_instruction(params, program_id)


def estimate_swap_output_display(
    amount_in_display: Decimal,
    input_token_decimals: int,
    output_token_decimals: int,
    pool_ratio_a: int,
    pool_ratio_b: int,
    is_input_token_a: bool,
) -> Decimal:
    """
    Expected swap output in display units

    Returns:
        Output amount as Decimal
    """
    amount_in = to_basis_points(amount_in_display, input_token_decimals)
    if is_input_token_a:
        amount_out = calculate_swap_output(amount_in, pool_ratio_a, pool_ratio_b)
    else:
        amount_out = calculate_swap_output(amount_in, pool_ratio_b, pool_ratio_a)
    return from_basis_points(amount_out, output_token_decimals)


# =============================================================================
# Treasury
# =============================================================================

def create_donate_sol_instruction(
    params: DonationParams,
    program_id: Optional[PubkeyLike] = None,
) -> Instruction:
    """
    Build DonateSol instruction

    Args:
        params: Donation parameters (message is truncated to 200 bytes)
        program_id: Program to target (defaults to mainnet)

    Returns:
        DonateSol instruction
    """
    pid = _program_pubkey(program_id)
    system_state = derive_system_state_pda(pid)
    main_treasury = derive_main_treasury_pda(pid)

    data = bytearray()
    data.append(PoolInstruction.DONATE_SOL)
    data.extend(pack_u64(params.amount, "amount"))
    data.extend(encode_message(params.message or ""))

    accounts = [
        AccountMeta(to_pubkey(params.donor, "donor"), is_signer=True, is_writable=True),  # 0: donor
        AccountMeta(main_treasury.address, is_signer=False, is_writable=True),     # 1: main treasury
        AccountMeta(system_state.address, is_signer=False, is_writable=False),     # 2: system state
        AccountMeta(Pubkey.from_string(SYSTEM_PROGRAM_ID), is_signer=False, is_writable=False),  # 3: system program
    ]

    logger.debug(f"DonateSol: amount={params.amount}")
    return Instruction(pid, bytes(data), accounts)


def create_donation_instruction_with_display_amount(
    donor: PubkeyLike,
    amount_sol: Decimal,
    message: str = "",
    program_id: Optional[PubkeyLike] = None,
) -> Instruction:
    """Build DonateSol from an amount in SOL"""
    params = DonationParams(
        donor=donor,
        amount=to_basis_points(amount_sol, NATIVE_DECIMALS),
        message=message,
    )
    return create_donate_sol_instruction(params, program_id)


def create_consolidate_pool_fees_instruction(
    pool_state_pdas: Sequence[PubkeyLike],
    program_id: Optional[PubkeyLike] = None,
) -> Instruction:
    """
    Build ConsolidatePoolFees instruction

    Anyone may trigger consolidation. At most 20 pools fit in one
    instruction; extra pools are dropped.

    Args:
        pool_state_pdas: Pool state addresses to collect fees from
        program_id: Program to target (defaults to mainnet)

    Returns:
        ConsolidatePoolFees instruction
    """
    pid = _program_pubkey(program_id)
    system_state = derive_system_state_pda(pid)
    main_treasury = derive_main_treasury_pda(pid)

    pools: List[Pubkey] = [to_pubkey(p, "pool_state_pda") for p in pool_state_pdas]
    if len(pools) > MAX_CONSOLIDATION_POOLS:
        logger.warning(
            f"ConsolidatePoolFees: {len(pools)} pools given, only the first "
            f"{MAX_CONSOLIDATION_POOLS} are included"
        )
        pools = pools[:MAX_CONSOLIDATION_POOLS]

    data = bytearray()
    data.append(PoolInstruction.CONSOLIDATE_POOL_FEES)
    data.extend(pack_u32(len(pools), "pool_count"))

    accounts = [
        AccountMeta(system_state.address, is_signer=False, is_writable=False),     # 0: system state
        AccountMeta(main_treasury.address, is_signer=False, is_writable=True),     # 1: main treasury
        AccountMeta(Pubkey.from_string(SYSTEM_PROGRAM_ID), is_signer=False, is_writable=False),  # 2: system program
    ]
    # 3..: pool states
    accounts.extend(AccountMeta(pool, is_signer=False, is_writable=True) for pool in pools)

    return Instruction(pid, bytes(data), accounts)


# =============================================================================
# Read-only queries
# =============================================================================

def create_get_version_instruction(program_id: Optional[PubkeyLike] = None) -> Instruction:
    """Build GetVersion instruction (no accounts)"""
    pid = _program_pubkey(program_id)
    return Instruction(pid, bytes([PoolInstruction.GET_VERSION]), [])


def create_get_treasury_info_instruction(program_id: Optional[PubkeyLike] = None) -> Instruction:
    """Build GetTreasuryInfo instruction"""
    pid = _program_pubkey(program_id)
    system_state = derive_system_state_pda(pid)
    main_treasury = derive_main_treasury_pda(pid)

    accounts = [
        AccountMeta(system_state.address, is_signer=False, is_writable=False),   # 0: system state
        AccountMeta(main_treasury.address, is_signer=False, is_writable=False),  # 1: main treasury
    ]
    return Instruction(pid, bytes([PoolInstruction.GET_TREASURY_INFO]), accounts)
