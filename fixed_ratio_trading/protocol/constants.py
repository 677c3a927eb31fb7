"""
Fixed Ratio Trading Program Constants
"""

from enum import IntEnum
from types import MappingProxyType
from typing import Mapping

# Fixed Ratio Trading program id (mainnet)
PROGRAM_ID = "4aeVqtWhrUh6wpX8acNj2hpWXKEQwxjA3PYb2sHhNyCn"

# On-chain program version this client was written against
PROGRAM_VERSION = "0.14.1040"

# Token Program
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"

# System Program
SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"

# Rent Sysvar
RENT_SYSVAR_ID = "SysvarRent111111111111111111111111111111111"

# Native SOL
LAMPORTS_PER_SOL = 1_000_000_000
NATIVE_DECIMALS = 9


class PoolInstruction(IntEnum):
    """Instruction opcodes (first byte of instruction data)"""
    # System management
    INITIALIZE_PROGRAM = 0
    PAUSE_SYSTEM = 1
    UNPAUSE_SYSTEM = 2
    GET_VERSION = 14

    # Pool management
    INITIALIZE_POOL = 3
    PAUSE_POOL = 4
    UNPAUSE_POOL = 5
    UPDATE_POOL_FEES = 6

    # Liquidity
    DEPOSIT = 7
    WITHDRAW = 8

    # Swap
    SWAP = 9
    SET_SWAP_OWNER_ONLY = 10

    # Treasury
    WITHDRAW_TREASURY_FEES = 11
    GET_TREASURY_INFO = 12
    DONATE_SOL = 13
    CONSOLIDATE_POOL_FEES = 15


# Flat protocol fees in lamports (quoted by the program, not computed)
FEES: Mapping[str, int] = MappingProxyType({
    "REGISTRATION_FEE": 1_150_000_000,      # 1.15 SOL for pool creation
    "DEPOSIT_WITHDRAWAL_FEE": 1_300_000,    # 0.0013 SOL for liquidity operations
    "SWAP_CONTRACT_FEE": 27_150,            # 0.00002715 SOL per swap
    "MIN_DONATION_AMOUNT": 100_000_000,     # 0.1 SOL minimum donation
})

# Compute unit limits per operation
COMPUTE_UNITS: Mapping[str, int] = MappingProxyType({
    "GET_VERSION": 50_000,
    "INITIALIZE_POOL": 500_000,
    "DEPOSIT": 310_000,
    "WITHDRAW": 310_000,
    "SWAP": 250_000,
    "GET_TREASURY_INFO": 50_000,
    "DONATE_SOL": 120_000,
    "CONSOLIDATE_POOL_FEES": 54_000,  # ~10 pools
})

# PDA seed tags
SEEDS: Mapping[str, bytes] = MappingProxyType({
    "SYSTEM_STATE": b"system_state",
    "MAIN_TREASURY": b"main_treasury",
    "POOL_STATE_V2": b"pool_state_v2",
    "TOKEN_A_VAULT": b"token_a_vault",
    "TOKEN_B_VAULT": b"token_b_vault",
    "LP_TOKEN_A_MINT": b"lp_token_a_mint",
    "LP_TOKEN_B_MINT": b"lp_token_b_mint",
})

# Wire limits
MAX_U64 = 2 ** 64 - 1
MAX_U32 = 2 ** 32 - 1
MAX_MESSAGE_BYTES = 200
MAX_CONSOLIDATION_POOLS = 20

# Client-side overflow ceilings
MAX_TRANSFER_AMOUNT = 10 ** 15
MAX_RATIO = 10 ** 18
MAX_DONATION_AMOUNT = 1000 * LAMPORTS_PER_SOL

# Slippage tolerance bounds (integer percent)
MIN_SLIPPAGE_PERCENT = 0
MAX_SLIPPAGE_PERCENT = 50

# Rough costs used for estimates only
ESTIMATED_POOL_RENT = 50_000_000   # ~0.05 SOL for account creation
BASE_TRANSACTION_FEE = 5_000       # lamports per signature
