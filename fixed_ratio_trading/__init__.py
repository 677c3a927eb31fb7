"""
Fixed Ratio Trading - Python client for the Fixed Ratio Trading Solana program

Provides:
- Program derived address derivation for pools, vaults and LP mints
- Instruction builders (pool creation, deposit, withdraw, swap, donation,
  fee consolidation, version and treasury queries)
- Integer ratio math for swaps, liquidity and slippage
- Simulation log parsing for treasury state and contract version
- Parameter validation

Only version and treasury queries and the pool existence check touch the
network; nothing in this package signs or sends transactions.
"""

from .client import FixedRatioClient
from .protocol.constants import PROGRAM_ID, PROGRAM_VERSION, PoolInstruction, FEES, COMPUTE_UNITS, SEEDS
from .types import (
    TokenInfo,
    DerivedAddress,
    PoolIdentity,
    PoolAddresses,
    PoolCreationCosts,
    PoolCreationParams,
    LiquidityParams,
    SwapParams,
    DonationParams,
    ValidationResult,
    SwapResult,
    DepositAmounts,
    DonationCost,
    TreasuryInfo,
    VersionInfo,
    SimulationResult,
)
from .errors import (
    ErrorCode,
    FixedRatioError,
    RpcError,
    SimulationFailed,
    DerivationFailure,
    RatioMathError,
    ParameterError,
    ConfigurationError,
    ProgramError,
    format_error,
    parse_error_code,
)
from .infra import RpcClient, RpcClientConfig, TxBuilder

__version__ = "1.0.0"

__all__ = [
    # Client
    "FixedRatioClient",
    # Constants
    "PROGRAM_ID",
    "PROGRAM_VERSION",
    "PoolInstruction",
    "FEES",
    "COMPUTE_UNITS",
    "SEEDS",
    # Types
    "TokenInfo",
    "DerivedAddress",
    "PoolIdentity",
    "PoolAddresses",
    "PoolCreationCosts",
    "PoolCreationParams",
    "LiquidityParams",
    "SwapParams",
    "DonationParams",
    "ValidationResult",
    "SwapResult",
    "DepositAmounts",
    "DonationCost",
    "TreasuryInfo",
    "VersionInfo",
    "SimulationResult",
    # Errors
    "ErrorCode",
    "FixedRatioError",
    "RpcError",
    "SimulationFailed",
    "DerivationFailure",
    "RatioMathError",
    "ParameterError",
    "ConfigurationError",
    "ProgramError",
    "format_error",
    "parse_error_code",
    # Infrastructure
    "RpcClient",
    "RpcClientConfig",
    "TxBuilder",
]
