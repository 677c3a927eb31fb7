"""
Type definitions for the Fixed Ratio Trading client
"""

from .common import PubkeyLike, TokenInfo, to_pubkey
from .pool import DerivedAddress, PoolIdentity, PoolAddresses, PoolCreationCosts
from .params import PoolCreationParams, LiquidityParams, SwapParams, DonationParams
from .result import (
    ValidationResult,
    SwapResult,
    DepositAmounts,
    DonationCost,
    TreasuryInfo,
    VersionInfo,
    SimulationResult,
)

__all__ = [
    # Common types
    "PubkeyLike",
    "TokenInfo",
    "to_pubkey",
    # Pool types
    "DerivedAddress",
    "PoolIdentity",
    "PoolAddresses",
    "PoolCreationCosts",
    # Parameters
    "PoolCreationParams",
    "LiquidityParams",
    "SwapParams",
    "DonationParams",
    # Results
    "ValidationResult",
    "SwapResult",
    "DepositAmounts",
    "DonationCost",
    "TreasuryInfo",
    "VersionInfo",
    "SimulationResult",
]
