"""
Functional modules for FixedRatioClient

Provides high-level operations:
- PoolModule: Pool addresses, creation, existence check
- LiquidityModule: Deposits, withdrawals, LP share estimates
- SwapModule: Swaps, quotes, slippage bounds
- TreasuryModule: Treasury info, donations, fee consolidation
"""

from .pool import PoolModule
from .liquidity import LiquidityModule
from .swap import SwapModule
from .treasury import TreasuryModule

__all__ = [
    "PoolModule",
    "LiquidityModule",
    "SwapModule",
    "TreasuryModule",
]
