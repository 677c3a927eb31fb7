"""
FixedRatioClient - Unified entry point for Fixed Ratio Trading operations

Provides a high-level interface to the Fixed Ratio Trading program through
functional modules (pools, liquidity, swap, treasury). Everything except the
three network queries works offline, without an RPC endpoint.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Optional, TYPE_CHECKING

from solders.pubkey import Pubkey

from .config import get_config
from .errors import ConfigurationError, format_error as _format_error, parse_error_code as _parse_error_code
from .infra import RpcClient, RpcClientConfig, TxBuilder
from .protocol import math, pda
from .protocol.constants import PROGRAM_ID
from .protocol.instructions import create_get_version_instruction
from .protocol.log_parser import parse_version_from_logs
from .types import PoolAddresses, TreasuryInfo, VersionInfo
from .types.common import PubkeyLike, to_pubkey

if TYPE_CHECKING:
    from .modules import PoolModule, LiquidityModule, SwapModule, TreasuryModule

logger = logging.getLogger(__name__)


class FixedRatioClient:
    """
    Fixed Ratio Trading client

    Provides access to operations through functional modules:
    - pools: Pool addresses, creation, existence check
    - liquidity: Deposit/withdraw instructions and LP estimates
    - swap: Swap instructions, quotes, slippage bounds
    - treasury: Treasury info, donations, fee consolidation

    Usage:
        # Offline: derive addresses and build instructions
        client = FixedRatioClient()
        pdas = client.get_pool_pdas(SOL_MINT, USDC_MINT, 1_000_000_000, 160_000_000)

        # Network queries
        client = FixedRatioClient(rpc_url="https://api.mainnet-beta.solana.com")
        print(client.get_contract_version())
        print(client.get_treasury_info())

        # Bring your own transport
        client = FixedRatioClient(rpc=my_transport)
    """

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        rpc=None,
        program_id: Optional[PubkeyLike] = None,
        rpc_config: Optional[RpcClientConfig] = None,
        simulation_payer: Optional[PubkeyLike] = None,
    ):
        """
        Initialize FixedRatioClient

        Args:
            rpc_url: RPC endpoint URL (defaults to SOLANA_RPC_URL)
            rpc: Transport object used instead of creating an RpcClient
            program_id: Program to target (defaults to FRT_PROGRAM_ID, then mainnet)
            rpc_config: Optional RPC configuration
            simulation_payer: Fee payer for simulations (defaults to a throw-away key)
        """
        cfg = get_config()
        self._rpc_url = rpc_url or cfg.rpc.url
        self._rpc_config = rpc_config
        self._rpc = rpc
        self._owns_rpc = rpc is None
        self._program_id = to_pubkey(program_id or cfg.program.program_id or PROGRAM_ID, "program_id")
        self._simulation_payer = simulation_payer
        self._tx_builder: Optional[TxBuilder] = None

        # Lazy-loaded modules
        self._pools: Optional["PoolModule"] = None
        self._liquidity: Optional["LiquidityModule"] = None
        self._swap: Optional["SwapModule"] = None
        self._treasury: Optional["TreasuryModule"] = None

    @property
    def program_id(self) -> Pubkey:
        """Program this client targets"""
        return self._program_id

    @property
    def rpc(self):
        """
        Access to the transport, created on first use

        Raises:
            ConfigurationError: If no transport was given and no RPC URL is set
        """
        if self._rpc is None:
            if not self._rpc_url:
                raise ConfigurationError.missing("SOLANA_RPC_URL")
            self._rpc = RpcClient(self._rpc_url, config=self._rpc_config)
        return self._rpc

    @property
    def tx_builder(self) -> TxBuilder:
        """Access to transaction builder (used for simulations)"""
        if self._tx_builder is None:
            self._tx_builder = TxBuilder(self.rpc, payer=self._simulation_payer)
        return self._tx_builder

    @property
    def pools(self) -> "PoolModule":
        """
        Pool module

        Provides:
        - pdas(token_a, token_b, ratio_a, ratio_b): Derived accounts
        - create_instruction(params): InitializePool
        - exists(pool_state): On-chain existence check
        """
        if self._pools is None:
            from .modules.pool import PoolModule
            self._pools = PoolModule(self)
        return self._pools

    @property
    def liquidity(self) -> "LiquidityModule":
        """
        Liquidity module

        Provides:
        - create_deposit_instruction(params): Deposit
        - create_withdraw_instruction(...): Withdraw
        - calculate_deposit_amounts(...): Both sides at the pool ratio
        """
        if self._liquidity is None:
            from .modules.liquidity import LiquidityModule
            self._liquidity = LiquidityModule(self)
        return self._liquidity

    @property
    def swap(self) -> "SwapModule":
        """
        Swap module

        Provides:
        - expected_output(...): Output at the pool ratio
        - min_amount_out(expected, slippage): Slippage bound
        - create_instruction(params): Swap
        """
        if self._swap is None:
            from .modules.swap import SwapModule
            self._swap = SwapModule(self)
        return self._swap

    @property
    def treasury(self) -> "TreasuryModule":
        """
        Treasury module

        Provides:
        - info(): Treasury state (network)
        - create_donation_instruction(params): DonateSol
        - create_consolidation_instruction(pools): ConsolidatePoolFees
        """
        if self._treasury is None:
            from .modules.treasury import TreasuryModule
            self._treasury = TreasuryModule(self)
        return self._treasury

    # =========================================================================
    # Network queries
    # =========================================================================

    def get_contract_version(self) -> VersionInfo:
        """
        Read the contract version by simulating GetVersion

        The program logs its version before any account checks, so logs are
        parsed even when the simulation reports an error.

        Returns:
            VersionInfo (str() gives the display form)

        Raises:
            RpcError: On transport failure
            ConfigurationError: If no RPC endpoint is configured
        """
        logger.info("Querying contract version")
        ix = create_get_version_instruction(self._program_id)
        result = self.tx_builder.simulate([ix])

        if result.err is not None:
            logger.debug(f"GetVersion simulation reported {result.err}, parsing logs anyway")

        version = parse_version_from_logs(result.logs)
        logger.info(f"Contract version: {version}")
        return version

    def get_treasury_info(self) -> TreasuryInfo:
        """Read treasury state (see TreasuryModule.info)"""
        return self.treasury.info()

    def does_pool_exist(self, pool_state_pda: PubkeyLike) -> bool:
        """Check whether a pool state account exists (see PoolModule.exists)"""
        return self.pools.exists(pool_state_pda)

    # =========================================================================
    # Offline helpers
    # =========================================================================

    def get_pool_pdas(
        self,
        token_a_mint: PubkeyLike,
        token_b_mint: PubkeyLike,
        ratio_a: int,
        ratio_b: int,
    ) -> PoolAddresses:
        """Derive every account of a pool for this client's program"""
        return pda.get_pool_pdas(token_a_mint, token_b_mint, ratio_a, ratio_b, self._program_id)

    @staticmethod
    def to_basis_points(amount, decimals: int) -> int:
        return math.to_basis_points(amount, decimals)

    @staticmethod
    def from_basis_points(units: int, decimals: int) -> Decimal:
        return math.from_basis_points(units, decimals)

    @staticmethod
    def parse_error_code(logs: Iterable[str]) -> Optional[int]:
        """First custom program error code in transaction logs, or None"""
        return _parse_error_code(logs)

    @staticmethod
    def format_error(error_code: int) -> str:
        """Human-readable message for a program error code"""
        return _format_error(error_code)

    def close(self):
        """Close the transport if this client created it"""
        if self._owns_rpc and self._rpc is not None:
            self._rpc.close()
            self._rpc = None
            self._tx_builder = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"FixedRatioClient(program_id={self._program_id}, rpc_url={self._rpc_url or None!r})"
