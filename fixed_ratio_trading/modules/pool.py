"""
Pool Module

Pool address derivation, pool creation instructions and the on-chain
existence check.
"""

import logging
from decimal import Decimal
from typing import Any, Optional, TYPE_CHECKING

from solders.instruction import Instruction

if TYPE_CHECKING:
    from ..client import FixedRatioClient

from ..protocol import instructions, pda, validation
from ..protocol.math import estimate_pool_creation_costs
from ..types import PoolAddresses, PoolCreationCosts, PoolCreationParams, ValidationResult
from ..types.common import PubkeyLike, to_pubkey

logger = logging.getLogger(__name__)


def _has_account_data(account: Optional[dict]) -> bool:
    if not account:
        return False
    data: Any = account.get("data")
    # base64 encoding returns [payload, "base64"]
    if isinstance(data, (list, tuple)):
        data = data[0] if data else ""
    return bool(data)


class PoolModule:
    """
    Pool operations

    Provides:
    - pdas(): All derived accounts of a pool
    - create_instruction(): InitializePool instruction
    - exists(): Whether a pool state account is live (network)

    Usage:
        client = FixedRatioClient(rpc_url)

        pdas = client.pools.pdas(SOL_MINT, USDC_MINT, 1_000_000_000, 160_000_000)
        if not client.pools.exists(pdas.pool_state.address):
            ix = client.pools.create_instruction(params)
    """

    def __init__(self, client: "FixedRatioClient"):
        """
        Initialize pool module

        Args:
            client: FixedRatioClient instance
        """
        self._client = client

    def pdas(
        self,
        token_a_mint: PubkeyLike,
        token_b_mint: PubkeyLike,
        ratio_a: int,
        ratio_b: int,
    ) -> PoolAddresses:
        """Derive every account of a pool (mints in any order)"""
        return pda.get_pool_pdas(
            token_a_mint, token_b_mint, ratio_a, ratio_b, self._client.program_id
        )

    def create_instruction(self, params: PoolCreationParams) -> Instruction:
        """Build InitializePool for the client's program"""
        return instructions.create_initialize_pool_instruction(params, self._client.program_id)

    def create_with_display_amounts(
        self,
        user_authority: PubkeyLike,
        token_a_mint: PubkeyLike,
        token_b_mint: PubkeyLike,
        token_a_amount: Decimal,
        token_b_amount: Decimal,
        token_a_decimals: int,
        token_b_decimals: int,
    ) -> Instruction:
        """Build InitializePool from display amounts"""
        return instructions.create_pool_with_display_amounts(
            user_authority,
            token_a_mint,
            token_b_mint,
            token_a_amount,
            token_b_amount,
            token_a_decimals,
            token_b_decimals,
            self._client.program_id,
        )

    def exists(self, pool_state_pda: PubkeyLike) -> bool:
        """
        Check whether a pool state account exists on-chain

        Args:
            pool_state_pda: Pool state address

        Returns:
            True if the account is present and holds data

        Raises:
            RpcError: On transport failure
            ConfigurationError: If no RPC endpoint is configured
        """
        address = str(to_pubkey(pool_state_pda, "pool_state_pda"))
        logger.info(f"Checking pool existence: {address}")
        account = self._client.rpc.get_account_info(address)
        exists = _has_account_data(account)
        logger.debug(f"Pool {address} exists={exists}")
        return exists

    def creation_costs(self) -> PoolCreationCosts:
        """Registration fee plus estimated rent"""
        return estimate_pool_creation_costs()

    def validate(self, params: PoolCreationParams) -> ValidationResult:
        return validation.validate_pool_creation_params(params)
