"""
Liquidity Module

Deposit and withdraw instructions plus the LP share estimates around them.
All methods are offline.
"""

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from solders.instruction import Instruction

if TYPE_CHECKING:
    from ..client import FixedRatioClient

from ..protocol import instructions, math, validation
from ..types import DepositAmounts, LiquidityParams, ValidationResult
from ..types.common import PubkeyLike

logger = logging.getLogger(__name__)


class LiquidityModule:
    """
    Liquidity operations

    Provides:
    - create_deposit_instruction(params): Deposit instruction
    - create_withdraw_instruction(...): Withdraw instruction
    - calculate_deposit_amounts(...): Both sides of a deposit at the pool ratio
    - estimate_lp_tokens(...) / estimate_tokens_from_withdraw(...): LP share estimates

    Usage:
        client = FixedRatioClient()

        amounts = client.liquidity.calculate_deposit_amounts(
            1_000_000_000, SOL_MINT, ratio_a, ratio_b, token_a_mint
        )
        ix = client.liquidity.create_deposit_instruction(params)
    """

    def __init__(self, client: "FixedRatioClient"):
        """
        Initialize liquidity module

        Args:
            client: FixedRatioClient instance
        """
        self._client = client

    def create_deposit_instruction(self, params: LiquidityParams) -> Instruction:
        """Build Deposit for the client's program"""
        logger.debug(
            f"Deposit {params.deposit_amount} of {params.deposit_token_mint} into pool {params.pool_state_pda}"
        )
        return instructions.create_deposit_instruction(params, self._client.program_id)

    def create_deposit_instruction_with_display_amount(
        self,
        pool_state_pda: PubkeyLike,
        deposit_amount_display: Decimal,
        token_decimals: int,
        deposit_token_mint: PubkeyLike,
        user_authority: PubkeyLike,
        user_token_account: PubkeyLike,
        user_lp_account: PubkeyLike,
    ) -> Instruction:
        """Build Deposit from a display amount"""
        return instructions.create_deposit_instruction_with_display_amount(
            pool_state_pda,
            deposit_amount_display,
            token_decimals,
            deposit_token_mint,
            user_authority,
            user_token_account,
            user_lp_account,
            self._client.program_id,
        )

    def create_withdraw_instruction(
        self,
        pool_state_pda: PubkeyLike,
        withdraw_amount: int,
        withdraw_token_mint: PubkeyLike,
        user_authority: PubkeyLike,
        user_lp_account: PubkeyLike,
        user_token_account: PubkeyLike,
    ) -> Instruction:
        """
        Build Withdraw for the client's program

        Args:
            pool_state_pda: Pool state address
            withdraw_amount: LP tokens to burn
            withdraw_token_mint: Token to receive (A or B)
            user_authority: LP holder
            user_lp_account: LP token account
            user_token_account: Token account receiving funds

        Returns:
            Withdraw instruction
        """
        logger.debug(f"Withdraw {withdraw_amount} LP for {withdraw_token_mint} from pool {pool_state_pda}")
        return instructions.create_withdraw_instruction(
            pool_state_pda,
            withdraw_amount,
            withdraw_token_mint,
            user_authority,
            user_lp_account,
            user_token_account,
            self._client.program_id,
        )

    def required_liquidity(self, deposit_amount: int, deposit_token_ratio: int, other_token_ratio: int) -> int:
        return math.calculate_required_liquidity(deposit_amount, deposit_token_ratio, other_token_ratio)

    def calculate_deposit_amounts(
        self,
        deposit_amount: int,
        deposit_token_mint: PubkeyLike,
        pool_ratio_a: int,
        pool_ratio_b: int,
        token_a_mint: PubkeyLike,
    ) -> DepositAmounts:
        return math.calculate_deposit_amounts(
            deposit_amount, deposit_token_mint, pool_ratio_a, pool_ratio_b, token_a_mint
        )

    def estimate_lp_tokens(self, deposit_amount: int, pool_balance: int, lp_supply: int) -> int:
        """Approximate LP tokens minted for a deposit"""
        return math.estimate_lp_tokens_from_deposit(deposit_amount, pool_balance, lp_supply)

    def estimate_tokens_from_withdraw(self, lp_amount: int, pool_balance: int, lp_supply: int) -> int:
        """Approximate tokens returned for burning LP tokens"""
        return math.estimate_tokens_from_withdraw(lp_amount, pool_balance, lp_supply)

    def validate_deposit(self, params: LiquidityParams) -> ValidationResult:
        return validation.validate_deposit_params(params)

    def validate_withdraw(self, withdraw_amount: int, user_lp_balance: int) -> ValidationResult:
        return validation.validate_withdraw_params(withdraw_amount, user_lp_balance)

    def deposit_fee(self) -> int:
        """Flat deposit fee in lamports"""
        return math.get_deposit_fee()

    def withdrawal_fee(self) -> int:
        """Flat withdrawal fee in lamports"""
        return math.get_withdrawal_fee()
