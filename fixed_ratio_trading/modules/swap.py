"""
Swap Module

Swap instructions, quotes and slippage bounds. All methods are offline.
"""

import logging
from decimal import Decimal
from typing import Optional, TYPE_CHECKING

from solders.instruction import Instruction

if TYPE_CHECKING:
    from ..client import FixedRatioClient

from ..config import get_config
from ..protocol import instructions, math, validation
from ..types import SwapParams, SwapResult, ValidationResult
from ..types.common import PubkeyLike

logger = logging.getLogger(__name__)


class SwapModule:
    """
    Swap operations

    Provides:
    - expected_output(...): Output at the pool ratio
    - min_amount_out(expected, slippage): Slippage-protected minimum
    - create_instruction(params): Swap instruction

    Usage:
        client = FixedRatioClient()

        out = client.swap.expected_output(amount_in, SOL_MINT, ratio_a, ratio_b, token_a_mint)
        params = SwapParams(pool, amount_in, out, SOL_MINT, user, src, dst, slippage_tolerance=1)
        ix = client.swap.create_instruction(params)
    """

    def __init__(self, client: "FixedRatioClient"):
        """
        Initialize swap module

        Args:
            client: FixedRatioClient instance
        """
        self._client = client

    def create_instruction(self, params: SwapParams) -> Instruction:
        """Build Swap for the client's program"""
        logger.debug(
            f"Swap {params.amount_in} of {params.input_token_mint} in pool {params.pool_state_pda}, "
            f"expecting {params.expected_amount_out}"
        )
        return instructions.create_swap_instruction(params, self._client.program_id)

    def create_with_display_amounts(
        self,
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
    ) -> Instruction:
        """Build Swap from display amounts"""
        return instructions.create_swap_instruction_with_display_amounts(
            pool_state_pda,
            amount_in_display,
            expected_amount_out_display,
            input_token_decimals,
            output_token_decimals,
            input_token_mint,
            user_authority,
            user_input_account,
            user_output_account,
            slippage_tolerance,
            self._client.program_id,
        )

    def expected_output(
        self,
        amount_in: int,
        input_token_mint: PubkeyLike,
        pool_ratio_a: int,
        pool_ratio_b: int,
        token_a_mint: PubkeyLike,
    ) -> int:
        return math.calculate_expected_swap_output(
            amount_in, input_token_mint, pool_ratio_a, pool_ratio_b, token_a_mint
        )

    def with_price_impact(
        self,
        amount_in: int,
        input_token_mint: PubkeyLike,
        pool_balance_a: int,
        pool_balance_b: int,
        token_a_mint: PubkeyLike,
    ) -> SwapResult:
        """Quote against pool balances, with display-only price impact"""
        return math.calculate_swap_with_price_impact(
            amount_in, input_token_mint, pool_balance_a, pool_balance_b, token_a_mint
        )

    def estimate_output_display(
        self,
        amount_in_display: Decimal,
        input_token_decimals: int,
        output_token_decimals: int,
        pool_ratio_a: int,
        pool_ratio_b: int,
        is_input_token_a: bool,
    ) -> Decimal:
        return instructions.estimate_swap_output_display(
            amount_in_display,
            input_token_decimals,
            output_token_decimals,
            pool_ratio_a,
            pool_ratio_b,
            is_input_token_a,
        )

    def min_amount_out(self, expected_amount_out: int, slippage_tolerance: Optional[int] = None) -> int:
        """
        Minimum acceptable output

        Args:
            expected_amount_out: Quoted output
            slippage_tolerance: Integer percent (config default when None)

        Returns:
            Slippage-reduced amount
        """
        if slippage_tolerance is None:
            slippage_tolerance = get_config().trading.default_slippage_percent
            logger.debug(f"Using default slippage tolerance {slippage_tolerance}%")
        return math.apply_slippage(expected_amount_out, slippage_tolerance)

    def validate(self, params: SwapParams) -> ValidationResult:
        return validation.validate_swap_params(params)

    def fee(self) -> int:
        """Flat swap fee in lamports"""
        return math.get_swap_fee()
