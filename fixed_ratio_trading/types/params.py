"""
Parameter records for instruction builders and validators
"""

from dataclasses import dataclass
from typing import Optional

from .common import PubkeyLike


@dataclass
class PoolCreationParams:
    """
    Parameters for InitializePool

    Attributes:
        token_a_mint: First token mint (any order)
        token_b_mint: Second token mint (any order)
        ratio_a: Ratio for token A in smallest units
        ratio_b: Ratio for token B in smallest units
        user_authority: Pool creator, pays the registration fee
    """
    token_a_mint: PubkeyLike
    token_b_mint: PubkeyLike
    ratio_a: int
    ratio_b: int
    user_authority: PubkeyLike


@dataclass
class LiquidityParams:
    """
    Parameters for Deposit

    Attributes:
        pool_state_pda: Pool state address
        deposit_amount: Amount of the deposit token in smallest units
        deposit_token_mint: Mint being deposited (token A or B)
        user_authority: Depositor
        user_token_account: Depositor's token account for the mint
        user_lp_account: Depositor's LP token account
    """
    pool_state_pda: PubkeyLike
    deposit_amount: int
    deposit_token_mint: PubkeyLike
    user_authority: PubkeyLike
    user_token_account: PubkeyLike
    user_lp_account: PubkeyLike


@dataclass
class SwapParams:
    """
    Parameters for Swap

    Attributes:
        pool_state_pda: Pool state address
        amount_in: Input amount in smallest units
        expected_amount_out: Quoted output before slippage
        input_token_mint: Mint being sold
        user_authority: Swapper
        user_input_account: Token account debited
        user_output_account: Token account credited
        slippage_tolerance: Integer percent in [0, 50]; None uses the config default
    """
    pool_state_pda: PubkeyLike
    amount_in: int
    expected_amount_out: int
    input_token_mint: PubkeyLike
    user_authority: PubkeyLike
    user_input_account: PubkeyLike
    user_output_account: PubkeyLike
    slippage_tolerance: Optional[int] = None


@dataclass
class DonationParams:
    """Parameters for DonateSol"""
    donor: PubkeyLike
    amount: int
    message: str = ""
