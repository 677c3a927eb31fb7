"""
Parameter Validation

One validator per operation family. Every validator runs all of its checks
and returns a ValidationResult listing each violation; none of them raise.
Callers check the result before building or submitting anything.
"""

from typing import Sequence

from .constants import (
    FEES,
    NATIVE_DECIMALS,
    MAX_TRANSFER_AMOUNT,
    MAX_RATIO,
    MAX_DONATION_AMOUNT,
    MAX_MESSAGE_BYTES,
    MAX_CONSOLIDATION_POOLS,
    MIN_SLIPPAGE_PERCENT,
    MAX_SLIPPAGE_PERCENT,
)
from .math import from_basis_points
from ..types.common import PubkeyLike, TokenInfo
from ..types.params import PoolCreationParams, LiquidityParams, SwapParams, DonationParams
from ..types.result import ValidationResult


def _address_key(value: PubkeyLike) -> str:
    # Pubkey and base58 string forms compare equal
    return str(value)


def validate_pool_creation_params(params: PoolCreationParams) -> ValidationResult:
    """Check ratios are positive and bounded and the two mints differ"""
    errors = []

    if params.ratio_a <= 0:
        errors.append("Ratio A must be positive")
    if params.ratio_b <= 0:
        errors.append("Ratio B must be positive")

    if _address_key(params.token_a_mint) == _address_key(params.token_b_mint):
        errors.append("Token A and Token B must be different")

    if params.ratio_a >= MAX_RATIO or params.ratio_b >= MAX_RATIO:
        errors.append("Ratios too large (max 10^18)")

    return ValidationResult.from_errors(errors)


def validate_deposit_params(params: LiquidityParams) -> ValidationResult:
    """Check the deposit amount is positive and below the transfer ceiling"""
    errors = []

    if params.deposit_amount <= 0:
        errors.append("Deposit amount must be positive")
    if params.deposit_amount >= MAX_TRANSFER_AMOUNT:
        errors.append("Deposit amount too large")

    return ValidationResult.from_errors(errors)


def validate_withdraw_params(withdraw_amount: int, user_lp_balance: int) -> ValidationResult:
    """
    Check a withdrawal against the holder's LP balance

    Args:
        withdraw_amount: LP tokens to burn
        user_lp_balance: LP tokens currently held

    Returns:
        ValidationResult
    """
    errors = []

    if withdraw_amount <= 0:
        errors.append("Withdraw amount must be positive")
    if withdraw_amount >= MAX_TRANSFER_AMOUNT:
        errors.append("Withdraw amount too large")
    if withdraw_amount > user_lp_balance:
        errors.append("Insufficient LP token balance")

    return ValidationResult.from_errors(errors)


def validate_swap_params(params: SwapParams) -> ValidationResult:
    """
    Check swap amounts and slippage tolerance

    An unset tolerance is not checked here; the config default applies when
    the instruction is built.
    """
    errors = []

    if params.amount_in <= 0:
        errors.append("Input amount must be positive")
    if params.expected_amount_out <= 0:
        errors.append("Expected output amount must be positive")

    tolerance = params.slippage_tolerance
    if tolerance is not None:
        if isinstance(tolerance, bool) or not isinstance(tolerance, int):
            errors.append("Slippage tolerance must be an integer percent")
        elif not MIN_SLIPPAGE_PERCENT <= tolerance <= MAX_SLIPPAGE_PERCENT:
            errors.append("Slippage tolerance must be between 0 and 50 percent")

    if params.amount_in >= MAX_TRANSFER_AMOUNT:
        errors.append("Swap amount too large")

    return ValidationResult.from_errors(errors)


def validate_donation_params(params: DonationParams) -> ValidationResult:
    """Check the donation is within [minimum, 1000 SOL] and the message fits"""
    errors = []

    min_donation = FEES["MIN_DONATION_AMOUNT"]
    if params.amount < min_donation:
        min_sol = from_basis_points(min_donation, NATIVE_DECIMALS).normalize()
        errors.append(f"Minimum donation is {min_sol} SOL")

    if params.amount > MAX_DONATION_AMOUNT:
        errors.append("Donation amount too large (max 1000 SOL)")

    if params.message and len(params.message) > MAX_MESSAGE_BYTES:
        errors.append("Message too long (max 200 characters)")

    return ValidationResult.from_errors(errors)


def validate_consolidation_params(pool_state_pdas: Sequence[PubkeyLike]) -> ValidationResult:
    """Check the pool list holds 1 to 20 distinct pools"""
    errors = []

    if len(pool_state_pdas) == 0:
        errors.append("At least one pool must be specified")
    if len(pool_state_pdas) > MAX_CONSOLIDATION_POOLS:
        errors.append("Maximum 20 pools per consolidation transaction")

    unique = {_address_key(p) for p in pool_state_pdas}
    if len(unique) != len(pool_state_pdas):
        errors.append("Duplicate pools found in consolidation list")

    return ValidationResult.from_errors(errors)


def validate_token_amount(amount: int, token: TokenInfo) -> bool:
    """
    Check an amount is positive and below 10^(decimals + 9)

    The ceiling is one billion whole tokens.
    """
    if amount <= 0:
        return False
    return amount < 10 ** (token.decimals + 9)
